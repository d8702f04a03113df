"""
Board Dashboard.

A single self-contained page that shows the live board. It polls the
notes API every two seconds and has no state of its own.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

POLL_INTERVAL_MS = 2000

_PAGE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>Post-it Board</title>
  <style>
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body {
      font-family: system-ui, sans-serif;
      background: linear-gradient(135deg, #b8956a 0%, #9d7d54 100%);
      min-height: 100vh;
    }
    header {
      background: rgba(255, 255, 255, 0.95);
      border-bottom: 3px solid #9d7d54;
      padding: 16px 24px;
      display: flex;
      justify-content: space-between;
      align-items: baseline;
    }
    header h1 { font-size: 1.4rem; }
    header small { color: #666; }
    #board {
      display: grid;
      grid-template-columns: repeat(auto-fill, minmax(220px, 1fr));
      gap: 24px;
      padding: 24px;
    }
    .note {
      padding: 16px;
      min-height: 180px;
      box-shadow: 0 6px 14px rgba(0, 0, 0, 0.2);
      display: flex;
      flex-direction: column;
      gap: 8px;
    }
    .note:nth-child(5n+1) { background: #fef68a; transform: rotate(-1deg); }
    .note:nth-child(5n+2) { background: #ffb6d9; transform: rotate(1deg); }
    .note:nth-child(5n+3) { background: #a8d8ff; transform: rotate(-0.5deg); }
    .note:nth-child(5n+4) { background: #b8f5cd; transform: rotate(0.8deg); }
    .note:nth-child(5n+5) { background: #ffc896; transform: rotate(-1.2deg); }
    .note h2 { font-size: 1.1rem; }
    .note p { flex: 1; white-space: pre-wrap; word-break: break-word; }
    .note footer { display: flex; justify-content: space-between; font-size: 0.8rem; color: #444; }
    .empty { color: #fff; font-size: 1.2rem; padding: 48px; text-align: center; grid-column: 1 / -1; }
  </style>
</head>
<body>
  <header>
    <h1>Post-it Board</h1>
    <small id="status">loading...</small>
  </header>
  <main id="board"></main>
  <script>
    const board = document.getElementById("board");
    const status = document.getElementById("status");

    function el(tag, cls, text) {
      const node = document.createElement(tag);
      if (cls) node.className = cls;
      if (text !== undefined) node.textContent = text;
      return node;
    }

    async function refresh() {
      try {
        const r = await fetch("__NOTES_URL__", { headers: { "X-Frontend-ID": "web" } });
        const body = await r.json();
        const notes = body.data.notes;
        board.replaceChildren();
        if (notes.length === 0) {
          board.appendChild(el("div", "empty", "No post-its yet. Notes vanish "
            + body.data.ttl_minutes + " minutes after they are pinned."));
        }
        for (const n of notes) {
          const card = el("article", "note");
          card.appendChild(el("h2", null, n.title));
          card.appendChild(el("p", null, n.description));
          const foot = el("footer");
          foot.appendChild(el("span", null, "by " + n.author));
          foot.appendChild(el("span", null, Math.ceil(n.expires_in_seconds / 60) + "m left"));
          card.appendChild(foot);
          board.appendChild(card);
        }
        status.textContent = notes.length + " note(s), updated " + new Date().toLocaleTimeString();
      } catch (err) {
        status.textContent = "refresh failed";
        console.error("Failed to refresh:", err);
      }
    }

    refresh();
    setInterval(refresh, __POLL_MS__);
  </script>
</body>
</html>
"""


def render_dashboard(notes_url: str) -> str:
    """Fill in the notes endpoint and poll interval."""
    return _PAGE.replace("__NOTES_URL__", notes_url).replace("__POLL_MS__", str(POLL_INTERVAL_MS))


def build_router(notes_url: str) -> APIRouter:
    """Router serving the dashboard at `/`, polling `notes_url`."""
    page = render_dashboard(notes_url)
    dashboard = APIRouter()

    @dashboard.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def board_page() -> HTMLResponse:
        return HTMLResponse(page)

    return dashboard
