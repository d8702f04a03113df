"""
Board Commands.

Pin, edit and remove notes on a running server's board.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

import httpx
import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from postit.cli.client import APIClient, APIError, get_api_client, unwrap

app = typer.Typer(help="Read and edit the shared board")
console = Console()


def _run(action: Callable[[APIClient], Awaitable[Any]]) -> Any:
    """Run one async call against the backend, turning failures into exit code 1."""

    async def _call() -> Any:
        client = get_api_client()
        try:
            return await action(client)
        finally:
            await client.close()

    try:
        return asyncio.run(_call())
    except APIError as e:
        console.print(f"[red]Error ({e.status_code}): {e.message}[/red]")
        raise typer.Exit(1)
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python run.py --action server[/dim]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _minutes_left(note: dict[str, Any]) -> str:
    return f"{-(-note['expires_in_seconds'] // 60)}m"


def _short_time(value: str) -> str:
    return datetime.fromisoformat(value).strftime("%H:%M:%S")


def _print_note(note: dict[str, Any]) -> None:
    console.print(f"[bold]{note['title']}[/bold] [dim]({note['id']})[/dim]")
    console.print(note["description"])
    console.print(
        f"[dim]by {note['author']}, pinned {_short_time(note['created_at'])}, "
        f"expires in ~{_minutes_left(note)}[/dim]"
    )


@app.command("list")
def list_notes() -> None:
    """
    Show every live note, newest first.

    Examples:
        cli.py notes list
    """

    async def action(client: APIClient) -> Any:
        return unwrap(await client.get(client.notes_path()))

    board = _run(action)
    notes = board["notes"]

    if not notes:
        console.print(f"[dim]The board is empty. Notes last {board['ttl_minutes']} minutes.[/dim]")
        return

    table = Table(title=f"Post-it Board ({len(notes)})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Author")
    table.add_column("Expires in", justify="right")

    for note in notes:
        table.add_row(
            note["id"],
            note["title"],
            note["description"],
            note["author"],
            _minutes_left(note),
        )

    console.print(table)


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Show one note.

    Examples:
        cli.py notes show 1a2b3c4d
    """

    async def action(client: APIClient) -> Any:
        return unwrap(await client.get(client.notes_path(note_id)))

    _print_note(_run(action))


@app.command()
def create(
    title: str = typer.Argument(..., help="Note title (max 80 chars)"),
    description: str = typer.Argument(..., help="Note body (max 500 chars)"),
    author: str = typer.Option(..., "--author", "-a", help="Who is pinning the note (max 40 chars)"),
) -> None:
    """
    Pin a new note. It disappears ten minutes later.

    Examples:
        cli.py notes create "Standup" "9am sync" --author Ana
    """
    payload = {"title": title, "description": description, "author": author}

    async def action(client: APIClient) -> Any:
        return unwrap(await client.post(client.notes_path(), json=payload))

    note = _run(action)
    console.print(f"[green]✓ Pinned {note['id']}[/green]")
    _print_note(note)


@app.command()
def update(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(None, "--description", "-m", help="New body"),
    author: str | None = typer.Option(None, "--author", "-a", help="New author"),
) -> None:
    """
    Change fields of a note. Its expiry time stays the same.

    Examples:
        cli.py notes update 1a2b3c4d --description "9:30am sync"
    """
    payload = {
        name: value
        for name, value in (("title", title), ("description", description), ("author", author))
        if value is not None
    }
    if not payload:
        console.print("[yellow]Nothing to update. Pass --title, --description or --author.[/yellow]")
        raise typer.Exit(1)

    async def action(client: APIClient) -> Any:
        return unwrap(await client.patch(client.notes_path(note_id), json=payload))

    note = _run(action)
    console.print(f"[green]✓ Updated {note['id']}[/green]")
    _print_note(note)


@app.command()
def delete(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Remove a note. Removing a missing note is not an error.

    Examples:
        cli.py notes delete 1a2b3c4d
    """

    async def action(client: APIClient) -> Any:
        return unwrap(await client.delete(client.notes_path(note_id)))

    result = _run(action)
    if result["deleted"]:
        console.print(f"[green]✓ Deleted {note_id}[/green]")
    else:
        console.print(f"[dim]{note_id} was not on the board[/dim]")


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Remove every note from the board.

    Examples:
        cli.py notes clear --yes
    """
    if not yes:
        typer.confirm("Remove every note from the board?", abort=True)

    async def action(client: APIClient) -> Any:
        return unwrap(await client.delete(client.notes_path()))

    result = _run(action)
    console.print(f"[green]✓ Cleared {result['cleared']} note(s)[/green]")


@app.command()
def snapshot(
    raw: bool = typer.Option(False, "--raw", help="Print the markdown source"),
) -> None:
    """
    Print the board as markdown, the same text agents receive.

    Examples:
        cli.py notes snapshot
        cli.py notes snapshot --raw > board.md
    """

    async def action(client: APIClient) -> Any:
        return unwrap(await client.get(f"{client.notes_path()}/snapshot"))

    text = _run(action)["text"]
    if raw:
        typer.echo(text)
    else:
        console.print(Markdown(text))
