"""
Unit Tests for CLI Commands.

Commands run through Typer's CliRunner against an APIClient whose HTTP
transport is an httpx.MockTransport standing in for the server.
"""

from unittest.mock import patch

import httpx
from typer.testing import CliRunner

from cli import app
from postit.cli.client import APIClient

runner = CliRunner()

NOTE = {
    "id": "abcd1234",
    "title": "Standup",
    "description": "9am sync",
    "author": "Ana",
    "created_at": "2024-05-01T09:00:00",
    "updated_at": "2024-05-01T09:00:00",
    "expires_at": "2024-05-01T09:10:00",
    "expires_in_seconds": 540,
}


def ok(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"success": True, "data": data, "error": None, "metadata": {}})


def error(status_code: int, code: str, message: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"success": False, "data": None, "error": {"code": code, "message": message}, "metadata": {}},
    )


def fake_backend(handler) -> APIClient:
    """APIClient wired to `handler` instead of a network connection."""
    client = APIClient(base_url="http://test", timeout=1)
    client._client = httpx.AsyncClient(
        base_url="http://test",
        transport=httpx.MockTransport(handler),
        headers={"X-Frontend-ID": "cli"},
    )
    return client


def invoke(module: str, handler, args: list[str], **kwargs):
    with patch(f"postit.cli.commands.{module}.get_api_client", return_value=fake_backend(handler)):
        return runner.invoke(app, args, **kwargs)


class TestMainApp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Post-it Board CLI" in result.stdout

    def test_notes_help_lists_commands(self):
        result = runner.invoke(app, ["notes", "--help"])

        assert result.exit_code == 0
        for command in ("list", "create", "update", "delete", "clear", "snapshot"):
            assert command in result.stdout


class TestNotesList:
    def test_list_shows_table(self):
        seen = []

        def handler(request):
            seen.append(request)
            return ok({"notes": [NOTE], "ttl_minutes": 10})

        result = invoke("notes", handler, ["notes", "list"])

        assert result.exit_code == 0
        assert "abcd1234" in result.stdout
        assert "Standup" in result.stdout
        assert "9m" in result.stdout
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/v1/notes"
        assert seen[0].headers["X-Frontend-ID"] == "cli"

    def test_list_empty_board(self):
        result = invoke("notes", lambda r: ok({"notes": [], "ttl_minutes": 10}), ["notes", "list"])

        assert result.exit_code == 0
        assert "The board is empty" in result.stdout

    def test_backend_down(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        result = invoke("notes", handler, ["notes", "list"])

        assert result.exit_code == 1
        assert "Cannot connect to backend" in result.stdout


class TestNotesShow:
    def test_show_missing_note(self):
        def handler(request):
            return error(404, "RES_NOT_FOUND", "Note nope not found")

        result = invoke("notes", handler, ["notes", "show", "nope"])

        assert result.exit_code == 1
        assert "Note nope not found" in result.stdout


class TestNotesCreate:
    def test_create_posts_fields(self):
        bodies = []

        def handler(request):
            bodies.append(request.read())
            return ok(NOTE, status_code=201)

        result = invoke("notes", handler, ["notes", "create", "Standup", "9am sync", "--author", "Ana"])

        assert result.exit_code == 0
        assert "Pinned abcd1234" in result.stdout
        assert b'"author":"Ana"' in bodies[0].replace(b" ", b"")

    def test_create_rejected(self):
        def handler(request):
            return error(422, "VAL_REQUEST_INVALID", "Request validation failed")

        result = invoke("notes", handler, ["notes", "create", "x", "y", "-a", "Ana"])

        assert result.exit_code == 1
        assert "Error (422)" in result.stdout


class TestNotesUpdate:
    def test_update_requires_a_field(self):
        result = runner.invoke(app, ["notes", "update", "abcd1234"])

        assert result.exit_code == 1
        assert "Nothing to update" in result.stdout

    def test_update_sends_only_given_fields(self):
        seen = []

        def handler(request):
            seen.append(request)
            return ok({**NOTE, "description": "9:30am sync"})

        result = invoke("notes", handler, ["notes", "update", "abcd1234", "-m", "9:30am sync"])

        assert result.exit_code == 0
        assert "Updated abcd1234" in result.stdout
        assert seen[0].method == "PATCH"
        assert seen[0].url.path == "/api/v1/notes/abcd1234"
        assert seen[0].read().replace(b" ", b"") == b'{"description":"9:30amsync"}'


class TestNotesDelete:
    def test_delete_existing(self):
        result = invoke("notes", lambda r: ok({"deleted": True}), ["notes", "delete", "abcd1234"])

        assert result.exit_code == 0
        assert "Deleted abcd1234" in result.stdout

    def test_delete_missing_is_not_an_error(self):
        result = invoke("notes", lambda r: ok({"deleted": False}), ["notes", "delete", "abcd1234"])

        assert result.exit_code == 0
        assert "was not on the board" in result.stdout


class TestNotesClear:
    def test_clear_confirmed(self):
        seen = []

        def handler(request):
            seen.append(request)
            return ok({"cleared": 2})

        result = invoke("notes", handler, ["notes", "clear"], input="y\n")

        assert result.exit_code == 0
        assert "Cleared 2 note(s)" in result.stdout
        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/api/v1/notes"

    def test_clear_aborted(self):
        seen = []

        result = invoke("notes", lambda r: seen.append(r), ["notes", "clear"], input="n\n")

        assert result.exit_code == 1
        assert seen == []


class TestNotesSnapshot:
    def test_snapshot_raw(self):
        text = "# Post-it Board\n_Empty_"

        result = invoke("notes", lambda r: ok({"text": text}), ["notes", "snapshot", "--raw"])

        assert result.exit_code == 0
        assert text in result.stdout


class TestHealthCommands:
    def test_status_healthy(self):
        body = {"status": "healthy", "checks": {"store": {"status": "healthy"}}}

        result = invoke("health", lambda r: httpx.Response(200, json=body), ["health", "status"])

        assert result.exit_code == 0
        assert "HEALTHY" in result.stdout

    def test_status_detailed(self):
        body = {
            "status": "healthy",
            "application": {"name": "Post-it Board", "version": "0.1.0", "env": "test"},
            "checks": {"store": {"status": "healthy", "latency_ms": 0, "notes": 3}},
        }

        result = invoke("health", lambda r: httpx.Response(200, json=body), ["health", "status", "-d"])

        assert result.exit_code == 0
        assert "notes: 3" in result.stdout
        assert "Post-it Board" in result.stdout

    def test_status_not_ready(self):
        body = {"detail": {"status": "unhealthy", "checks": {"store": {"status": "unhealthy"}}}}

        result = invoke("health", lambda r: httpx.Response(503, json=body), ["health", "status"])

        assert result.exit_code == 1
        assert "UNHEALTHY" in result.stdout

    def test_ping(self):
        result = invoke("health", lambda r: httpx.Response(200, json={"status": "healthy"}), ["health", "ping"])

        assert result.exit_code == 0
        assert "Backend is reachable" in result.stdout
