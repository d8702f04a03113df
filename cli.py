#!/usr/bin/env python3
"""
Post-it Board CLI.

Command-line client for a running board server. Start the server first
with `python run.py --action server`.

Usage:
    python cli.py --help

    # Board
    python cli.py notes list
    python cli.py notes show 1a2b3c4d
    python cli.py notes create "Standup" "9am sync" --author Ana
    python cli.py notes update 1a2b3c4d --description "9:30am sync"
    python cli.py notes delete 1a2b3c4d
    python cli.py notes clear --yes
    python cli.py notes snapshot

    # Health
    python cli.py health ping
    python cli.py health status -d

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from postit.backend.core.logging import setup_logging
from postit.cli.commands import health_app, notes_app

app = typer.Typer(
    name="cli",
    help="Post-it Board CLI - pin, list and clear notes on a running server.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output (INFO level logging)"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug mode (DEBUG level logging)"),
) -> None:
    """
    Post-it Board CLI.

    Built with Typer for commands and Rich for formatted output.
    """
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")


if __name__ == "__main__":
    app()
