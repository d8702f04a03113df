"""
CLI Client Module.

Command-line client for a running Post-it Board server, built with Typer
and Rich.

Architecture:
- CLI is a thin presentation layer over the notes REST API
- All board logic (validation, expiry) lives in the backend
- Sends X-Frontend-ID: cli header for log routing

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes create "Standup" "9am sync" --author Ana
    python cli.py health status
"""
