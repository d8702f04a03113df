"""
CLI Commands.

Organized by feature area.
"""

from postit.cli.commands.health import app as health_app
from postit.cli.commands.notes import app as notes_app

__all__ = [
    "health_app",
    "notes_app",
]
