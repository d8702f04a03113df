"""
Note Model.

The only entity on the board: a short post-it that expires a fixed time
after creation.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Note:
    """
    Post-it note.

    Instances are immutable snapshots; the store replaces the whole value
    on update, so a note handed to a caller never changes underneath it.
    `expires_at` is fixed at creation and survives every update.
    """

    id: str
    title: str
    description: str
    author: str
    created_at: datetime
    updated_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
