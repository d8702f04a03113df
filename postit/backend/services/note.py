"""
Note Service.

Business logic layer for the board. Takes validated schemas from the
request layers, drives the note store, and turns its NotFound signals
into NotFoundError where the caller expects a note back.
"""

from postit.backend.core.exceptions import NotFoundError
from postit.backend.models.note import Note
from postit.backend.schemas.note import NoteCreate, NoteUpdate
from postit.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Stateless apart from the store reference, so request handlers may
    build one per call.
    """

    def create_note(self, data: NoteCreate) -> Note:
        """
        Pin a new note.

        Args:
            data: Note creation data

        Returns:
            Created note
        """
        self._log_operation("Creating note", title=data.title, author=data.author)
        note = self.store.create(
            title=data.title,
            description=data.description,
            author=data.author,
        )
        self._log_debug("Note created", note_id=note.id)
        return note

    def list_notes(self) -> list[Note]:
        """Live notes, newest first."""
        return self.store.list_notes()

    def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If the note does not exist or has expired
        """
        note = self.store.get(note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an existing note. Its expiry time is left unchanged.

        An update with no fields still touches `updated_at` and re-arms the
        expiry action.

        Args:
            note_id: Note ID to update
            data: Update data (only fields that were set are applied)

        Returns:
            Updated note

        Raises:
            NotFoundError: If the note does not exist or has expired
        """
        update_data = data.model_dump(exclude_none=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        note = self.store.update(note_id, **update_data)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    def delete_note(self, note_id: str) -> bool:
        """
        Delete a note.

        Returns:
            Whether the note existed
        """
        self._log_operation("Deleting note", note_id=note_id)
        existed = self.store.delete(note_id)
        if not existed:
            self._log_debug("Delete of unknown note", note_id=note_id)
        return existed

    def clear_board(self) -> int:
        """Remove every note. Returns how many were removed."""
        removed = self.store.clear()
        self._log_operation("Board cleared", removed=removed)
        return removed

    def board_snapshot(self) -> str:
        """Markdown listing of the board."""
        return self.store.snapshot()

    def seed_demo_notes(self) -> list[Note]:
        """Pin the welcome notes shown on a fresh board. They expire like any other note."""
        notes = [self.create_note(data) for data in DEMO_NOTES]
        self._log_operation("Seeded demo notes", count=len(notes))
        return notes


DEMO_NOTES = [
    NoteCreate(
        title="Welcome!",
        description="This is your first post-it. You can create, update, and delete these notes.",
        author="MCP Server",
    ),
    NoteCreate(
        title="MCP Tools",
        description="Use the MCP tools like `createPostit` or `listPostits` to interact with this board.",
        author="MCP Server",
    ),
    NoteCreate(
        title="Collaboration",
        description="Anyone with the URL can see your changes in real-time!",
        author="MCP Server",
    ),
]
