"""
Note Schemas.

Pydantic schemas for note request/response validation. Request schemas
trim whitespace before checking lengths, so "   " is rejected as empty.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from postit.backend.core.utils import utc_now

TITLE_MAX = 80
DESCRIPTION_MAX = 500
AUTHOR_MAX = 40


class NoteCreate(BaseModel):
    """Schema for pinning a new note."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX,
        description="Note title",
        examples=["Standup"],
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=DESCRIPTION_MAX,
        description="Note body",
        examples=["9am sync"],
    )
    author: str = Field(
        ...,
        min_length=1,
        max_length=AUTHOR_MAX,
        description="Who wrote the note",
        examples=["Ana"],
    )


class NoteUpdate(BaseModel):
    """Schema for a partial update. Omitted fields keep their current value."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX,
        description="Note title",
    )
    description: str | None = Field(
        default=None,
        min_length=1,
        max_length=DESCRIPTION_MAX,
        description="Note body",
    )
    author: str | None = Field(
        default=None,
        min_length=1,
        max_length=AUTHOR_MAX,
        description="Who wrote the note",
    )


class NoteResponse(BaseModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note identifier")
    title: str = Field(description="Note title")
    description: str = Field(description="Note body")
    author: str = Field(description="Who wrote the note")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")
    expires_at: datetime = Field(description="Expiry timestamp (UTC), fixed at creation")

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def expires_in_seconds(self) -> int:
        """Seconds left before the note disappears."""
        return max(0, int((self.expires_at - utc_now()).total_seconds()))


class NoteBoardResponse(BaseModel):
    """All live notes, newest first."""

    notes: list[NoteResponse]
    ttl_minutes: int


class NoteDeleteResponse(BaseModel):
    deleted: bool


class BoardClearResponse(BaseModel):
    cleared: int


class BoardSnapshotResponse(BaseModel):
    text: str = Field(description="Markdown listing of the board")
