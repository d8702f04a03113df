"""
Notes API Endpoints.

REST API endpoints for the shared board. Every note expires ten minutes
after it was pinned, whatever happens to it in between.
"""

from typing import Annotated

from fastapi import APIRouter, Path

from postit.backend.core.dependencies import NoteServiceDep, RequestId
from postit.backend.schemas.base import ApiResponse, ResponseMetadata
from postit.backend.schemas.note import (
    BoardClearResponse,
    BoardSnapshotResponse,
    NoteBoardResponse,
    NoteCreate,
    NoteDeleteResponse,
    NoteResponse,
    NoteUpdate,
)
from postit.backend.store.note_store import NOTE_TTL

router = APIRouter()

TTL_MINUTES = int(NOTE_TTL.total_seconds() // 60)

NoteId = Annotated[str, Path(min_length=1, description="Note identifier")]


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Pin a note",
    description="Create a note on the shared board. It expires in 10 minutes.",
)
async def create_note(
    data: NoteCreate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = service.create_note(data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[NoteBoardResponse],
    summary="List notes",
    description="All live notes, newest first.",
)
async def list_notes(
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteBoardResponse]:
    """List the board."""
    notes = service.list_notes()
    board = NoteBoardResponse(
        notes=[NoteResponse.model_validate(note) for note in notes],
        ttl_minutes=TTL_MINUTES,
    )
    return ApiResponse(data=board, metadata=ResponseMetadata(request_id=request_id))


@router.delete(
    "",
    response_model=ApiResponse[BoardClearResponse],
    summary="Clear the board",
    description="Delete every note immediately.",
)
async def clear_board(
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[BoardClearResponse]:
    """Clear the board."""
    removed = service.clear_board()
    return ApiResponse(
        data=BoardClearResponse(cleared=removed),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/snapshot",
    response_model=ApiResponse[BoardSnapshotResponse],
    summary="Board snapshot",
    description="Compact markdown listing of the board, handy as agent context.",
)
async def board_snapshot(
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[BoardSnapshotResponse]:
    """Render the board as markdown."""
    return ApiResponse(
        data=BoardSnapshotResponse(text=service.board_snapshot()),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single live note by ID.",
)
async def get_note(
    service: NoteServiceDep,
    request_id: RequestId,
    note_id: NoteId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = service.get_note(note_id)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update title, description or author. Only provided fields change; the expiry time never does.",
)
async def update_note(
    data: NoteUpdate,
    service: NoteServiceDep,
    request_id: RequestId,
    note_id: NoteId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    note = service.update_note(note_id, data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[NoteDeleteResponse],
    summary="Delete a note",
    description="Delete a note. Deleting an unknown or expired note is not an error.",
)
async def delete_note(
    service: NoteServiceDep,
    request_id: RequestId,
    note_id: NoteId,
) -> ApiResponse[NoteDeleteResponse]:
    """Delete a note."""
    existed = service.delete_note(note_id)
    return ApiResponse(
        data=NoteDeleteResponse(deleted=existed),
        metadata=ResponseMetadata(request_id=request_id),
    )
