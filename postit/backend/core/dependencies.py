"""
FastAPI Dependencies.

Shared dependencies for request handling. The note store is owned by the
application (app.state.note_store); handlers reach it only through here.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Request

from postit.backend.services.note import NoteService
from postit.backend.store.note_store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    """Return the application's note store."""
    return request.app.state.note_store


NoteStoreDep = Annotated[NoteStore, Depends(get_note_store)]


def get_note_service(store: NoteStoreDep) -> NoteService:
    """Build a NoteService over the application's store."""
    return NoteService(store)


NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]


async def get_request_id(request: Request) -> str:
    """
    Request ID for response metadata.

    Prefers the ID assigned by RequestContextMiddleware so the envelope and
    the X-Request-ID header agree, then the incoming header.
    """
    return (
        getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id")
        or str(uuid.uuid4())
    )


RequestId = Annotated[str, Depends(get_request_id)]
