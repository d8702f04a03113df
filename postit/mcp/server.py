"""
MCP tool server for the shared board.

The server is built around a store it does not own: `create_mcp_server`
is called by the application factory with the same NoteStore the REST
API uses, so agents and the dashboard see one board.

Tool results are small JSON objects agents can branch on:
{"ok": true, "postit": {...}}, {"ok": true, "postits": [...]},
{"ok": existed} or {"ok": false, "error": "Not found"}. The snapshot tool
returns markdown text.
"""

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from postit.backend.core.exceptions import NotFoundError
from postit.backend.core.logging import get_logger, log_with_source
from postit.backend.models.note import Note
from postit.backend.schemas.note import (
    AUTHOR_MAX,
    DESCRIPTION_MAX,
    TITLE_MAX,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from postit.backend.services.note import NoteService
from postit.backend.store.note_store import NoteStore

logger = get_logger(__name__)

DEFAULT_NAME = "Postit Board MCP"
DEFAULT_INSTRUCTIONS = "Shared post-it board. Notes expire 10 minutes after creation."

NOT_FOUND = {"ok": False, "error": "Not found"}

Title = Annotated[str, Field(description="Title of the post-it", max_length=TITLE_MAX)]
Description = Annotated[str, Field(description="Body of the post-it", max_length=DESCRIPTION_MAX)]
Author = Annotated[str, Field(description="Who wrote the post-it", max_length=AUTHOR_MAX)]
NoteId = Annotated[str, Field(description="Id of the post-it", min_length=1)]


def _validated(schema: type[BaseModel], **fields: Any) -> Any:
    """Build a request schema, turning validation failures into a ToolError."""
    try:
        return schema(**fields)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ToolError(f"Invalid input: {problems}") from exc


def _dump(note: Note) -> dict[str, Any]:
    return NoteResponse.model_validate(note).model_dump(mode="json")


def create_mcp_server(
    store: NoteStore,
    name: str = DEFAULT_NAME,
    instructions: str = DEFAULT_INSTRUCTIONS,
) -> FastMCP:
    """Build a FastMCP server whose tools operate on `store`."""
    mcp = FastMCP(name=name, instructions=instructions)
    service = NoteService(store)

    def _called(tool: str, **context: Any) -> None:
        log_with_source(logger, "mcp", "info", "Tool called", tool=tool, **context)

    @mcp.tool(
        name="createPostit",
        description="Creates a new post-it note on the shared board (expires in 10 minutes).",
    )
    def create_postit(title: Title, description: Description, author: Author) -> dict[str, Any]:
        _called("createPostit")
        data = _validated(NoteCreate, title=title, description=description, author=author)
        note = service.create_note(data)
        return {"ok": True, "postit": _dump(note)}

    @mcp.tool(
        name="listPostits",
        description="Lists all non-expired post-its (newest first).",
    )
    def list_postits() -> dict[str, Any]:
        _called("listPostits")
        return {"ok": True, "postits": [_dump(note) for note in service.list_notes()]}

    @mcp.tool(
        name="getPostit",
        description="Gets a single post-it by id.",
    )
    def get_postit(id: NoteId) -> dict[str, Any]:
        _called("getPostit", note_id=id)
        try:
            note = service.get_note(id)
        except NotFoundError:
            return NOT_FOUND
        return {"ok": True, "postit": _dump(note)}

    @mcp.tool(
        name="updatePostit",
        description="Updates title/description/author of a post-it by id (keeps original expiry).",
    )
    def update_postit(
        id: NoteId,
        title: Title | None = None,
        description: Description | None = None,
        author: Author | None = None,
    ) -> dict[str, Any]:
        _called("updatePostit", note_id=id)
        data = _validated(NoteUpdate, title=title, description=description, author=author)
        try:
            note = service.update_note(id, data)
        except NotFoundError:
            return NOT_FOUND
        return {"ok": True, "postit": _dump(note)}

    @mcp.tool(
        name="deletePostit",
        description="Deletes a post-it by id.",
    )
    def delete_postit(id: NoteId) -> dict[str, Any]:
        _called("deletePostit", note_id=id)
        return {"ok": service.delete_note(id)}

    @mcp.tool(
        name="clearBoard",
        description="Deletes all post-its immediately.",
    )
    def clear_board() -> dict[str, Any]:
        _called("clearBoard")
        service.clear_board()
        return {"ok": True}

    @mcp.tool(
        name="getBoardSnapshot",
        description="Returns a compact markdown snapshot of the board (useful as agent context).",
    )
    def get_board_snapshot() -> str:
        _called("getBoardSnapshot")
        return service.board_snapshot()

    return mcp
