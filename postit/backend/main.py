"""
FastAPI Application Entry Point.

Builds the Post-it Board service: one NoteStore per application, shared
by the REST API, the MCP tools and the dashboard.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postit.backend.api import dashboard, health
from postit.backend.api.v1 import router as api_v1_router
from postit.backend.core.config import get_app_config, get_cors_origins
from postit.backend.core.exception_handlers import register_exception_handlers
from postit.backend.core.logging import get_logger, setup_logging
from postit.backend.core.middleware import MCP_SESSION_HEADER, RequestContextMiddleware
from postit.backend.services.note import NoteService
from postit.backend.store.note_store import NoteStore

logger = get_logger(__name__)

_app: FastAPI | None = None


def create_app(store: NoteStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Note store to serve. A fresh one is created when omitted;
            tests pass one wired to a fake clock.
    """
    app_config = get_app_config()
    app_settings = app_config.application
    features = app_config.features

    store = store or NoteStore()

    mcp_app = None
    if features.mcp_enabled:
        from postit.mcp.server import create_mcp_server

        mcp_server = create_mcp_server(
            store,
            name=app_config.mcp.name,
            instructions=app_config.mcp.instructions,
        )
        mcp_app = mcp_server.http_app(path=app_config.mcp.path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        setup_logging()

        logger.info(
            "Application starting",
            extra={
                "app_name": app_settings.name,
                "env": app_settings.environment,
                "mcp_enabled": features.mcp_enabled,
            },
        )

        if features.seed_demo_notes:
            NoteService(store).seed_demo_notes()

        try:
            if mcp_app is not None:
                async with mcp_app.lifespan(app):
                    yield
            else:
                yield
        finally:
            store.shutdown()
            logger.info("Application shutting down")

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.note_store = store

    app.add_middleware(RequestContextMiddleware, log_requests=features.api_request_logging)

    cors_origins = get_cors_origins()
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["content-type", MCP_SESSION_HEADER, "x-request-id", "x-frontend-id"],
            expose_headers=[MCP_SESSION_HEADER, "x-request-id"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    if features.dashboard_enabled:
        app.include_router(dashboard.build_router(f"{app_settings.api_prefix}/notes"))

    # Mounted last: the MCP app answers only its own path, after every route above
    if mcp_app is not None:
        app.mount("/", mcp_app)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    This function creates the app on first call and caches it.
    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn postit.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
