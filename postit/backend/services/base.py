"""
Base Service.

Base class for all services providing common patterns for business logic.
Services sit between the request layers (REST, MCP) and the note store:
they own logging of operations and translate store signals into
application exceptions.

Usage:
    from postit.backend.services.base import BaseService

    class BoardService(BaseService):
        def count(self) -> int:
            self._log_debug("Counting notes")
            return self.store.count()
"""

from typing import Any

from postit.backend.core.logging import get_logger
from postit.backend.store.note_store import NoteStore


class BaseService:
    """
    Base class for all services.

    Provides:
    - Access to the shared note store
    - Logging context

    Subclasses should call super().__init__(store) in their __init__.
    """

    def __init__(self, store: NoteStore) -> None:
        """
        Initialize the service with the process-wide note store.

        Args:
            store: The note store owned by the application
        """
        self._store = store
        self._logger = get_logger(self.__class__.__module__)

    @property
    def store(self) -> NoteStore:
        """Get the note store."""
        return self._store

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
