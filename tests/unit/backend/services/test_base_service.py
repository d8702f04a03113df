"""Unit tests for BaseService."""

from unittest.mock import MagicMock, patch

from postit.backend.services.base import BaseService


class TestBaseService:
    def test_store_property(self):
        store = MagicMock()

        assert BaseService(store).store is store

    def test_log_operation_includes_service_name(self):
        mock_logger = MagicMock()
        with patch("postit.backend.services.base.get_logger", return_value=mock_logger):
            service = BaseService(MagicMock())

        service._log_operation("Board cleared", removed=3)

        mock_logger.info.assert_called_once_with(
            "Board cleared",
            extra={"service": "BaseService", "removed": 3},
        )

    def test_log_debug(self):
        mock_logger = MagicMock()
        with patch("postit.backend.services.base.get_logger", return_value=mock_logger):
            service = BaseService(MagicMock())

        service._log_debug("Note created", note_id="abcd1234")

        mock_logger.debug.assert_called_once_with(
            "Note created",
            extra={"service": "BaseService", "note_id": "abcd1234"},
        )
