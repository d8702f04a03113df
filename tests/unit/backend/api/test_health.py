"""
Unit Tests for Health Check Helpers.

Endpoint behaviour is covered in the integration suite; these tests
exercise the store probe directly.
"""

from unittest.mock import MagicMock

import pytest

from postit.backend.api.health import check_store


class TestCheckStore:
    """Tests for check_store."""

    @pytest.mark.asyncio
    async def test_healthy_store_reports_counts(self, store):
        store.create("Standup", "9am sync", "Ana")

        result = await check_store(store)

        assert result["status"] == "healthy"
        assert result["notes"] == 1
        assert result["pending_expiries"] == 1
        assert result["ttl_seconds"] == 600
        assert "latency_ms" in result

    @pytest.mark.asyncio
    async def test_failing_store_reports_unhealthy(self):
        broken = MagicMock()
        broken.stats.side_effect = RuntimeError("lock poisoned")

        result = await check_store(broken)

        assert result == {"status": "unhealthy", "error": "lock poisoned"}
