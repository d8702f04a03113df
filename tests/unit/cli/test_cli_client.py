"""Unit tests for the CLI HTTP client."""

import httpx
import pytest

from postit.backend.core.config import get_app_config, get_settings
from postit.cli.client import APIClient, APIError, unwrap


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    for name in ("HOST", "PORT", "CORS_ORIGIN"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


def _request() -> httpx.Request:
    return httpx.Request("GET", "http://test/api/v1/notes")


class TestUnwrap:
    """Tests for envelope unwrapping."""

    def test_success_returns_data(self):
        response = httpx.Response(200, json={"success": True, "data": {"cleared": 2}}, request=_request())

        assert unwrap(response) == {"cleared": 2}

    def test_error_envelope_raises(self):
        body = {"success": False, "data": None, "error": {"code": "RES_NOT_FOUND", "message": "Note x not found"}}
        response = httpx.Response(404, json=body, request=_request())

        with pytest.raises(APIError) as exc_info:
            unwrap(response)

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "RES_NOT_FOUND"
        assert exc_info.value.message == "Note x not found"

    def test_non_envelope_error(self):
        response = httpx.Response(502, text="Bad Gateway", request=_request())

        with pytest.raises(APIError) as exc_info:
            unwrap(response)

        assert exc_info.value.code == "HTTP_502"
        assert exc_info.value.message == "Bad Gateway"


class TestAPIClient:
    """Tests for APIClient configuration and requests."""

    def test_defaults_from_config(self):
        client = APIClient()

        assert client.base_url == "http://127.0.0.1:4000"
        assert client.timeout == 10.0
        assert client.api_prefix == "/api/v1"

    def test_port_override_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "4100")

        assert APIClient().base_url == "http://127.0.0.1:4100"

    def test_explicit_base_url(self):
        client = APIClient(base_url="http://board.test/", timeout=3)

        assert client.base_url == "http://board.test"
        assert client.timeout == 3

    def test_notes_path(self):
        client = APIClient(base_url="http://test")

        assert client.notes_path() == "/api/v1/notes"
        assert client.notes_path("abcd1234") == "/api/v1/notes/abcd1234"

    @pytest.mark.asyncio
    async def test_sends_frontend_header(self):
        client = APIClient(base_url="http://test")

        http_client = await client._get_client()
        try:
            assert http_client.headers["X-Frontend-ID"] == "cli"
            assert str(http_client.base_url) == "http://test"
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_request_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = APIClient(base_url="http://test")
        client._client = httpx.AsyncClient(base_url="http://test", transport=httpx.MockTransport(handler))

        with pytest.raises(httpx.ConnectError):
            await client.get("/health")

        await client.close()
