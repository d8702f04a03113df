"""
HTTP Client for CLI.

Async client for the board's REST API. Every request carries
X-Frontend-ID: cli so server logs can tell CLI traffic apart.
"""

from typing import Any

import httpx

from postit.backend.core.config import get_app_config, get_server_base_url
from postit.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class APIError(Exception):
    """The server answered with an error envelope."""

    def __init__(self, status_code: int, code: str, message: str) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


def unwrap(response: httpx.Response) -> Any:
    """
    Return the `data` of a success envelope.

    Raises:
        APIError: For any non-2xx response.
    """
    if response.is_success:
        return response.json()["data"]

    try:
        error = response.json()["error"]
        code, message = error["code"], error["message"]
    except (ValueError, KeyError, TypeError):
        code, message = f"HTTP_{response.status_code}", response.text or response.reason_phrase
    raise APIError(response.status_code, code, message)


class APIClient:
    """
    HTTP client for backend API communication.

    Usage:
        client = APIClient()
        response = await client.get("/health")
        notes = unwrap(await client.get(client.notes_path()))
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """
        Initialize the API client.

        Args:
            base_url: Backend base URL. If None, resolved from HOST/PORT or
                config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, read from
                config/settings/application.yaml.
        """
        try:
            config_base_url, config_timeout = get_server_base_url()
            self.api_prefix = get_app_config().application.api_prefix
        except Exception as e:
            if base_url is None:
                raise RuntimeError(
                    "Could not determine server URL from config/settings/application.yaml"
                ) from e
            config_base_url = base_url
            config_timeout = timeout if timeout is not None else 30.0
            self.api_prefix = "/api/v1"

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self._client: httpx.AsyncClient | None = None

    def notes_path(self, note_id: str | None = None) -> str:
        """Path of the notes collection, or of one note."""
        path = f"{self.api_prefix}/notes"
        return f"{path}/{note_id}" if note_id else path

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "cli"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Make an HTTP request to the backend.

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()

        log_with_source(logger, "cli", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            "cli",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)


_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client


async def close_api_client() -> None:
    """Close the API client."""
    global _client
    if _client:
        await _client.close()
        _client = None
