"""
Configuration Management.

Loads environment overrides from the process environment (and optionally
config/.env) and settings from config/settings/*.yaml.

Environment (.env or process env, all optional):
    HOST, PORT, CORS_ORIGIN

Settings (YAML):
    application.yaml - App identity, server, cors, timeouts
    logging.yaml     - Logging configuration
    features.yaml    - Feature flags (MCP, dashboard, demo seeding)
    mcp.yaml         - MCP server identity and HTTP path
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from postit.backend.core.config_schema import (
    ApplicationSchema,
    FeaturesSchema,
    LoggingSchema,
    McpSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Deployment overrides. Anything unset falls back to application.yaml."""

    host: str | None = None
    port: int | None = None
    cors_origin: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str] | None:
        """CORS_ORIGIN split on commas, or None when not set."""
        if self.cors_origin is None:
            return None
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")
        self._mcp = _load_validated(McpSchema, "mcp.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features

    @property
    def mcp(self) -> McpSchema:
        """MCP server settings."""
        return self._mcp


@lru_cache
def get_settings() -> Settings:
    """Get cached environment overrides. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_server_address() -> tuple[str, int]:
    """
    Resolve the bind address: HOST/PORT from the environment win over application.yaml.

    Returns:
        Tuple of (host, port).
    """
    server = get_app_config().application.server
    settings = get_settings()
    return settings.host or server.host, settings.port or server.port


def get_cors_origins() -> list[str]:
    """CORS allow-list: CORS_ORIGIN from the environment wins over application.yaml."""
    override = get_settings().cors_origins
    if override is not None:
        return override
    return get_app_config().application.cors.origins


def get_server_base_url() -> tuple[str, float]:
    """
    Get the backend server base URL and timeout from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    host, port = get_server_address()
    if host == "0.0.0.0":
        host = "127.0.0.1"
    timeout = float(get_app_config().application.timeouts.external_api)
    return f"http://{host}:{port}", timeout
