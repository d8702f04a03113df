"""
Unit Tests for run.py Entry Script.

Tests individual functions with mocked dependencies.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from run import main, validate_project_root


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()
        assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for main CLI entry point."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture(autouse=True)
    def _no_env_overrides(self, monkeypatch):
        from postit.backend.core.config import get_app_config, get_settings

        for name in ("HOST", "PORT", "CORS_ORIGIN"):
            monkeypatch.delenv(name, raising=False)
        get_settings.cache_clear()
        get_app_config.cache_clear()
        yield
        get_settings.cache_clear()
        get_app_config.cache_clear()

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Post-it Board entry point" in result.output
        assert "--action" in result.output

    def test_info_is_default(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Post-it Board" in result.output
        assert "--action server" in result.output

    def test_config_shows_every_section(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        for section in ("Application", "Logging", "Feature Flags", "MCP"):
            assert f"{section} (from YAML)" in result.output
        assert "api_prefix: /api/v1" in result.output

    def test_health_passes(self, runner):
        result = runner.invoke(main, ["--action", "health"])

        assert result.exit_code == 0
        assert "All checks passed!" in result.output

    def test_server_starts_uvicorn_with_overrides(self, runner):
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(main, ["--action", "server", "--port", "4100"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "postit.backend.main:app" in cmd
        assert cmd[cmd.index("--host") + 1] == "0.0.0.0"
        assert cmd[cmd.index("--port") + 1] == "4100"
        assert "--reload" not in cmd

    def test_invalid_action_rejected(self, runner):
        result = runner.invoke(main, ["--action", "test"])

        assert result.exit_code == 2
