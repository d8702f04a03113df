"""
Unit Tests for the project metadata in pyproject.toml.
"""

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def load_project() -> dict:
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)["project"]


class TestProjectMetadata:
    def test_name_and_dependencies(self):
        project = load_project()

        assert project["name"] == "postit-board"
        assert any(dep.startswith("fastmcp") for dep in project["dependencies"])

    def test_no_readme_declared(self):
        """The repo ships no README, so no long description is declared."""
        project = load_project()

        assert "readme" not in project
