"""Shared pytest fixtures and test helpers for blogforge tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from blogforge.config.loader import load_config
from blogforge.infrastructure.project import Project


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


def write_config(root: Path, config: dict[str, Any]) -> Path:
    """Write ``blogforge.config.json`` under *root*."""
    path = root / "blogforge.config.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary single-language project with the default layout.

    This is the single source of truth for the project directory layout.
    All project fixtures (project, _isolated_project) build on this.
    """
    write_config(tmp_path, {"languages": ["en"], "defaultLanguage": "en"})
    for name in ("articles", "authors", "categories"):
        (tmp_path / "content" / name).mkdir(parents=True)
    (tmp_path / "public" / "images").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def project(project_root: Path) -> Project:
    """Project opened on the temporary root."""
    return Project(project_root, load_config(project_root))


@pytest.fixture
def multilingual_root(tmp_path: Path) -> Path:
    """Temporary English/Arabic project with multilingual text fields."""
    write_config(
        tmp_path,
        {"multilingual": True, "languages": ["en", "ar"], "defaultLanguage": "en"},
    )
    for name in ("articles", "authors", "categories"):
        (tmp_path / "content" / name).mkdir(parents=True)
    (tmp_path / "public" / "images").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def multilingual_project(multilingual_root: Path) -> Project:
    return Project(multilingual_root, load_config(multilingual_root))


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes. Tests that need the path can also request
    ``project_root`` directly (pytest deduplicates the fixture).
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service and command test modules)
# ---------------------------------------------------------------------------


def write_record(directory: Path, slug: str, frontmatter: str, body: str = "") -> Path:
    """Write a raw markdown record (frontmatter given as YAML text)."""
    path = directory / f"{slug}.md"
    path.write_text(f"---\n{frontmatter.strip()}\n---\n\n{body}", encoding="utf-8")
    return path


def create_author(project: Project, name: str, **kwargs: Any) -> dict[str, Any]:
    """Create an author via ContentService, asserting success."""
    from blogforge.services.content import ContentService

    data = {"name": name, "bio": kwargs.pop("bio", f"About {name}"), **kwargs}
    result = ContentService(project).create("author", data)
    assert result.ok, result.error
    return result.data


def create_category(project: Project, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create a category via ContentService, asserting success."""
    from blogforge.services.content import ContentService

    data = {"title": title, "description": kwargs.pop("description", f"{title} posts"), **kwargs}
    result = ContentService(project).create("category", data)
    assert result.ok, result.error
    return result.data


def create_article(project: Project, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create an article via ContentService, asserting success."""
    from blogforge.services.content import ContentService

    body = kwargs.pop("body", None)
    locale = kwargs.pop("locale", None)
    data = {
        "title": title,
        "description": kwargs.pop("description", f"All about {title}"),
        "author": kwargs.pop("author", "jane"),
        **kwargs,
    }
    result = ContentService(project).create("article", data, body=body, locale=locale)
    assert result.ok, result.error
    return result.data
