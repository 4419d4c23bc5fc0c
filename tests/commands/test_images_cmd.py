"""Tests for the images command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogforge.cli import cli
from blogforge.infrastructure.project import Project
from tests.conftest import create_article


def _invoke(cli_runner: CliRunner, *args: str):
    return cli_runner.invoke(cli, ["--json", "--no-interact", *args])


@pytest.fixture
def images(project: Project) -> Path:
    directory = project.images_dir
    (directory / "used.png").write_bytes(b"x" * 5)
    (directory / "orphan.png").write_bytes(b"x" * 7)
    create_article(project, "Hello", image="/images/used.png", body="![](/images/missing.jpg)")
    return directory


@pytest.mark.usefixtures("_isolated_project")
class TestImagesCommands:
    def test_find_unused(self, cli_runner: CliRunner, images: Path) -> None:
        result = _invoke(cli_runner, "images", "find-unused")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["unused"] == [{"path": "orphan.png", "size": 7}]
        assert (images / "orphan.png").exists()

    def test_find_unused_delete(self, cli_runner: CliRunner, images: Path) -> None:
        result = _invoke(cli_runner, "images", "find-unused", "--delete")
        assert json.loads(result.output)["data"]["deleted"] == ["orphan.png"]
        assert not (images / "orphan.png").exists()

    def test_find_unused_human(self, cli_runner: CliRunner, images: Path) -> None:
        result = cli_runner.invoke(cli, ["images", "find-unused"])
        assert "orphan.png (7 bytes)" in result.output

    def test_validate_references(self, cli_runner: CliRunner, images: Path) -> None:
        data = json.loads(_invoke(cli_runner, "images", "validate-references").output)["data"]
        assert data["count"] == 1
        assert data["broken"][0]["image"] == "/images/missing.jpg"
        assert data["broken"][0]["line"] == 1

    def test_suggest_alt(self, cli_runner: CliRunner, images: Path, project_root: Path) -> None:
        data = json.loads(_invoke(cli_runner, "images", "suggest-alt", "--apply").output)["data"]
        assert data["missing"][0]["suggestion"] == "Missing"
        assert data["updated"] == ["hello.md"]
        text = (project_root / "content" / "articles" / "hello.md").read_text(encoding="utf-8")
        assert "![Missing](/images/missing.jpg)" in text

    def test_missing_images_directory(self, cli_runner: CliRunner, project: Project) -> None:
        project.images_dir.rmdir()
        result = _invoke(cli_runner, "images", "find-unused")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"
