"""Tests for the authors command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogforge.cli import cli
from blogforge.infrastructure.filesystem import read_content_file
from blogforge.infrastructure.project import Project
from tests.conftest import create_article, create_author


def _invoke(cli_runner: CliRunner, *args: str):
    return cli_runner.invoke(cli, ["--json", "--no-interact", *args])


@pytest.mark.usefixtures("_isolated_project")
class TestAuthors:
    def test_create(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = _invoke(
            cli_runner,
            "authors",
            "create",
            "Jane Doe",
            "--bio",
            "Writes about Vue",
            "--role",
            "Editor",
            "--github",
            "janedoe",
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["slug"] == "jane-doe"
        fm, body = read_content_file(project_root / "content" / "authors" / "jane-doe.md")
        assert fm["name"] == "Jane Doe"
        assert fm["role"] == "Editor"
        assert fm["github"] == "janedoe"
        assert "twitter" not in fm
        assert body.strip() == "Writes about Vue"

    def test_edit_and_unset(self, cli_runner: CliRunner, project: Project, project_root: Path) -> None:
        create_author(project, "Jane Doe", twitter="@jane")
        result = _invoke(
            cli_runner, "authors", "edit", "jane-doe", "--bio", "New bio", "--unset", "twitter"
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["fields_changed"] == ["bio", "twitter"]
        fm = read_content_file(project_root / "content" / "authors" / "jane-doe.md")[0]
        assert fm["bio"] == "New bio"
        assert "twitter" not in fm

    def test_list(self, cli_runner: CliRunner, project: Project) -> None:
        create_author(project, "Jane Doe", role="Editor")
        create_author(project, "Ahmed Ali")
        items = json.loads(_invoke(cli_runner, "authors", "list").output)["data"]["items"]
        assert [(i["slug"], i["role"]) for i in items] == [("ahmed-ali", ""), ("jane-doe", "Editor")]

    def test_delete_referenced_requires_force(
        self, cli_runner: CliRunner, project: Project, project_root: Path
    ) -> None:
        create_author(project, "Jane Doe")
        create_article(project, "Hello", author="jane-doe")

        result = _invoke(cli_runner, "authors", "delete", "jane-doe")
        assert result.exit_code == 1
        error = json.loads(result.output)["error"]
        assert error["code"] == "IN_USE"
        assert error["detail"]["articles"] == ["hello"]

        forced = _invoke(cli_runner, "authors", "delete", "jane-doe", "--force")
        assert forced.exit_code == 0
        assert json.loads(forced.output)["warnings"] == ["Deleted while referenced by: hello"]
        assert not (project_root / "content" / "authors" / "jane-doe.md").exists()

    def test_forced_delete_warns_on_stderr(self, cli_runner: CliRunner, project: Project) -> None:
        create_author(project, "Jane Doe")
        create_article(project, "Hello", author="jane-doe")
        result = cli_runner.invoke(cli, ["authors", "delete", "jane-doe", "--force"])
        assert result.exit_code == 0
        assert "WARNING: Deleted while referenced by: hello" in result.output

    def test_validate(self, cli_runner: CliRunner, project: Project) -> None:
        create_author(project, "Jane Doe")
        (project.collection_dir("author") / "nobio.md").write_text(
            "---\nslug: nobio\nname: No Bio\n---\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["authors", "validate"])
        assert result.exit_code == 0
        assert "bio: Field required" in result.output
        assert "1 valid, 1 invalid of 2" in result.output
