"""Tests for the articles command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogforge.cli import cli
from blogforge.infrastructure.filesystem import read_content_file
from blogforge.infrastructure.project import Project
from tests.conftest import create_article, create_category


def _invoke(cli_runner: CliRunner, *args: str):
    return cli_runner.invoke(cli, ["--json", "--no-interact", *args])


def _frontmatter(root: Path, slug: str) -> dict:
    return read_content_file(root / "content" / "articles" / f"{slug}.md")[0]


@pytest.mark.usefixtures("_isolated_project")
class TestCreate:
    def test_create(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = _invoke(
            cli_runner,
            "articles",
            "create",
            "Getting Started with Nuxt",
            "--description",
            "An intro",
            "--author",
            "jane",
            "--tags",
            "nuxt, vue",
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "create"
        assert data["data"]["slug"] == "getting-started-with-nuxt"

        fm = _frontmatter(project_root, "getting-started-with-nuxt")
        assert fm["tags"] == ["nuxt", "vue"]
        assert fm["isDraft"] is True
        assert fm["author"] == "jane"

    def test_create_published(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = _invoke(
            cli_runner, "articles", "create", "Live", "--publish", "--published-at", "2024-05-01"
        )
        assert result.exit_code == 0, result.output
        fm = _frontmatter(project_root, "live")
        assert fm["isDraft"] is False
        assert fm["publishedAt"] == "2024-05-01"

    def test_create_featured_with_extra_fields(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        result = _invoke(
            cli_runner,
            "articles",
            "create",
            "Deep Dive",
            "--featured",
            "--reading-time",
            "7.5",
            "--set",
            "difficulty=hard",
            "--set",
            "series=[nuxt, content]",
        )
        assert result.exit_code == 0, result.output
        fm = _frontmatter(project_root, "deep-dive")
        assert fm["isFeatured"] is True
        assert fm["readingTime"] == 7.5
        assert fm["difficulty"] == "hard"
        assert fm["series"] == ["nuxt", "content"]

    def test_body_file(self, cli_runner: CliRunner, project_root: Path, tmp_path: Path) -> None:
        body_file = tmp_path / "body.md"
        body_file.write_text("## From a file\n", encoding="utf-8")
        result = _invoke(cli_runner, "articles", "create", "Filed", "--body-file", str(body_file))
        assert result.exit_code == 0, result.output
        body = read_content_file(project_root / "content" / "articles" / "filed.md")[1]
        assert body == "## From a file\n"

    def test_bad_set_syntax(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "articles", "create", "Oops", "--set", "novalue")
        assert result.exit_code == 2
        assert "expected KEY=VALUE" in result.output

    def test_missing_category(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "articles", "create", "Hello", "--category", "news")
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "NOT_FOUND"

    def test_duplicate(self, cli_runner: CliRunner) -> None:
        assert _invoke(cli_runner, "articles", "create", "Hello").exit_code == 0
        result = _invoke(cli_runner, "articles", "create", "Hello")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "ALREADY_EXISTS"

    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--no-interact", "articles", "create", "Hello"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "slug: hello" in result.output

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "--no-interact", "articles", "create", "Hello"])
        assert result.exit_code == 0
        assert result.output.strip() == "hello"


@pytest.mark.usefixtures("_isolated_project")
class TestEdit:
    def test_edit_fields(self, cli_runner: CliRunner, project: Project, project_root: Path) -> None:
        create_article(project, "Hello", image="/images/a.png")
        result = _invoke(
            cli_runner,
            "articles",
            "edit",
            "hello",
            "--description",
            "Updated",
            "--tags",
            "a,b",
            "--unset",
            "image",
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["fields_changed"] == ["description", "image", "tags"]
        fm = _frontmatter(project_root, "hello")
        assert fm["description"] == "Updated"
        assert fm["tags"] == ["a", "b"]
        assert "image" not in fm

    def test_featured_toggle(self, cli_runner: CliRunner, project: Project, project_root: Path) -> None:
        create_article(project, "Hello")
        assert _invoke(cli_runner, "articles", "edit", "hello", "--featured").exit_code == 0
        assert _frontmatter(project_root, "hello")["isFeatured"] is True
        assert _invoke(cli_runner, "articles", "edit", "hello", "--not-featured").exit_code == 0
        assert _frontmatter(project_root, "hello")["isFeatured"] is False

    def test_no_changes(self, cli_runner: CliRunner, project: Project) -> None:
        create_article(project, "Hello")
        result = _invoke(cli_runner, "articles", "edit", "hello")
        assert result.exit_code == 1
        assert "No changes specified" in result.output

    def test_invalid_value(self, cli_runner: CliRunner, project: Project) -> None:
        create_article(project, "Hello")
        result = _invoke(cli_runner, "articles", "edit", "hello", "--set", "isDraft=maybe")
        assert result.exit_code == 1
        error = json.loads(result.output)["error"]
        assert error["code"] == "VALIDATION_FAILED"
        assert any(issue.startswith("isDraft:") for issue in error["detail"]["issues"])

    def test_set_date_and_integer(
        self, cli_runner: CliRunner, project: Project, project_root: Path
    ) -> None:
        create_article(project, "Hello")
        result = _invoke(
            cli_runner,
            "articles",
            "edit",
            "hello",
            "--set",
            "publishedAt=2024-05-01",
            "--set",
            "readingTime=5",
        )
        assert result.exit_code == 0, result.output
        fm = _frontmatter(project_root, "hello")
        assert fm["publishedAt"] == "2024-05-01"
        assert fm["readingTime"] == 5
        assert isinstance(fm["readingTime"], int)
        text = (project_root / "content" / "articles" / "hello.md").read_text(encoding="utf-8")
        assert "readingTime: 5\n" in text

    def test_missing(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "articles", "edit", "ghost", "--title", "X")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"


@pytest.mark.usefixtures("_isolated_project")
class TestListShowSearch:
    @pytest.fixture(autouse=True)
    def _articles(self, project: Project) -> None:
        create_category(project, "News")
        create_article(project, "Vue Basics", tags=["vue"])
        create_article(project, "Nuxt Guide", tags=["nuxt"], isDraft=False, category="news")

    def test_list(self, cli_runner: CliRunner) -> None:
        data = json.loads(_invoke(cli_runner, "articles", "list").output)["data"]
        assert data["count"] == 2

    @pytest.mark.parametrize(
        "flags,expected",
        [
            (["--drafts"], ["vue-basics"]),
            (["--published"], ["nuxt-guide"]),
            (["--tag", "vue"], ["vue-basics"]),
            (["--category", "news"], ["nuxt-guide"]),
        ],
    )
    def test_list_filters(self, cli_runner: CliRunner, flags: list[str], expected: list[str]) -> None:
        result = _invoke(cli_runner, "articles", "list", *flags)
        assert [i["slug"] for i in json.loads(result.output)["data"]["items"]] == expected

    def test_list_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "articles", "list"])
        assert result.output.split() == ["nuxt-guide", "vue-basics"]

    def test_list_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["articles", "list"])
        assert result.exit_code == 0
        assert "Vue Basics" in result.output
        assert "2 article record(s)" in result.output

    def test_show(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "articles", "show", "nuxt-guide")
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["frontmatter"]["category"] == "news"

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "articles", "show", "ghost")
        assert result.exit_code == 1

    def test_search(self, cli_runner: CliRunner) -> None:
        data = json.loads(_invoke(cli_runner, "articles", "search", "NUXT").output)["data"]
        assert [i["slug"] for i in data["items"]] == ["nuxt-guide"]

    def test_validate(self, cli_runner: CliRunner) -> None:
        data = json.loads(_invoke(cli_runner, "articles", "validate").output)["data"]
        assert data["total"] == 2
        assert data["invalid"] == 0


@pytest.mark.usefixtures("_isolated_project")
class TestLifecycle:
    def test_publish_and_unpublish(
        self, cli_runner: CliRunner, project: Project, project_root: Path
    ) -> None:
        create_article(project, "Hello")
        result = _invoke(cli_runner, "articles", "publish", "hello")
        assert result.exit_code == 0, result.output
        assert _frontmatter(project_root, "hello")["isDraft"] is False

        again = _invoke(cli_runner, "articles", "publish", "hello")
        assert again.exit_code == 1
        assert json.loads(again.output)["error"]["code"] == "INVALID_INPUT"

        assert _invoke(cli_runner, "articles", "unpublish", "hello").exit_code == 0
        assert _frontmatter(project_root, "hello")["isDraft"] is True

    def test_delete(self, cli_runner: CliRunner, project: Project, project_root: Path) -> None:
        create_article(project, "Hello")
        result = _invoke(cli_runner, "articles", "delete", "hello")
        assert result.exit_code == 0
        assert not (project_root / "content" / "articles" / "hello.md").exists()

    def test_seo_check(self, cli_runner: CliRunner, project: Project) -> None:
        create_article(project, "Hello", keywords="hello", body="x")
        result = _invoke(cli_runner, "articles", "seo-check", "hello")
        assert result.exit_code == 0, result.output
        item = json.loads(result.output)["data"]["results"][0]
        assert item["keyword"] == "hello"
        assert item["grade"] == "F"

    def test_seo_check_human(self, cli_runner: CliRunner, project: Project) -> None:
        create_article(project, "Hello", body="x")
        result = cli_runner.invoke(cli, ["articles", "seo-check"])
        assert result.exit_code == 0
        assert "Overall SEO Score" in result.output
        assert "SEO Summary" in result.output
