"""Tests for template loading with project overrides."""

from __future__ import annotations

from pathlib import Path

from blogforge.infrastructure.templates import build_template_environment, render_body


class TestRenderBody:
    def test_article_default(self) -> None:
        body = render_body("article", title="Hello", description="Intro", body=None)
        assert body.startswith("# Hello\n")
        assert "Intro" in body
        assert "Write your article content here." in body

    def test_explicit_body_wins(self) -> None:
        body = render_body("category", title="News", description="D", body="Custom")
        assert body.strip() == "Custom"

    def test_author_uses_bio(self) -> None:
        assert render_body("author", bio="Writes about Vue", body=None).strip() == "Writes about Vue"

    def test_project_override(self, tmp_path: Path) -> None:
        override = tmp_path / ".blogforge" / "templates" / "content"
        override.mkdir(parents=True)
        (override / "article.md.j2").write_text("Custom {{ title }}\n")
        body = render_body("article", project_root=tmp_path, title="Hello", body=None)
        assert body == "Custom Hello\n"

    def test_flat_override(self, tmp_path: Path) -> None:
        override = tmp_path / ".blogforge" / "templates"
        override.mkdir(parents=True)
        (override / "author.md.j2").write_text("Bio: {{ bio }}\n")
        assert render_body("author", project_root=tmp_path, bio="B", body=None) == "Bio: B\n"


class TestInitTemplate:
    def test_config_template_renders_json(self) -> None:
        import json

        from blogforge.config.models import DirectoriesConfig

        env = build_template_environment("init")
        rendered = env.get_template("blogforge.config.json.j2").render(
            directories=DirectoriesConfig(articles="posts"),
            multilingual=True,
            languages=["en", "ar"],
            default_language="en",
        )
        data = json.loads(rendered)
        assert data["directories"]["articles"] == "posts"
        assert data["languages"] == ["en", "ar"]
        assert data["defaultValues"]["article"] == {"isDraft": True}
