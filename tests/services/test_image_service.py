"""Tests for ImageService — unused images, broken references, alt text."""

from __future__ import annotations

from pathlib import Path

import pytest

from blogforge.infrastructure.filesystem import read_content_file
from blogforge.infrastructure.project import Project
from blogforge.services.images import ImageService, is_external, suggest_alt_text
from blogforge.services.result import NOT_FOUND
from tests.conftest import create_article, create_author

BODY = (
    "Intro\n"
    "\n"
    "![](/images/posts/c.jpg)\n"
    "\n"
    "![Logo](https://example.com/logo.png)"
)


def _image(images_dir: Path, name: str, size: int = 10) -> Path:
    path = images_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


@pytest.fixture
def images_dir(project: Project) -> Path:
    directory = project.images_dir
    _image(directory, "a.png")
    _image(directory, "b.png", size=42)
    _image(directory, "posts/c.jpg")
    (directory / "notes.txt").write_text("not an image")
    return directory


class TestFindUnused:
    def test_reports_unreferenced(self, project: Project, images_dir: Path) -> None:
        create_article(project, "Hello", image="/images/a.png", body=BODY)
        result = ImageService(project).find_unused()
        assert result.ok
        assert result.data["total"] == 3
        assert result.data["unused"] == [{"path": "b.png", "size": 42}]
        assert result.data["wasted_bytes"] == 42
        assert result.data["deleted"] == []
        assert (images_dir / "b.png").exists()

    def test_author_avatar_counts_as_use(self, project: Project, images_dir: Path) -> None:
        create_author(project, "Jane Doe", avatar="b.png")
        unused = [item["path"] for item in ImageService(project).find_unused().data["unused"]]
        assert unused == ["a.png", "posts/c.jpg"]

    def test_delete(self, project: Project, images_dir: Path) -> None:
        create_article(project, "Hello", image="/images/a.png", body=BODY)
        result = ImageService(project).find_unused(delete=True)
        assert result.data["deleted"] == ["b.png"]
        assert not (images_dir / "b.png").exists()
        assert (images_dir / "a.png").exists()

    def test_missing_images_directory(self, project: Project) -> None:
        project.images_dir.rmdir()
        result = ImageService(project).find_unused()
        assert result.error.code == NOT_FOUND


class TestValidateReferences:
    def test_broken_references(self, project: Project, images_dir: Path) -> None:
        create_article(
            project,
            "Hello",
            image="/images/missing.png",
            body='Text\n\n<img src="/images/gone.webp" alt="x">\n\n' + BODY,
        )
        result = ImageService(project).validate_references()
        assert result.ok
        assert result.data["checked"] == 3
        assert result.data["count"] == 2
        assert result.data["broken"] == [
            {
                "collection": "article",
                "slug": "hello",
                "image": "/images/missing.png",
                "kind": "frontmatter",
                "line": None,
            },
            {
                "collection": "article",
                "slug": "hello",
                "image": "/images/gone.webp",
                "kind": "inline",
                "line": 3,
            },
        ]

    def test_all_resolved(self, project: Project, images_dir: Path) -> None:
        create_article(project, "Hello", image="a.png", body=BODY)
        data = ImageService(project).validate_references().data
        assert data["checked"] == 2
        assert data["broken"] == []


class TestSuggestAlt:
    def test_reports_missing_alt(self, project: Project) -> None:
        create_article(project, "Hello", body="![](/images/nuxt-setup_guide.png)\n\n![Ok](b.png)")
        data = ImageService(project).suggest_alt().data
        assert data["count"] == 1
        assert data["missing"][0]["image"] == "/images/nuxt-setup_guide.png"
        assert data["missing"][0]["suggestion"] == "Nuxt setup guide"
        assert data["updated"] == []

    def test_apply_rewrites_body(self, project: Project) -> None:
        created = create_article(project, "Hello", body="![ ](/images/nuxt-setup_guide.png)")
        data = ImageService(project).suggest_alt(apply=True).data
        assert data["updated"] == ["hello.md"]
        fm, body = read_content_file(Path(created["path"]))
        assert body == "![Nuxt setup guide](/images/nuxt-setup_guide.png)\n"
        assert fm["slug"] == "hello"

    def test_html_images_ignored(self, project: Project) -> None:
        create_article(project, "Hello", body='<img src="a.png">')
        assert ImageService(project).suggest_alt().data["count"] == 0


@pytest.mark.parametrize(
    "image,expected",
    [
        ("/images/nuxt-content_setup-2.png", "Nuxt content setup 2"),
        ("hero.jpg", "Hero"),
        ("my.photo.v2.webp", "My photo v2"),
    ],
)
def test_suggest_alt_text(image: str, expected: str) -> None:
    assert suggest_alt_text(image) == expected


@pytest.mark.parametrize(
    "ref,expected",
    [
        ("https://cdn.example.com/a.png", True),
        ("//cdn.example.com/a.png", True),
        ("data:image/png;base64,AAA", True),
        ("/images/a.png", False),
    ],
)
def test_is_external(ref: str, expected: bool) -> None:
    assert is_external(ref) is expected
