"""Command group: articles (create, edit, list, publish, seo-check, ...)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from blogforge.commands._base import BfGroup
from blogforge.commands._records import (
    add_record_commands,
    body_file_option,
    body_option,
    is_interactive,
    locale_option,
    parse_assignments,
    read_body,
    require_changes,
    set_option,
)
from blogforge.services._helpers import parse_csv, today_iso

if TYPE_CHECKING:
    from blogforge.commands._context import AppContext

_ARTICLES_EXAMPLES = """\
  blogforge articles create "Getting Started with Nuxt" --author jane --tags nuxt,vue
  blogforge articles list --drafts
  blogforge articles edit getting-started-with-nuxt --description "A short intro"
  blogforge articles publish getting-started-with-nuxt
  blogforge articles seo-check getting-started-with-nuxt --keyword nuxt"""


@click.group(cls=BfGroup, examples=_ARTICLES_EXAMPLES)
@click.pass_obj
def articles(app: AppContext) -> None:
    """Create, edit, publish and check articles."""


add_record_commands(articles, "article", "articles")


@articles.command(
    examples="""\
  blogforge articles create "Getting Started with Nuxt" --author jane
  blogforge articles create "Hello" --description "First post" --tags intro,meta --category news
  blogforge articles create "Bonjour" --locale fr --set difficulty=easy
  blogforge --no-interact articles create "Draft" --description "..." --author jane"""
)
@click.argument("title")
@click.option("--description", "-d", default=None, help="Short description.")
@click.option("--author", "-a", default=None, help="Author slug.")
@click.option("--tags", "-t", default=None, help="Comma-separated tags.")
@click.option("--category", "-c", default=None, help="Category slug.")
@click.option("--slug", default=None, help="Slug (default: derived from the title).")
@click.option("--image", default=None, help="Featured image path.")
@click.option("--keywords", default=None, help="Comma-separated SEO keywords.")
@click.option("--featured", is_flag=True, help="Mark as featured.")
@click.option("--reading-time", type=float, default=None, help="Reading time in minutes.")
@click.option("--published-at", default=None, help="Publish date (YYYY-MM-DD).")
@click.option("--publish", "publish_now", is_flag=True, help="Create as published instead of draft.")
@locale_option
@body_option
@body_file_option
@set_option
@click.pass_obj
def create(
    app: AppContext,
    title: str,
    description: str | None,
    author: str | None,
    tags: str | None,
    category: str | None,
    slug: str | None,
    image: str | None,
    keywords: str | None,
    featured: bool,
    reading_time: float | None,
    published_at: str | None,
    publish_now: bool,
    locale: str | None,
    body: str | None,
    body_file: Path | None,
    assignments: tuple[str, ...],
) -> None:
    """Create a new article (draft unless --publish)."""
    from blogforge.services.content import ContentService

    if is_interactive(app):
        if description is None:
            description = click.prompt("Description", default="")
        if author is None:
            author = click.prompt("Author slug", default="")
        if tags is None:
            tags = click.prompt("Tags (comma-separated, empty for none)", default="")

    data: dict[str, Any] = {
        "title": title,
        "description": description or "",
        "author": author or "",
        "tags": parse_csv(tags),
        "category": category,
        "slug": slug,
        "image": image,
        "keywords": keywords,
        "isFeatured": True if featured else None,
        "readingTime": reading_time,
        "publishedAt": published_at,
    }
    if publish_now:
        data["isDraft"] = False
        data["publishedAt"] = published_at or today_iso()
    data.update(parse_assignments(assignments))

    svc = ContentService(app.project)
    app.emit(svc.create("article", data, body=read_body(body, body_file), locale=locale))


@articles.command(
    examples="""\
  blogforge articles edit my-post --title "Better Title"
  blogforge articles edit my-post --title "Meilleur titre" --locale fr
  blogforge articles edit my-post --tags vue,nuxt --category tutorials
  blogforge articles edit my-post --set difficulty=hard --unset canonicalURL"""
)
@click.argument("slug")
@click.option("--title", default=None, help="New title.")
@click.option("--description", "-d", default=None, help="New description.")
@click.option("--author", "-a", default=None, help="New author slug.")
@click.option("--tags", "-t", default=None, help="Replace tags (comma-separated).")
@click.option("--category", "-c", default=None, help="New category slug.")
@click.option("--image", default=None, help="New featured image path.")
@click.option("--keywords", default=None, help="New SEO keywords.")
@click.option("--featured/--not-featured", default=None, help="Set or clear the featured flag.")
@click.option("--unset", multiple=True, metavar="KEY", help="Remove a frontmatter field (repeatable).")
@locale_option
@body_option
@body_file_option
@set_option
@click.pass_obj
def edit(
    app: AppContext,
    slug: str,
    title: str | None,
    description: str | None,
    author: str | None,
    tags: str | None,
    category: str | None,
    image: str | None,
    keywords: str | None,
    featured: bool | None,
    unset: tuple[str, ...],
    locale: str | None,
    body: str | None,
    body_file: Path | None,
    assignments: tuple[str, ...],
) -> None:
    """Update an article's frontmatter or body."""
    from blogforge.services.content import ContentService

    changes: dict[str, Any] = {}
    for key, value in (
        ("title", title),
        ("description", description),
        ("author", author),
        ("category", category),
        ("image", image),
        ("keywords", keywords),
        ("isFeatured", featured),
    ):
        if value is not None:
            changes[key] = value
    if tags is not None:
        changes["tags"] = parse_csv(tags)
    changes.update(parse_assignments(assignments))
    for key in unset:
        changes[key] = None

    new_body = read_body(body, body_file)
    require_changes(changes, new_body)
    svc = ContentService(app.project)
    app.emit(svc.update("article", slug, changes, body=new_body, locale=locale))


@articles.command(
    "list",
    examples="""\
  blogforge articles list
  blogforge articles list --drafts
  blogforge articles list --published --tag nuxt
  blogforge articles list --category tutorials --author jane --locale fr""",
)
@click.option("--drafts", "state", flag_value="drafts", help="Only drafts.")
@click.option("--published", "state", flag_value="published", help="Only published articles.")
@click.option("--tag", default=None, help="Only articles with this tag.")
@click.option("--category", "-c", default=None, help="Only articles in this category.")
@click.option("--author", "-a", default=None, help="Only articles by this author.")
@locale_option
@click.pass_obj
def list_cmd(
    app: AppContext,
    state: str | None,
    tag: str | None,
    category: str | None,
    author: str | None,
    locale: str | None,
) -> None:
    """List articles."""
    from blogforge.services.content import ContentService

    drafts = None if state is None else state == "drafts"
    app.emit(
        ContentService(app.project).list_records(
            "article",
            locale=locale,
            drafts=drafts,
            tag=tag,
            category=category,
            author=author,
        )
    )


@articles.command(examples="  blogforge articles publish my-post")
@click.argument("slug")
@click.pass_obj
def publish(app: AppContext, slug: str) -> None:
    """Publish a draft article."""
    from blogforge.services.content import ContentService

    app.emit(ContentService(app.project).publish(slug))


@articles.command(examples="  blogforge articles unpublish my-post")
@click.argument("slug")
@click.pass_obj
def unpublish(app: AppContext, slug: str) -> None:
    """Return a published article to draft."""
    from blogforge.services.content import ContentService

    app.emit(ContentService(app.project).unpublish(slug))


@articles.command(
    "seo-check",
    examples="""\
  blogforge articles seo-check
  blogforge articles seo-check my-post --keyword nuxt
  blogforge -v articles seo-check""",
)
@click.argument("slug", required=False)
@click.option("--keyword", "-k", default=None, help="Main keyword (default: first of keywords).")
@locale_option
@click.pass_obj
def seo_check(app: AppContext, slug: str | None, keyword: str | None, locale: str | None) -> None:
    """Score one or all articles for on-page SEO."""
    from blogforge.services.seo import SeoService

    app.emit(SeoService(app.project).check(slug, keyword=keyword, locale=locale))
