"""Command group: categories."""

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

if TYPE_CHECKING:
    from blogforge.commands._context import AppContext


@click.group(
    cls=BfGroup,
    examples="""\
  blogforge categories create "Tutorials" --description "Step-by-step guides"
  blogforge categories list
  blogforge categories delete tutorials""",
)
@click.pass_obj
def categories(app: AppContext) -> None:
    """Manage article categories."""


add_record_commands(categories, "category", "categories")


@categories.command(
    examples="""\
  blogforge categories create "Tutorials" --description "Step-by-step guides" --icon book
  blogforge categories create "Tutoriels" --description "Guides" --locale fr --slug tutorials"""
)
@click.argument("title")
@click.option("--description", "-d", default=None, help="Short description.")
@click.option("--slug", default=None, help="Slug (default: derived from the title).")
@click.option("--image", default=None, help="Image path.")
@click.option("--icon", default=None, help="Icon name.")
@locale_option
@body_option
@body_file_option
@set_option
@click.pass_obj
def create(
    app: AppContext,
    title: str,
    description: str | None,
    slug: str | None,
    image: str | None,
    icon: str | None,
    locale: str | None,
    body: str | None,
    body_file: Path | None,
    assignments: tuple[str, ...],
) -> None:
    """Create a new category."""
    from blogforge.services.content import ContentService

    if is_interactive(app) and description is None:
        description = click.prompt("Description", default="")

    data: dict[str, Any] = {
        "title": title,
        "description": description or "",
        "slug": slug,
        "image": image,
        "icon": icon,
    }
    data.update(parse_assignments(assignments))
    svc = ContentService(app.project)
    app.emit(svc.create("category", data, body=read_body(body, body_file), locale=locale))


@categories.command(
    examples="""\
  blogforge categories edit tutorials --description "Hands-on guides"
  blogforge categories edit tutorials --title "Tutoriels" --locale fr"""
)
@click.argument("slug")
@click.option("--title", default=None, help="New title.")
@click.option("--description", "-d", default=None, help="New description.")
@click.option("--image", default=None, help="New image path.")
@click.option("--icon", default=None, help="New icon name.")
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
    image: str | None,
    icon: str | None,
    unset: tuple[str, ...],
    locale: str | None,
    body: str | None,
    body_file: Path | None,
    assignments: tuple[str, ...],
) -> None:
    """Update a category."""
    from blogforge.services.content import ContentService

    fields = {"title": title, "description": description, "image": image, "icon": icon}
    changes: dict[str, Any] = {key: value for key, value in fields.items() if value is not None}
    changes.update(parse_assignments(assignments))
    for key in unset:
        changes[key] = None

    new_body = read_body(body, body_file)
    require_changes(changes, new_body)
    svc = ContentService(app.project)
    app.emit(svc.update("category", slug, changes, body=new_body, locale=locale))


@categories.command("list", examples="  blogforge categories list --locale fr")
@locale_option
@click.pass_obj
def list_cmd(app: AppContext, locale: str | None) -> None:
    """List categories."""
    from blogforge.services.content import ContentService

    app.emit(ContentService(app.project).list_records("category", locale=locale))
