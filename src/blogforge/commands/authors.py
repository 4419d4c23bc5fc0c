"""Command group: authors."""

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

# Optional plain-string profile fields, in display order.
_PROFILE_FIELDS: tuple[str, ...] = ("avatar", "twitter", "github", "website", "linkedin")


def _profile_options(func: Any) -> Any:
    for name in reversed(_PROFILE_FIELDS):
        func = click.option(f"--{name}", default=None, help=f"{name.capitalize()} URL or handle.")(
            func
        )
    return func


@click.group(
    cls=BfGroup,
    examples="""\
  blogforge authors create "Jane Doe" --bio "Writes about Vue" --github janedoe
  blogforge authors list
  blogforge authors edit jane-doe --role "Editor"
  blogforge authors delete jane-doe --force""",
)
@click.pass_obj
def authors(app: AppContext) -> None:
    """Manage author profiles."""


add_record_commands(authors, "author", "authors")


@authors.command(
    examples="""\
  blogforge authors create "Jane Doe" --bio "Writes about Vue"
  blogforge authors create "Jean Dupont" --bio "Écrit sur Nuxt" --locale fr --role Rédacteur"""
)
@click.argument("name")
@click.option("--bio", default=None, help="Short biography.")
@click.option("--role", default=None, help="Role or title.")
@click.option("--slug", default=None, help="Slug (default: derived from the name).")
@_profile_options
@locale_option
@body_option
@body_file_option
@set_option
@click.pass_obj
def create(
    app: AppContext,
    name: str,
    bio: str | None,
    role: str | None,
    slug: str | None,
    locale: str | None,
    body: str | None,
    body_file: Path | None,
    assignments: tuple[str, ...],
    **profile: str | None,
) -> None:
    """Create a new author."""
    from blogforge.services.content import ContentService

    if is_interactive(app) and bio is None:
        bio = click.prompt("Bio", default="")

    data: dict[str, Any] = {"name": name, "bio": bio or "", "role": role, "slug": slug, **profile}
    data.update(parse_assignments(assignments))
    svc = ContentService(app.project)
    app.emit(svc.create("author", data, body=read_body(body, body_file), locale=locale))


@authors.command(
    examples="""\
  blogforge authors edit jane-doe --bio "Writes about Vue and Nuxt"
  blogforge authors edit jane-doe --bio "Écrit sur Vue" --locale fr
  blogforge authors edit jane-doe --unset twitter"""
)
@click.argument("slug")
@click.option("--name", default=None, help="New display name.")
@click.option("--bio", default=None, help="New biography.")
@click.option("--role", default=None, help="New role.")
@_profile_options
@click.option("--unset", multiple=True, metavar="KEY", help="Remove a frontmatter field (repeatable).")
@locale_option
@body_option
@body_file_option
@set_option
@click.pass_obj
def edit(
    app: AppContext,
    slug: str,
    name: str | None,
    bio: str | None,
    role: str | None,
    unset: tuple[str, ...],
    locale: str | None,
    body: str | None,
    body_file: Path | None,
    assignments: tuple[str, ...],
    **profile: str | None,
) -> None:
    """Update an author's profile."""
    from blogforge.services.content import ContentService

    fields = {"name": name, "bio": bio, "role": role, **profile}
    changes: dict[str, Any] = {key: value for key, value in fields.items() if value is not None}
    changes.update(parse_assignments(assignments))
    for key in unset:
        changes[key] = None

    new_body = read_body(body, body_file)
    require_changes(changes, new_body)
    svc = ContentService(app.project)
    app.emit(svc.update("author", slug, changes, body=new_body, locale=locale))


@authors.command("list", examples="  blogforge authors list --locale fr")
@locale_option
@click.pass_obj
def list_cmd(app: AppContext, locale: str | None) -> None:
    """List authors."""
    from blogforge.services.content import ContentService

    app.emit(ContentService(app.project).list_records("author", locale=locale))
