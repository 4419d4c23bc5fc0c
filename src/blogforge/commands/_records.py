"""Shared pieces of the article/author/category command groups.

Each collection group gets ``show``, ``search``, ``delete`` and
``validate`` from :func:`add_record_commands`; ``create``, ``edit`` and
``list`` are declared per collection since their options differ.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blogforge.commands._base import BfGroup
from blogforge.domain.frontmatter import to_plain

if TYPE_CHECKING:
    from blogforge.commands._context import AppContext

locale_option = click.option(
    "--locale", "-l", default=None, help="Locale for multilingual text (default: defaultLanguage)."
)
set_option = click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="KEY=VALUE",
    help="Set any frontmatter field (repeatable). VALUE is parsed as YAML.",
)
body_option = click.option("--body", default=None, help="Markdown body text.")
body_file_option = click.option(
    "--body-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the Markdown body from a file.",
)


def is_interactive(app: AppContext) -> bool:
    """Return True when interactive prompts should fire.

    Prompts require: no ``--no-interact``, no ``--json``, and stdin is a TTY.
    """
    return app.interactive and not app.settings.json_output and sys.stdin.isatty()


def parse_value(raw: str) -> Any:
    """Parse a ``--set`` value as a YAML scalar or flow collection.

    Examples:
        >>> parse_value("5"), parse_value("true"), parse_value("[a, b]")
        (5, True, ['a', 'b'])
        >>> parse_value("2024-05-01"), parse_value("hello world")
        ('2024-05-01', 'hello world')
    """
    if raw == "":
        return ""
    yaml = YAML(typ="safe", pure=True)
    try:
        return to_plain(yaml.load(raw))
    except YAMLError:
        return raw


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` pairs into a dict; raise BadParameter otherwise."""
    values: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--set")
        values[key] = parse_value(raw)
    return values


def read_body(body: str | None, body_file: Path | None) -> str | None:
    if body_file is not None:
        return body_file.read_text(encoding="utf-8")
    return body


def require_changes(changes: dict[str, Any], body: str | None) -> None:
    if not changes and body is None:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)


def add_record_commands(group: BfGroup, collection: str, cli_name: str) -> None:
    """Attach show/search/delete/validate for *collection* to *group*."""

    @group.command(
        "show",
        examples=f"""\
  blogforge {cli_name} show my-slug
  blogforge {cli_name} show my-slug --locale fr
  blogforge --json {cli_name} show my-slug""",
    )
    @click.argument("slug")
    @locale_option
    @click.pass_obj
    def show(app: AppContext, slug: str, locale: str | None) -> None:
        """Show one record's frontmatter (and body with -v)."""
        from blogforge.services.content import ContentService

        app.emit(ContentService(app.project).get(collection, slug, locale=locale))

    @group.command(
        "search",
        examples=f"""\
  blogforge {cli_name} search nuxt
  blogforge {cli_name} search "content layer" --locale en""",
    )
    @click.argument("query")
    @locale_option
    @click.pass_obj
    def search(app: AppContext, query: str, locale: str | None) -> None:
        """Search text fields, tags and body (case-insensitive)."""
        from blogforge.services.content import ContentService

        app.emit(ContentService(app.project).search(collection, query, locale=locale))

    @group.command(
        "delete",
        examples=f"""\
  blogforge {cli_name} delete my-slug
  blogforge {cli_name} delete my-slug --force""",
    )
    @click.argument("slug")
    @click.option("--force", is_flag=True, help="Delete even when referenced or without confirming.")
    @click.pass_obj
    def delete(app: AppContext, slug: str, force: bool) -> None:
        """Delete a record."""
        from blogforge.services.content import ContentService

        if is_interactive(app) and not force:
            click.confirm(f"Delete {collection} '{slug}'?", abort=True)
        app.emit(ContentService(app.project).delete(collection, slug, force=force))

    @group.command(
        "validate",
        examples=f"""\
  blogforge {cli_name} validate
  blogforge --json {cli_name} validate""",
    )
    @click.pass_obj
    def validate(app: AppContext) -> None:
        """Validate every record against the project's schema."""
        from blogforge.services.doctor import DoctorService

        app.emit(DoctorService(app.project).validate(collection))
