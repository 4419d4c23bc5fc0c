"""Command: project initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from blogforge.commands._base import BfCommand
from blogforge.services._helpers import parse_csv

if TYPE_CHECKING:
    from blogforge.commands._context import AppContext

_INIT_EXAMPLES = """\
  blogforge init
  blogforge init ./my-blog --languages en,fr --default-language en
  blogforge init . --articles posts --images img
  blogforge --no-interact init /tmp/blog --force"""


@click.command("init", cls=BfCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--languages", default=None, help="Comma-separated language codes.")
@click.option("--default-language", default=None, help="Default language code.")
@click.option(
    "--multilingual/--single-language",
    default=None,
    help="Store text fields per language (default: on when several languages).",
)
@click.option("--articles", "articles_dir", default=None, help="Articles directory name.")
@click.option("--authors", "authors_dir", default=None, help="Authors directory name.")
@click.option("--categories", "categories_dir", default=None, help="Categories directory name.")
@click.option("--images", "images_dir", default=None, help="Images directory name.")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration.")
@click.pass_obj
def init_cmd(
    app: AppContext,
    path: str,
    languages: str | None,
    default_language: str | None,
    multilingual: bool | None,
    articles_dir: str | None,
    authors_dir: str | None,
    categories_dir: str | None,
    images_dir: str | None,
    force: bool,
) -> None:
    """Initialize a blog project."""
    project_path = Path(path).resolve()
    interactive = app.interactive

    # Interactive prompts for missing options
    if languages is None:
        languages = click.prompt("Languages (comma-separated)", default="en") if interactive else "en"
    language_list = parse_csv(languages) or ["en"]

    if default_language is None and interactive and len(language_list) > 1:
        default_language = click.prompt(
            "Default language",
            type=click.Choice(language_list),
            default=language_list[0],
        )

    directories = {
        key: value
        for key, value in (
            ("articles", articles_dir),
            ("authors", authors_dir),
            ("categories", categories_dir),
            ("images", images_dir),
        )
        if value
    }

    from blogforge.services.init import InitService

    app.emit(
        InitService.init_project(
            project_path,
            languages=language_list,
            default_language=default_language,
            multilingual=multilingual,
            directories=directories,
            force=force,
        )
    )
