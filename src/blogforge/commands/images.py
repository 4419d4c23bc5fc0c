"""Command group: image housekeeping."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogforge.commands._base import BfGroup
from blogforge.commands._records import is_interactive

if TYPE_CHECKING:
    from blogforge.commands._context import AppContext


@click.group(
    cls=BfGroup,
    examples="""\
  blogforge images find-unused
  blogforge images find-unused --delete
  blogforge images validate-references
  blogforge images suggest-alt --apply""",
)
@click.pass_obj
def images(app: AppContext) -> None:
    """Find unused images, broken references and missing alt text."""


@images.command(
    "find-unused",
    examples="""\
  blogforge images find-unused
  blogforge images find-unused --delete""",
)
@click.option("--delete", is_flag=True, help="Delete the unused images.")
@click.pass_obj
def find_unused(app: AppContext, delete: bool) -> None:
    """List images that no record references."""
    from blogforge.services.images import ImageService

    if delete and is_interactive(app):
        click.confirm("Delete every unused image?", abort=True)
    app.emit(ImageService(app.project).find_unused(delete=delete))


@images.command("validate-references", examples="  blogforge images validate-references")
@click.pass_obj
def validate_references(app: AppContext) -> None:
    """Report image references that do not resolve to a file."""
    from blogforge.services.images import ImageService

    app.emit(ImageService(app.project).validate_references())


@images.command(
    "suggest-alt",
    examples="""\
  blogforge images suggest-alt
  blogforge images suggest-alt --apply""",
)
@click.option("--apply", is_flag=True, help="Write the suggested alt text into the files.")
@click.pass_obj
def suggest_alt(app: AppContext, apply: bool) -> None:
    """Suggest alt text for images that have none."""
    from blogforge.services.images import ImageService

    app.emit(ImageService(app.project).suggest_alt(apply=apply))
