"""Commands: project-wide validation and statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogforge.commands._base import BfCommand

if TYPE_CHECKING:
    from blogforge.commands._context import AppContext


@click.command(
    cls=BfCommand,
    examples="""\
  blogforge doctor
  blogforge doctor --errors-only
  blogforge --json doctor""",
)
@click.option("--errors-only", is_flag=True, help="Hide warnings.")
@click.pass_obj
def doctor(app: AppContext, errors_only: bool) -> None:
    """Validate all content and check references between records."""
    from blogforge.services.doctor import SEVERITY_ERROR, DoctorService
    from blogforge.services.result import ServiceResult

    result = DoctorService(app.project).check()
    if errors_only:
        issues = [i for i in result.data["issues"] if i["severity"] == SEVERITY_ERROR]
        result = ServiceResult(
            ok=result.ok,
            op=result.op,
            data={**result.data, "issues": issues, "warnings": 0},
            warnings=result.warnings,
        )
    app.emit(result)


@click.command(
    cls=BfCommand,
    examples="""\
  blogforge stats
  blogforge -v stats
  blogforge --json stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show content counts by status, locale, category, author and tag."""
    from blogforge.services.content import ContentService

    app.emit(ContentService(app.project).stats())
