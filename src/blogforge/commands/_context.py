"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Project initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from blogforge.output.formatters import OutputSettings, format_result
from blogforge.services.result import NO_PROJECT, ServiceResult

if TYPE_CHECKING:
    from blogforge.config.settings import BlogForgeSettings
    from blogforge.infrastructure.project import Project

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The project is lazily
    opened on first use so ``--help``, ``--version`` and ``init`` never
    need an existing project.
    """

    def __init__(self, settings: BlogForgeSettings) -> None:
        self.settings = settings
        self._project: Project | None = None

        from blogforge.config.logging import configure_logging

        configure_logging(settings)

    @property
    def interactive(self) -> bool:
        return not self.settings.no_interact

    @property
    def project(self) -> Project:
        """The project (discovered lazily on first access).

        Emits a ``NO_PROJECT`` error and exits when none can be found.
        """
        if self._project is None:
            from blogforge.infrastructure.project import Project, ProjectNotFoundError

            try:
                self._project = Project.open(explicit_root=self.settings.project_root)
            except ProjectNotFoundError as exc:
                self.emit(ServiceResult.failure("open_project", NO_PROJECT, str(exc)))
                raise SystemExit(1) from exc
            logger.debug("Opened project at %s", self._project.root)
        return self._project

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
