"""InitService — bootstrap a blog project.

Writes ``blogforge.config.json`` from a packaged template, then creates
the content and image directories it describes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from blogforge.config.loader import CONFIG_BASENAME, find_config_file, load_config
from blogforge.config.models import DirectoriesConfig
from blogforge.infrastructure.project import Project
from blogforge.infrastructure.templates import build_template_environment
from blogforge.services.result import ALREADY_EXISTS, INVALID_INPUT, IO_ERROR, ServiceResult

logger = logging.getLogger(__name__)

CONFIG_FILENAME = f"{CONFIG_BASENAME}.json"


class InitService:
    """Creates the configuration file and directory layout."""

    @staticmethod
    def init_project(
        path: Path,
        *,
        languages: list[str] | None = None,
        default_language: str | None = None,
        multilingual: bool | None = None,
        directories: dict[str, str] | None = None,
        force: bool = False,
    ) -> ServiceResult:
        """Initialize a project at *path*.

        *multilingual* defaults to True when more than one language is
        given. The default language defaults to the first language and is
        added to the list when missing.
        """
        op = "init"
        path = path.resolve()
        existing = find_config_file(path)
        if existing is not None and not force:
            return ServiceResult.failure(
                op,
                ALREADY_EXISTS,
                f"Configuration already exists: {existing.name}. Use --force to overwrite.",
                path=str(existing),
            )

        langs = list(dict.fromkeys(languages or ["en"]))
        default = default_language or langs[0]
        if default not in langs:
            langs.append(default)
        if multilingual is None:
            multilingual = len(langs) > 1

        try:
            dirs = DirectoriesConfig(**(directories or {}))
        except ValidationError as exc:
            return ServiceResult.failure(op, INVALID_INPUT, f"Invalid directories: {exc}")

        env = build_template_environment("init")
        rendered = env.get_template(f"{CONFIG_FILENAME}.j2").render(
            directories=dirs,
            multilingual=multilingual,
            languages=langs,
            default_language=default,
        )

        config_path = path / CONFIG_FILENAME
        try:
            path.mkdir(parents=True, exist_ok=True)
            config_path.write_text(rendered, encoding="utf-8")
            project = Project(path, load_config(path))
            created = project.ensure_directories()
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to initialize {path}: {exc}")

        logger.debug("Initialized project at %s", path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "config": str(config_path),
                "multilingual": multilingual,
                "languages": langs,
                "default_language": default,
                "directories_created": [str(d.relative_to(project.root)) for d in created],
            },
        )
