"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

OVERRIDE_DIR = ".blogforge/templates"


def build_template_environment(group: str, *, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with project overrides before packaged defaults.

    Overrides are loaded from ``.blogforge/templates/`` inside the project,
    either namespaced (``.blogforge/templates/content/``) or flat.
    """

    loaders: list[BaseLoader] = []
    if project_root is not None:
        template_root = project_root / OVERRIDE_DIR
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("blogforge", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def render_body(collection: str, *, project_root: Path | None = None, **context: object) -> str:
    """Render the starter body for a new record of *collection*."""
    env = build_template_environment("content", project_root=project_root)
    return env.get_template(f"{collection}.md.j2").render(**context)
