"""Project — the single dependency injected into every service.

Owns the resolved project root, the loaded configuration, the directory
layout derived from it, and the synthesized schemas (built lazily on
first access, once per invocation).

Layout::

    {root}/content/{directories.articles}/*.md
    {root}/content/{directories.authors}/*.md
    {root}/content/{directories.categories}/*.md
    {root}/public/{directories.images}/
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from blogforge.config.loader import CONFIG_BASENAME, load_config
from blogforge.domain.schemas import SchemaSet, initialize_schemas
from blogforge.infrastructure.filesystem import find_markdown_files, resolve_record_path

if TYPE_CHECKING:
    from blogforge.config.models import BlogForgeConfig

logger = logging.getLogger(__name__)

CONTENT_DIRNAME = "content"
PUBLIC_DIRNAME = "public"

# Files whose presence marks a directory as a project root.
PROJECT_MARKERS: tuple[str, ...] = (
    f"{CONFIG_BASENAME}.ts",
    f"{CONFIG_BASENAME}.js",
    f"{CONFIG_BASENAME}.mjs",
    f"{CONFIG_BASENAME}.cjs",
    f"{CONFIG_BASENAME}.json",
    CONFIG_BASENAME,
    "content.config.ts",
    "nuxt.config.ts",
    "nuxt.config.js",
)

_COLLECTION_DIR_ATTR = {
    "article": "articles",
    "author": "authors",
    "category": "categories",
}


class ProjectNotFoundError(LookupError):
    """Raised when no project root can be located."""


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a project marker."""
    current = (start or Path.cwd()).resolve()
    while True:
        if any((current / marker).is_file() for marker in PROJECT_MARKERS):
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


class Project:
    """A blog project on disk.

    Construct with :meth:`open` for discovery, or directly with a known
    root and (optionally) a pre-built configuration.
    """

    def __init__(self, root: Path, config: BlogForgeConfig | None = None) -> None:
        root = root.resolve()
        self.config = config if config is not None else load_config(root)
        # A ``root`` in the config file relocates the content tree.
        self.root = self.config.root or root
        self._schemas: SchemaSet | None = None

    @classmethod
    def open(cls, start: Path | None = None, *, explicit_root: Path | None = None) -> Project:
        """Locate and open a project.

        Raises:
            ProjectNotFoundError: No marker file found walking up from *start*.
        """
        if explicit_root is not None:
            return cls(explicit_root)
        root = find_project_root(start)
        if root is None:
            msg = (
                "Could not find a blog project. Expected blogforge.config.*, "
                "content.config.ts or nuxt.config.* in this or a parent directory."
            )
            raise ProjectNotFoundError(msg)
        return cls(root)

    # --- Layout ---

    @property
    def content_dir(self) -> Path:
        return self.root / CONTENT_DIRNAME

    @property
    def public_dir(self) -> Path:
        return self.root / PUBLIC_DIRNAME

    @property
    def images_dir(self) -> Path:
        return self.public_dir / self.config.directories.images

    def collection_dir(self, collection: str) -> Path:
        """Directory holding the records of *collection*."""
        attr = _COLLECTION_DIR_ATTR.get(collection)
        if attr is None:
            msg = f"Unknown collection: {collection!r}"
            raise ValueError(msg)
        return self.content_dir / getattr(self.config.directories, attr)

    def record_path(self, collection: str, slug: str) -> Path:
        return resolve_record_path(self.collection_dir(collection), slug)

    def record_files(self, collection: str) -> list[Path]:
        return find_markdown_files(self.collection_dir(collection))

    def record_slugs(self, collection: str) -> list[str]:
        return [path.stem for path in self.record_files(collection)]

    def ensure_directories(self) -> list[Path]:
        """Create missing content and image directories; return those created."""
        created: list[Path] = []
        targets = [self.collection_dir(name) for name in _COLLECTION_DIR_ATTR]
        targets.append(self.images_dir)
        for directory in targets:
            if not directory.exists():
                directory.mkdir(parents=True, exist_ok=True)
                logger.debug("Created directory %s", directory)
                created.append(directory)
        return created

    # --- Schemas ---

    @property
    def schemas(self) -> SchemaSet:
        """Synthesized schemas (built on first access)."""
        if self._schemas is None:
            self._schemas = initialize_schemas(self.config, self.root)
        return self._schemas
