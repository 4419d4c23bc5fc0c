"""Filesystem operations for content records.

INVARIANT: Files are truth. Every record is ``{collection_dir}/{slug}.md``
and nothing is cached between invocations.

Pure parsing/rendering lives in :mod:`blogforge.domain.frontmatter`.
This module handles actual file I/O, path resolution and discovery.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from blogforge.domain.frontmatter import extract_frontmatter, render_markdown

MARKDOWN_SUFFIX = ".md"
IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".webp", ".avif", ".svg"})

# Worker cap for bulk reads.
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class LoadedRecord:
    """Outcome of reading one content file.

    Exactly one of ``frontmatter`` or ``error`` is meaningful: a file that
    cannot be read or parsed carries the error message instead.
    """

    path: Path
    frontmatter: dict[str, Any]
    body: str
    error: str | None = None

    @property
    def slug(self) -> str:
        return self.path.stem


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_content_file(path: Path) -> tuple[dict[str, Any], str]:
    """Read a markdown file, returning ``(frontmatter, body)``."""
    return extract_frontmatter(path.read_text(encoding="utf-8"))


def write_content_file(path: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Write frontmatter + body to a markdown file.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_markdown(frontmatter, body), encoding="utf-8")


def load_record(path: Path) -> LoadedRecord:
    """Read and parse *path*, capturing failures on the record."""
    try:
        frontmatter, body = read_content_file(path)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        return LoadedRecord(path=path, frontmatter={}, body="", error=str(exc))
    return LoadedRecord(path=path, frontmatter=frontmatter, body=body)


def load_records(
    paths: Iterable[Path],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[LoadedRecord]:
    """Read many files concurrently, returning records in input order."""
    path_list = list(paths)
    if not path_list:
        return []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(path_list))) as pool:
        return list(pool.map(load_record, path_list))


# ---------------------------------------------------------------------------
# Path resolution and discovery
# ---------------------------------------------------------------------------


def resolve_record_path(directory: Path, slug: str) -> Path:
    """Resolve ``{directory}/{slug}.md``, refusing paths that escape it."""
    result = directory / f"{slug}{MARKDOWN_SUFFIX}"
    if not result.resolve().is_relative_to(directory.resolve()):
        msg = f"Path escapes content directory: {result}"
        raise ValueError(msg)
    return result


def find_markdown_files(directory: Path) -> list[Path]:
    """Markdown files directly inside *directory*, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix == MARKDOWN_SUFFIX
    )


def find_image_files(directory: Path) -> list[Path]:
    """Image files anywhere under *directory*, sorted."""
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )
