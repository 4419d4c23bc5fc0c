"""ImageService — image housekeeping over content records.

Images are matched to references by file name: ``/images/posts/a.png``,
``posts/a.png`` and ``a.png`` all refer to ``a.png`` anywhere under the
images directory. External URLs are ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from blogforge.config.models import COLLECTIONS
from blogforge.infrastructure.filesystem import (
    LoadedRecord,
    find_image_files,
    load_records,
    write_content_file,
)
from blogforge.services.base import BaseService
from blogforge.services.result import IO_ERROR, NOT_FOUND, ServiceResult

logger = logging.getLogger(__name__)

# Frontmatter keys that hold an image path.
IMAGE_FIELDS: tuple[str, ...] = ("image", "avatar")

_MD_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)")
_HTML_IMAGE_RE = re.compile(r"""<img[^>]*\bsrc=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_EXTERNAL_PREFIXES = ("http://", "https://", "//", "data:")


@dataclass(frozen=True)
class ImageReference:
    """One place a record points at an image."""

    collection: str
    slug: str
    image: str
    kind: str  # "frontmatter" or "inline"
    line: int | None = None
    alt: str | None = None

    @property
    def name(self) -> str:
        return PurePosixPath(self.image).name

    def to_dict(self) -> dict[str, Any]:
        return {
            "collection": self.collection,
            "slug": self.slug,
            "image": self.image,
            "kind": self.kind,
            "line": self.line,
        }


def is_external(ref: str) -> bool:
    return ref.startswith(_EXTERNAL_PREFIXES)


def suggest_alt_text(image: str) -> str:
    """Readable alt text derived from an image file name.

    Examples:
        >>> suggest_alt_text("/images/nuxt-content_setup-2.png")
        'Nuxt content setup 2'
    """
    stem = PurePosixPath(image).stem
    words = re.sub(r"[-_.]+", " ", stem).split()
    if not words:
        return ""
    text = " ".join(words)
    return text[0].upper() + text[1:]


def references_in(collection: str, record: LoadedRecord) -> list[ImageReference]:
    """All image references in a record's frontmatter and body."""
    refs: list[ImageReference] = []
    for key in IMAGE_FIELDS:
        value = record.frontmatter.get(key)
        if isinstance(value, str) and value:
            refs.append(ImageReference(collection, record.slug, value, "frontmatter"))
    for number, line in enumerate(record.body.splitlines(), start=1):
        for match in _MD_IMAGE_RE.finditer(line):
            refs.append(
                ImageReference(
                    collection, record.slug, match.group(2), "inline", number, match.group(1)
                )
            )
        for match in _HTML_IMAGE_RE.finditer(line):
            refs.append(ImageReference(collection, record.slug, match.group(1), "inline", number))
    return refs


class ImageService(BaseService):
    """Finds unused images, broken references and missing alt text."""

    def _records(self, collections: tuple[str, ...] = COLLECTIONS) -> list[tuple[str, LoadedRecord]]:
        loaded: list[tuple[str, LoadedRecord]] = []
        for collection in collections:
            for record in load_records(self._project.record_files(collection)):
                if record.error:
                    logger.warning("Skipping %s: %s", record.path.name, record.error)
                    continue
                loaded.append((collection, record))
        return loaded

    def _all_references(self) -> list[ImageReference]:
        return [
            ref
            for collection, record in self._records()
            for ref in references_in(collection, record)
            if not is_external(ref.image)
        ]

    def find_unused(self, *, delete: bool = False) -> ServiceResult:
        """Images under the images directory that no record references."""
        op = "find_unused"
        images_dir = self._project.images_dir
        if not images_dir.is_dir():
            return ServiceResult.failure(
                op, NOT_FOUND, f"Images directory not found: {images_dir}"
            )

        used = {ref.name for ref in self._all_references()}
        images = find_image_files(images_dir)
        unused = [
            {"path": path.relative_to(images_dir).as_posix(), "size": path.stat().st_size}
            for path in images
            if path.name not in used
        ]

        deleted: list[str] = []
        warnings: list[str] = []
        if delete:
            for item in unused:
                try:
                    (images_dir / item["path"]).unlink()
                except OSError as exc:
                    warnings.append(f"Failed to delete {item['path']}: {exc}")
                    continue
                deleted.append(item["path"])

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "total": len(images),
                "unused": unused,
                "wasted_bytes": sum(item["size"] for item in unused),
                "deleted": deleted,
            },
            warnings=warnings,
        )

    def validate_references(self) -> ServiceResult:
        """Image references that do not resolve to a file."""
        available = {path.name for path in find_image_files(self._project.images_dir)}
        references = self._all_references()
        broken = [ref.to_dict() for ref in references if ref.name not in available]
        return ServiceResult(
            ok=True,
            op="validate_references",
            data={"checked": len(references), "broken": broken, "count": len(broken)},
        )

    def suggest_alt(self, *, apply: bool = False) -> ServiceResult:
        """Inline Markdown images without alt text, with a suggested alt.

        With *apply*, the suggestions are written into the article bodies.
        """
        op = "suggest_alt"
        missing: list[dict[str, Any]] = []
        changed: list[str] = []
        for collection, record in self._records():
            refs = [
                ref
                for ref in references_in(collection, record)
                if ref.kind == "inline" and ref.alt is not None and not ref.alt.strip()
            ]
            if not refs:
                continue
            missing.extend(
                {**ref.to_dict(), "suggestion": suggest_alt_text(ref.image)} for ref in refs
            )
            if apply:
                try:
                    self._write_alt(record)
                except OSError as exc:
                    return ServiceResult.failure(
                        op, IO_ERROR, f"Failed to write {record.path}: {exc}"
                    )
                changed.append(str(record.path.name))

        return ServiceResult(
            ok=True,
            op=op,
            data={"missing": missing, "count": len(missing), "updated": changed},
        )

    def _write_alt(self, record: LoadedRecord) -> None:
        def fill(match: re.Match[str]) -> str:
            full = match.group(0)
            if match.group(1).strip():
                return full
            return f"![{suggest_alt_text(match.group(2))}]{full[full.index(']('):][1:]}"

        body = _MD_IMAGE_RE.sub(fill, record.body)
        write_content_file(record.path, record.frontmatter, body)
