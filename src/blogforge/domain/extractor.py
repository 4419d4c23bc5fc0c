"""User schema extraction from a content-type definition file.

Best-effort bridge between a hand-authored ``content.config.ts`` and the
CLI's own validators. The file is scanned textually for declarations of
the shape::

    defineDocumentType(() => ({
      name: "Post",
      fields: {
        title: { type: "string", required: true },
        summary: { type: "markdown" },
      },
    }))

For every field block the type, required flag and multilingual flag are
read with substring patterns over the block's top level. Nothing here
raises: an absent file, an unreadable file, or a file written in another
style yields an empty mapping.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from blogforge.infrastructure.jstext import find_block_end, mask_nested, strip_comments

logger = logging.getLogger(__name__)

CONTENT_CONFIG_FILENAMES: tuple[str, ...] = (
    "content.config.ts",
    "contentlayer.config.ts",
    "contentlayer.config.js",
)

# Checked in order; the first marker present wins.
FIELD_TYPES: tuple[str, ...] = (
    "string",
    "date",
    "number",
    "boolean",
    "json",
    "nested",
    "list",
    "markdown",
    "reference",
    "enum",
)

_DOC_TYPE_RE = re.compile(r"defineDocumentType\(\s*\(\s*\)\s*=>\s*\(\s*\{")
_NAME_RE = re.compile(r"""\bname\s*:\s*['"]([^'"]+)['"]""")
_FIELDS_RE = re.compile(r"\bfields\s*:\s*\{")
_FIELD_RE = re.compile(r"([A-Za-z0-9_$]+)\s*:\s*\{")
_REQUIRED_RE = re.compile(r"\brequired\s*:\s*true\b")
_LOCALIZED_RE = re.compile(r"\blocalized\s*:\s*true\b")
_TYPE_MARKERS: dict[str, re.Pattern[str]] = {
    name: re.compile(rf"""\btype\s*:\s*['"]{name}['"]""") for name in FIELD_TYPES
}


class FieldDescriptor(BaseModel):
    """One extracted field: its primitive kind and flags."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"
    required: bool = False
    multilingual: bool = False


class UserSchema(BaseModel):
    """Fields declared for one document type."""

    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldDescriptor] = Field(default_factory=dict)


UserSchemas = dict[str, UserSchema]


def find_content_config(project_root: Path) -> Path | None:
    """Return the first content-type definition file present at the root."""
    for name in CONTENT_CONFIG_FILENAMES:
        candidate = project_root / name
        if candidate.is_file():
            return candidate
    return None


def extract_user_schemas(project_root: Path) -> UserSchemas:
    """Extract per-document-type field descriptors under *project_root*.

    Returns an empty mapping when no definition file exists or when it
    cannot be read; callers then fall back to the base schemas.
    """
    path = find_content_config(project_root)
    if path is None:
        logger.debug("No content config found in %s. Using base schemas only.", project_root)
        return {}

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", path.name, exc)
        return {}

    schemas = parse_document_types(source)
    logger.debug("Extracted %d schemas from %s", len(schemas), path.name)
    return schemas


def parse_document_types(source: str) -> UserSchemas:
    """Scan *source* text for document type declarations."""
    text = strip_comments(source)
    schemas: UserSchemas = {}

    for match in _DOC_TYPE_RE.finditer(text):
        open_idx = match.end() - 1
        close_idx = find_block_end(text, open_idx)
        if close_idx < 0:
            logger.debug("Unterminated document type at offset %d", open_idx)
            continue
        body = text[open_idx + 1 : close_idx]
        masked = mask_nested(body)

        name_match = _NAME_RE.search(masked)
        fields_match = _FIELDS_RE.search(masked)
        if name_match is None or fields_match is None:
            continue

        fields_open = fields_match.end() - 1
        fields_close = find_block_end(body, fields_open)
        if fields_close < 0:
            continue
        fields = parse_fields(body[fields_open + 1 : fields_close])
        schemas[name_match.group(1)] = UserSchema(fields=fields)

    return schemas


def parse_fields(fields_source: str) -> dict[str, FieldDescriptor]:
    """Parse the body of a ``fields: { ... }`` block."""
    fields: dict[str, FieldDescriptor] = {}
    pos = 0
    while True:
        match = _FIELD_RE.search(fields_source, pos)
        if match is None:
            break
        open_idx = match.end() - 1
        close_idx = find_block_end(fields_source, open_idx)
        if close_idx < 0:
            break
        descriptor = fields_source[open_idx + 1 : close_idx]
        fields[match.group(1)] = describe_field(match.group(1), descriptor)
        pos = close_idx + 1
    return fields


def describe_field(name: str, descriptor: str) -> FieldDescriptor:
    """Build a :class:`FieldDescriptor` from the text inside a field's braces.

    Only the descriptor's own top level is inspected, so the element type
    of a ``list`` (``of: { type: "string" }``) does not leak into it.
    """
    top = mask_nested(descriptor)
    field_type = next(
        (kind for kind in FIELD_TYPES if _TYPE_MARKERS[kind].search(top)),
        "string",
    )
    multilingual = field_type == "markdown" or _LOCALIZED_RE.search(top) is not None
    return FieldDescriptor(
        name=name,
        type=field_type,
        required=_REQUIRED_RE.search(top) is not None,
        multilingual=multilingual,
    )
