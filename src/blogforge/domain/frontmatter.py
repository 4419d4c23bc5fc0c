"""Frontmatter read/write primitive.

- ``extract_frontmatter()``: split a markdown string into a plain
  ``dict`` of frontmatter and the body text.
- ``update_frontmatter()``: replace (or add) the frontmatter block of a
  markdown string, keeping its body.
- ``render_markdown()``: build a new document from frontmatter and body.

Keys are emitted in :data:`CANONICAL_KEY_ORDER`; other keys follow in
their original order. ``None`` values are omitted.
"""

from __future__ import annotations

import datetime as _dt
from collections.abc import Mapping
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError


class FrontmatterError(ValueError):
    """Raised when a frontmatter block is not valid YAML or not a mapping."""


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance.

    A new instance per call avoids corrupted internal emitter state from
    propagating across operations.
    """
    y = YAML()
    y.default_flow_style = False
    y.allow_unicode = True
    y.width = 1000
    return y


CANONICAL_KEY_ORDER: list[str] = [
    "slug",
    "title",
    "name",
    "description",
    "bio",
    "role",
    "author",
    "category",
    "tags",
    "locale",
    "isDraft",
    "isFeatured",
    "image",
    "avatar",
    "icon",
    "readingTime",
    "publishedAt",
    "updatedAt",
    "canonicalURL",
    "keywords",
]

_FRONTMATTER_DELIMITER = "---"


def to_plain(value: Any) -> Any:
    """Convert ruamel round-trip containers and scalars to builtins."""
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, _dt.datetime):
        return value.isoformat()
    if isinstance(value, _dt.date):
        return value.isoformat()
    return value


def _split(md: str) -> tuple[str | None, str]:
    """Return ``(yaml_block, body)``; the block is None when absent."""
    normalized = md.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, md

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            body = "\n".join(lines[i + 1 :])
            if body.startswith("\n"):
                body = body[1:]
            return "\n".join(lines[1:i]), body
    return None, md


def extract_frontmatter(md: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter and body from markdown content.

    Dates written unquoted in YAML come back as ISO strings so that they
    validate as the string-typed date fields.

    Returns:
        A ``(frontmatter, body)`` tuple; ``({}, md)`` when there is no
        frontmatter block.

    Raises:
        FrontmatterError: The block is not valid YAML or not a mapping.
    """
    block, body = _split(md)
    if block is None:
        return {}, md
    try:
        loaded = _new_yaml().load(block)
    except YAMLError as exc:
        raise FrontmatterError(f"Invalid YAML frontmatter: {exc}") from exc
    if loaded is None:
        return {}, body
    if not isinstance(loaded, Mapping):
        raise FrontmatterError("Frontmatter must be a mapping")
    return to_plain(loaded), body


def order_frontmatter(fm: Mapping[str, Any]) -> dict[str, Any]:
    """Return *fm* with canonical keys first and ``None`` values dropped."""
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm and fm[key] is not None:
            ordered[key] = fm[key]
    for key, value in fm.items():
        if key not in ordered and value is not None:
            ordered[key] = value
    return ordered


def render_markdown(frontmatter: Mapping[str, Any], body: str) -> str:
    """Render a frontmatter mapping and body text into markdown."""
    buf = StringIO()
    _new_yaml().dump(order_frontmatter(frontmatter), buf)
    parts = [_FRONTMATTER_DELIMITER, "\n", buf.getvalue(), _FRONTMATTER_DELIMITER, "\n"]
    stripped = body.strip()
    if stripped:
        parts.extend(["\n", stripped, "\n"])
    return "".join(parts)


def update_frontmatter(md: str, new_frontmatter: Mapping[str, Any]) -> str:
    """Replace the frontmatter of *md* with *new_frontmatter*, keeping the body."""
    block, body = _split(md)
    return render_markdown(new_frontmatter, body if block is not None else md)
