"""Slug generation and validation.

Slugs are the stable identity of a content record: the file name
(``{slug}.md``) and the value referenced from other records (an
article's ``author`` and ``category``).
"""

from __future__ import annotations

import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[^\W_]+(?:-[^\W_]+)*$")


def slugify(text: str) -> str:
    """Derive a slug from display text.

    Lowercases, applies NFKC normalization, drops punctuation, and joins
    words with hyphens. Non-Latin letters are kept.
    """
    value = unicodedata.normalize("NFKC", text).lower()
    value = re.sub(r"[^\w\s-]", "", value)
    value = re.sub(r"[\s_-]+", "-", value).strip("-")
    return value


def is_valid_slug(slug: str) -> bool:
    """Check whether *slug* is safe to use as a file stem."""
    return SLUG_PATTERN.match(slug) is not None
