"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def today_iso() -> str:
    """Today's date as YYYY-MM-DD."""
    return datetime.now(UTC).strftime("%Y-%m-%d")


def parse_csv(raw: str | None) -> list[str]:
    """Split a comma-separated option value, dropping blanks.

    Examples:
        >>> parse_csv("vue, nuxt,,content ")
        ['vue', 'nuxt', 'content']
        >>> parse_csv(None)
        []
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]
