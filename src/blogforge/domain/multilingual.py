"""Multilingual text values.

A multilingual value is either a plain string or a mapping of locale code
to string. Which shape is canonical depends on ``config.multilingual``:

- :func:`normalize_multilingual` converts arbitrary input to the canonical
  shape without losing data.
- :func:`get_text_for_locale` extracts a display string with fallback
  (requested locale, default language, configured languages in order,
  first value).
- :func:`multilingual_text_type` is the validator counterpart used by the
  schema synthesizer.

INVARIANT: a mapping that already holds at least one configured language
key is returned untouched. Partial translations are legal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import PlainValidator
from pydantic_core import PydanticCustomError

if TYPE_CHECKING:
    from blogforge.config.models import BlogForgeConfig

MultilingualValue = str | dict[str, str]


def _first_value(value: Mapping[str, Any]) -> Any:
    for item in value.values():
        return item
    return None


def has_language_keys(value: Any, config: BlogForgeConfig) -> bool:
    """Whether *value* is a mapping with at least one configured language key."""
    if not isinstance(value, Mapping):
        return False
    return any(lang in value for lang in config.languages)


def normalize_multilingual(
    value: Any,
    config: BlogForgeConfig,
    locale: str | None = None,
) -> MultilingualValue:
    """Convert *value* to the representation dictated by *config*.

    Single-language projects always get a plain string. Multilingual
    projects get a locale mapping; strings and foreign objects are wrapped
    under *locale* (or the default language).
    """
    target = locale or config.default_language

    if not config.multilingual:
        if not value:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, Mapping):
            picked = value.get(target) or _first_value(value) or ""
            return str(picked)
        return str(value)

    if not value:
        return {target: ""}
    if isinstance(value, Mapping):
        if has_language_keys(value, config):
            return value  # type: ignore[return-value]
        return {target: str(_first_value(value) or "")}
    if isinstance(value, str):
        return {target: value}
    return {target: str(value)}


def get_text_for_locale(
    value: Any,
    config: BlogForgeConfig,
    locale: str | None = None,
) -> str:
    """Return the display string of *value* for *locale*.

    Fallback order for mappings: *locale*, ``default_language``, the first
    configured language with a non-empty entry, the first value, ``""``.
    """
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return str(value)

    candidates = [locale or config.default_language, config.default_language]
    candidates.extend(config.languages)
    for code in candidates:
        text = value.get(code)
        if text:
            return str(text)
    return str(_first_value(value) or "")


def all_texts(value: Any) -> list[str]:
    """Every string held by a multilingual value (used for search)."""
    if not value:
        return []
    if isinstance(value, Mapping):
        return [str(v) for v in value.values() if v]
    return [str(value)]


# ---------------------------------------------------------------------------
# Schema counterpart
# ---------------------------------------------------------------------------


def multilingual_text_type(config: BlogForgeConfig) -> Any:
    """Build the validator type for multilingual text fields.

    Single-language projects: a plain string. Multilingual projects: a
    string, or a mapping of string values holding at least one non-empty
    entry under a configured language code. Other keys are kept as-is.
    """
    if not config.multilingual:
        return str

    languages = tuple(config.languages)

    def _validate(value: Any) -> MultilingualValue:
        if isinstance(value, str):
            return value
        if not isinstance(value, Mapping):
            raise PydanticCustomError(
                "multilingual_type",
                "Input should be a string or a mapping of language code to string",
            )
        result: dict[str, str] = {}
        for key, text in value.items():
            if text is None:
                continue
            if not isinstance(text, str):
                raise PydanticCustomError(
                    "multilingual_entry",
                    "Translation for '{lang}' should be a string",
                    {"lang": str(key)},
                )
            result[str(key)] = text
        if not any(result.get(lang) for lang in languages):
            raise PydanticCustomError(
                "multilingual_empty",
                "At least one language must be provided ({languages})",
                {"languages": ", ".join(languages)},
            )
        return result

    return Annotated[Any, PlainValidator(_validate)]
