"""Pydantic configuration models with code-baked defaults.

Sparse config contract: defaults baked here, ``blogforge.config.*`` only
contains overrides. File keys are camelCase (``defaultLanguage``,
``schemaExtensions``); Python attributes are snake_case.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, model_validator
from pydantic.alias_generators import to_camel

COLLECTIONS: tuple[str, ...] = ("article", "author", "category")


class DirectoriesConfig(BaseModel):
    """``directories`` section: sub-paths for each content kind."""

    model_config = ConfigDict(frozen=True)

    articles: str = "articles"
    authors: str = "authors"
    categories: str = "categories"
    images: str = "images"


class CollectionMaps(BaseModel):
    """Per-collection mapping of field name to value.

    Used for both ``schemaExtensions`` (example values) and
    ``defaultValues`` (defaults applied on create).
    """

    model_config = ConfigDict(frozen=True)

    article: dict[str, Any] = Field(default_factory=dict)
    author: dict[str, Any] = Field(default_factory=dict)
    category: dict[str, Any] = Field(default_factory=dict)

    def for_collection(self, collection: str) -> dict[str, Any]:
        """Return the mapping for *collection* (empty for unknown names)."""
        if collection not in COLLECTIONS:
            return {}
        return dict(getattr(self, collection))


class BlogForgeConfig(BaseModel):
    """Root project configuration.

    Constructed once per invocation and never mutated afterwards.

    Attributes:
        root: Absolute project root (None only on the bare defaults).
        languages: Ordered locale codes. Always contains
            ``default_language``; it is appended when missing.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    root: Path | None = None
    directories: DirectoriesConfig = Field(default_factory=DirectoriesConfig)
    multilingual: bool = False
    languages: tuple[str, ...] = ("en",)
    default_language: str = "en"
    schema_extensions: CollectionMaps = Field(default_factory=CollectionMaps)
    default_values: CollectionMaps = Field(
        default_factory=lambda: CollectionMaps(article={"isDraft": True})
    )

    @model_validator(mode="before")
    @classmethod
    def _include_default_language(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        default = data.get("default_language", data.get("defaultLanguage"))
        languages = list(data.get("languages") or ("en",))
        if default and default not in languages:
            data = {**data, "languages": [*languages, default]}
        return data


def default_config() -> BlogForgeConfig:
    """Return the built-in defaults (no root set)."""
    return _DEFAULT_CONFIG


_DEFAULT_CONFIG = BlogForgeConfig()


# --- User config validation shape ---


class UserDirectories(BaseModel):
    model_config = ConfigDict(extra="ignore")

    articles: StrictStr | None = None
    authors: StrictStr | None = None
    categories: StrictStr | None = None
    images: StrictStr | None = None


class UserCollectionMaps(BaseModel):
    model_config = ConfigDict(extra="ignore")

    article: dict[str, Any] | None = None
    author: dict[str, Any] | None = None
    category: dict[str, Any] | None = None


class UserConfig(BaseModel):
    """Shape of a raw user configuration object.

    Every field is optional; unknown top-level keys are ignored. Primitive
    fields are strict so that ``"yes"`` is rejected rather than coerced.
    """

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    root: StrictStr | None = None
    directories: UserDirectories | None = None
    multilingual: StrictBool | None = None
    languages: list[StrictStr] | None = None
    default_language: StrictStr | None = None
    schema_extensions: UserCollectionMaps | None = None
    default_values: UserCollectionMaps | None = None
