"""Dynamic schema synthesis for articles, authors and categories.

Each collection's validator is built in three layers, later layers
merging into earlier ones:

1. Base fields, hardcoded per collection. Their names are reserved.
2. Fields extracted from the user's content-type file (see
   :mod:`blogforge.domain.extractor`), looked up under conventional
   aliases. Names colliding with base fields are skipped.
3. ``schemaExtensions`` from the project config. The type of each field
   is inferred from the example value; every extension is optional.

INVARIANT: neither external source can remove or retype a base field.

The result is a :class:`ContentSchema` wrapping a frozen pydantic model.
Validation never raises; it returns a :class:`ValidationOutcome` with the
cleaned record or ``path: message`` issues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainValidator, ValidationError, create_model
from pydantic_core import PydanticCustomError

from blogforge.domain.extractor import FieldDescriptor, UserSchema, UserSchemas, extract_user_schemas
from blogforge.domain.multilingual import multilingual_text_type

if TYPE_CHECKING:
    from blogforge.config.models import BlogForgeConfig

logger = logging.getLogger(__name__)

# Names under which each collection may appear in the user's content file.
COLLECTION_ALIASES: dict[str, tuple[str, ...]] = {
    "article": ("article", "post", "blogPost"),
    "author": ("author", "authors"),
    "category": ("category", "categories", "topic", "topics"),
}

# Field names that would shadow pydantic's own attributes on a model.
_RESERVED_ATTRS = frozenset(dir(BaseModel))

_REQUIRED = ...


def _validate_number(value: Any) -> int | float:
    # bool is an int subclass but never a number here.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("number_type", "Input should be a valid number")
    return value


# Ints stay ints and floats stay floats through validation.
Number = Annotated[Any, PlainValidator(_validate_number)]


@dataclass(frozen=True)
class FieldSpec:
    """A field ready to be placed on the synthesized model."""

    name: str
    annotation: Any
    default: Any = _REQUIRED
    default_factory: Any = None
    source: str = "base"
    multilingual: bool = False

    @property
    def required(self) -> bool:
        return self.default is _REQUIRED and self.default_factory is None


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one record against a :class:`ContentSchema`.

    Attributes:
        data: The cleaned record (defaults filled in) when valid, else the
            input unchanged.
        issues: ``"path.joined: message"`` strings, empty when valid.
    """

    valid: bool
    data: dict[str, Any]
    issues: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ContentSchema:
    """Synthesized, immutable validator for one collection."""

    collection: str
    model: type[BaseModel]
    fields: tuple[FieldSpec, ...]
    base_names: frozenset[str]

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.fields]

    @property
    def required_names(self) -> list[str]:
        return [spec.name for spec in self.fields if spec.required]

    @property
    def multilingual_names(self) -> list[str]:
        """Fields holding multilingual text (normalised before validation)."""
        return [spec.name for spec in self.fields if spec.multilingual]

    def field_source(self, name: str) -> str | None:
        """Which layer contributed *name* (``base``, ``user``, ``extension``)."""
        for spec in self.fields:
            if spec.name == name:
                return spec.source
        return None

    def defaults(self) -> dict[str, Any]:
        """Default values of fields that declare one (None omitted)."""
        result: dict[str, Any] = {}
        for spec in self.fields:
            if spec.default_factory is not None:
                result[spec.name] = spec.default_factory()
            elif spec.default is not _REQUIRED and spec.default is not None:
                result[spec.name] = spec.default
        return result

    def validate(self, data: dict[str, Any]) -> ValidationOutcome:
        """Validate a frontmatter mapping.

        Unknown keys are kept so that records carrying fields the CLI does
        not know survive an edit.
        """
        try:
            instance = self.model.model_validate(data)
        except ValidationError as exc:
            return ValidationOutcome(valid=False, data=dict(data), issues=format_errors(exc))
        cleaned = instance.model_dump(by_alias=True, exclude_none=True)
        return ValidationOutcome(valid=True, data=cleaned)

    def is_valid(self, data: dict[str, Any]) -> bool:
        return self.validate(data).valid


@dataclass(frozen=True)
class SchemaSet:
    """The three synthesized schemas for one invocation."""

    article: ContentSchema
    author: ContentSchema
    category: ContentSchema

    def for_collection(self, collection: str) -> ContentSchema:
        if collection not in COLLECTION_ALIASES:
            msg = f"Unknown collection: {collection!r}"
            raise KeyError(msg)
        schema: ContentSchema = getattr(self, collection)
        return schema


def format_errors(exc: ValidationError) -> list[str]:
    """Render a pydantic error as ``path.joined: message`` strings."""
    issues: list[str] = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        issues.append(f"{path}: {err['msg']}" if path else err["msg"])
    return issues


# ---------------------------------------------------------------------------
# Layer 1: base fields
# ---------------------------------------------------------------------------


def _optional(annotation: Any) -> Any:
    return Optional[annotation]  # noqa: UP007


def article_base_fields(config: BlogForgeConfig) -> list[FieldSpec]:
    text = multilingual_text_type(config)
    defaults = config.default_values.for_collection("article")
    return [
        FieldSpec("title", text, multilingual=True),
        FieldSpec("description", text, multilingual=True),
        FieldSpec("author", str),
        FieldSpec("tags", list[str], default_factory=list),
        FieldSpec("locale", str, default=config.default_language),
        FieldSpec("isDraft", bool, default=bool(defaults.get("isDraft", True))),
        FieldSpec("slug", str),
        FieldSpec("category", _optional(str), default=None),
        FieldSpec("image", _optional(str), default=None),
        FieldSpec("readingTime", _optional(Number), default=None),
        FieldSpec("isFeatured", bool, default=bool(defaults.get("isFeatured", False))),
        FieldSpec("publishedAt", _optional(str), default=None),
        FieldSpec("updatedAt", _optional(str), default=None),
        FieldSpec("canonicalURL", _optional(str), default=None),
        FieldSpec("keywords", _optional(str), default=None),
    ]


def author_base_fields(config: BlogForgeConfig) -> list[FieldSpec]:
    text = multilingual_text_type(config)
    return [
        FieldSpec("slug", str),
        FieldSpec("name", text, multilingual=True),
        FieldSpec("bio", text, multilingual=True),
        FieldSpec("avatar", _optional(str), default=None),
        FieldSpec("twitter", _optional(str), default=None),
        FieldSpec("github", _optional(str), default=None),
        FieldSpec("website", _optional(str), default=None),
        FieldSpec("linkedin", _optional(str), default=None),
        FieldSpec("role", _optional(text), default=None, multilingual=True),
    ]


def category_base_fields(config: BlogForgeConfig) -> list[FieldSpec]:
    text = multilingual_text_type(config)
    return [
        FieldSpec("title", text, multilingual=True),
        FieldSpec("description", text, multilingual=True),
        FieldSpec("slug", str),
        FieldSpec("image", _optional(str), default=None),
        FieldSpec("icon", _optional(str), default=None),
    ]


_BASE_BUILDERS = {
    "article": article_base_fields,
    "author": author_base_fields,
    "category": category_base_fields,
}


# ---------------------------------------------------------------------------
# Layer 2: user-extracted fields
# ---------------------------------------------------------------------------


def find_user_schema(collection: str, user_schemas: UserSchemas) -> UserSchema | None:
    """Look *collection* up under its aliases.

    Exact alias spellings are tried first, then a case-insensitive match
    so that ``Post`` and ``Author`` document types are found too.
    """
    aliases = COLLECTION_ALIASES[collection]
    for alias in aliases:
        if alias in user_schemas:
            return user_schemas[alias]
    folded = {alias.casefold() for alias in aliases}
    for name, schema in user_schemas.items():
        if name.casefold() in folded:
            return schema
    return None


def annotation_for_descriptor(descriptor: FieldDescriptor, config: BlogForgeConfig) -> Any:
    """Map an extracted field type to a validator annotation.

    ``date``, ``enum`` and ``reference`` are stored as strings; ``json``
    and ``list`` are permissive containers; ``markdown`` and ``nested``
    accept the multilingual shape when flagged multilingual.
    """
    kind = descriptor.type
    if kind in ("string", "date", "enum", "reference"):
        return str
    if kind == "number":
        return Number
    if kind == "boolean":
        return bool
    if kind == "json":
        return dict[str, Any]
    if kind == "list":
        return list[Any]
    if kind in ("markdown", "nested"):
        return multilingual_text_type(config) if descriptor.multilingual else str
    return Any


def user_fields(
    collection: str,
    config: BlogForgeConfig,
    user_schemas: UserSchemas,
    reserved: frozenset[str],
) -> list[FieldSpec]:
    schema = find_user_schema(collection, user_schemas)
    if schema is None:
        return []
    specs: list[FieldSpec] = []
    for name, descriptor in schema.fields.items():
        if name in reserved:
            logger.debug("Skipping user field %r on %s: reserved base field", name, collection)
            continue
        annotation = annotation_for_descriptor(descriptor, config)
        multilingual = descriptor.multilingual and descriptor.type in ("markdown", "nested")
        if descriptor.required:
            spec = FieldSpec(name, annotation, source="user", multilingual=multilingual)
        else:
            spec = FieldSpec(
                name, _optional(annotation), default=None, source="user", multilingual=multilingual
            )
        specs.append(spec)
    return specs


# ---------------------------------------------------------------------------
# Layer 3: config extensions
# ---------------------------------------------------------------------------


def annotation_for_example(value: Any) -> Any:
    """Infer a primitive annotation from a config example value."""
    if isinstance(value, bool):
        return bool
    if isinstance(value, str):
        return str
    if isinstance(value, (int, float)):
        return Number
    if isinstance(value, list):
        return list[Any]
    if value is None:
        return type(None)
    return Any


def extension_fields(collection: str, config: BlogForgeConfig) -> list[FieldSpec]:
    extensions = config.schema_extensions.for_collection(collection)
    return [
        FieldSpec(name, _optional(annotation_for_example(example)), default=None, source="extension")
        for name, example in extensions.items()
    ]


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def _python_name(key: str, index: int) -> str:
    if key.isidentifier() and not key.startswith("_") and key not in _RESERVED_ATTRS:
        return key
    return f"field_{index}"


def _build_model(collection: str, specs: list[FieldSpec]) -> type[BaseModel]:
    definitions: dict[str, Any] = {}
    for index, spec in enumerate(specs):
        if spec.default_factory is not None:
            info = Field(default_factory=spec.default_factory, alias=spec.name)
        else:
            info = Field(default=spec.default, alias=spec.name)
        definitions[_python_name(spec.name, index)] = (spec.annotation, info)

    return create_model(  # type: ignore[call-overload,no-any-return]
        f"{collection.capitalize()}Frontmatter",
        __config__=ConfigDict(
            frozen=True,
            strict=True,
            extra="allow",
            populate_by_name=False,
            protected_namespaces=(),
        ),
        **definitions,
    )


def build_schema(
    collection: str,
    config: BlogForgeConfig,
    user_schemas: UserSchemas | None = None,
) -> ContentSchema:
    """Synthesize the schema for *collection* from all three layers."""
    base = _BASE_BUILDERS[collection](config)
    base_names = frozenset(spec.name for spec in base)

    merged: dict[str, FieldSpec] = {spec.name: spec for spec in base}
    for spec in user_fields(collection, config, user_schemas or {}, base_names):
        merged[spec.name] = spec
    for spec in extension_fields(collection, config):
        if spec.name in base_names:
            logger.warning(
                "schemaExtensions.%s.%s collides with a built-in field; ignoring it.",
                collection,
                spec.name,
            )
            continue
        merged[spec.name] = spec

    specs = list(merged.values())
    return ContentSchema(
        collection=collection,
        model=_build_model(collection, specs),
        fields=tuple(specs),
        base_names=base_names,
    )


def create_article_schema(
    config: BlogForgeConfig, user_schemas: UserSchemas | None = None
) -> ContentSchema:
    return build_schema("article", config, user_schemas)


def create_author_schema(
    config: BlogForgeConfig, user_schemas: UserSchemas | None = None
) -> ContentSchema:
    return build_schema("author", config, user_schemas)


def create_category_schema(
    config: BlogForgeConfig, user_schemas: UserSchemas | None = None
) -> ContentSchema:
    return build_schema("category", config, user_schemas)


def initialize_schemas(config: BlogForgeConfig, project_root: Path | None = None) -> SchemaSet:
    """Extract user schemas under the project root and synthesize all three."""
    root = project_root or config.root or Path.cwd()
    user_schemas = extract_user_schemas(root)
    return SchemaSet(
        article=create_article_schema(config, user_schemas),
        author=create_author_schema(config, user_schemas),
        category=create_category_schema(config, user_schemas),
    )
