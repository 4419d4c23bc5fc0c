"""ContentService — CRUD for articles, authors and categories.

Pipeline for every write: MERGE DEFAULTS → NORMALISE → VALIDATE → PERSIST.
Nothing is written unless the record validates against the synthesized
schema for its collection.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from blogforge.domain.multilingual import (
    all_texts,
    get_text_for_locale,
    normalize_multilingual,
)
from blogforge.domain.slugs import is_valid_slug, slugify
from blogforge.infrastructure.filesystem import load_records, read_content_file, write_content_file
from blogforge.infrastructure.templates import render_body
from blogforge.services._helpers import today_iso
from blogforge.services.base import BaseService
from blogforge.services.result import (
    ALREADY_EXISTS,
    IN_USE,
    INVALID_INPUT,
    IO_ERROR,
    NOT_FOUND,
    VALIDATION_FAILED,
    ServiceResult,
)

logger = logging.getLogger(__name__)

# Field holding the display name of each collection.
TITLE_FIELDS: dict[str, str] = {
    "article": "title",
    "author": "name",
    "category": "title",
}

# Article fields that reference other collections.
REFERENCE_FIELDS: dict[str, str] = {
    "author": "author",
    "category": "category",
}


class ContentService(BaseService):
    """Create, read, update and delete content records."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def display_title(
        self, collection: str, frontmatter: Mapping[str, Any], locale: str | None = None
    ) -> str:
        """Display name of a record for *locale*."""
        return get_text_for_locale(frontmatter.get(TITLE_FIELDS[collection]), self.config, locale)

    def _normalise(
        self, collection: str, record: dict[str, Any], locale: str | None
    ) -> dict[str, Any]:
        """Normalise every multilingual field present in *record*."""
        result = dict(record)
        for name in self._schema(collection).multilingual_names:
            if result.get(name) is not None:
                result[name] = normalize_multilingual(result[name], self.config, locale)
        return result

    def _locate(self, collection: str, slug: str) -> Path | None:
        """Path of an existing record, or None when *slug* escapes the directory."""
        try:
            return self._project.record_path(collection, slug)
        except ValueError:
            return None

    def _merge_text(self, existing: Any, new: Any, locale: str | None) -> Any:
        """Merge a single-locale edit into an existing language map."""
        if (
            self.config.multilingual
            and isinstance(existing, Mapping)
            and isinstance(new, str)
        ):
            return {**existing, (locale or self.config.default_language): new}
        return new

    def _missing_reference(self, field: str, value: Any) -> str | None:
        """Return an error message when an article points at a missing record."""
        if not value:
            return None
        collection = REFERENCE_FIELDS[field]
        # Blogs that never created author records may still name authors.
        if collection == "author" and not self._project.record_files("author"):
            return None
        path = self._locate(collection, str(value))
        if path is not None and path.is_file():
            return None
        return f"{collection.capitalize()} {value!r} not found. Create the {collection} first."

    def _summary(
        self, collection: str, slug: str, fm: Mapping[str, Any], locale: str | None
    ) -> dict[str, Any]:
        item: dict[str, Any] = {
            "slug": slug,
            "title": self.display_title(collection, fm, locale),
        }
        if collection == "article":
            item["author"] = fm.get("author", "")
            item["category"] = fm.get("category") or ""
            item["locale"] = fm.get("locale", "")
            item["isDraft"] = fm.get("isDraft", True)
            item["publishedAt"] = fm.get("publishedAt") or ""
            item["tags"] = list(fm.get("tags") or [])
        elif collection == "author":
            item["role"] = get_text_for_locale(fm.get("role"), self.config, locale)
        else:
            item["description"] = get_text_for_locale(fm.get("description"), self.config, locale)
        return item

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        *,
        body: str | None = None,
        locale: str | None = None,
    ) -> ServiceResult:
        """Create a new record from *data*.

        The slug defaults to a slug of the display title. Collection
        defaults from ``defaultValues`` sit under the supplied data.
        """
        op = "create"
        schema = self._schema(collection)
        supplied = {key: value for key, value in data.items() if value is not None}
        record: dict[str, Any] = {**self.config.default_values.for_collection(collection), **supplied}
        if collection == "article" and locale and "locale" not in supplied:
            record["locale"] = locale
        record = self._normalise(collection, record, locale)

        title = self.display_title(collection, record, locale)
        slug = str(record.get("slug") or slugify(title))
        if not is_valid_slug(slug):
            return ServiceResult.failure(
                op, INVALID_INPUT, f"Invalid slug {slug!r}", collection=collection
            )
        record["slug"] = slug

        if collection == "article":
            for field in REFERENCE_FIELDS:
                message = self._missing_reference(field, record.get(field))
                if message:
                    return ServiceResult.failure(op, NOT_FOUND, message, field=field)

        outcome = schema.validate(record)
        if not outcome.valid:
            return ServiceResult.failure(
                op,
                VALIDATION_FAILED,
                f"Invalid {collection} frontmatter",
                issues=outcome.issues,
            )

        path = self._project.record_path(collection, slug)
        if path.exists():
            return ServiceResult.failure(
                op, ALREADY_EXISTS, f"{collection.capitalize()} {slug!r} already exists", path=str(path)
            )

        if body is None:
            body = render_body(
                collection,
                project_root=self._project.root,
                title=title,
                description=get_text_for_locale(record.get("description"), self.config, locale),
                bio=get_text_for_locale(record.get("bio"), self.config, locale),
                body=None,
            )
        try:
            write_content_file(path, outcome.data, body)
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to write {path}: {exc}")

        logger.debug("Created %s %s at %s", collection, slug, path)
        return ServiceResult(
            ok=True,
            op=op,
            data={"collection": collection, "slug": slug, "title": title, "path": str(path)},
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, collection: str, slug: str, *, locale: str | None = None) -> ServiceResult:
        """Return one record's frontmatter and body."""
        op = "get"
        path = self._locate(collection, slug)
        if path is None or not path.is_file():
            return ServiceResult.failure(
                op, NOT_FOUND, f"{collection.capitalize()} {slug!r} not found"
            )
        try:
            frontmatter, body = read_content_file(path)
        except (OSError, ValueError) as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to read {path}: {exc}")

        outcome = self._schema(collection).validate(frontmatter)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "collection": collection,
                "slug": slug,
                "title": self.display_title(collection, frontmatter, locale),
                "path": str(path),
                "frontmatter": frontmatter,
                "body": body,
            },
            warnings=outcome.issues,
        )

    def list_records(
        self,
        collection: str,
        *,
        locale: str | None = None,
        drafts: bool | None = None,
        tag: str | None = None,
        category: str | None = None,
        author: str | None = None,
    ) -> ServiceResult:
        """List records, optionally filtered (article filters only apply to articles)."""
        items: list[dict[str, Any]] = []
        warnings: list[str] = []
        for record in load_records(self._project.record_files(collection)):
            if record.error:
                warnings.append(f"{record.path.name}: {record.error}")
                continue
            fm = record.frontmatter
            if collection == "article":
                if drafts is not None and bool(fm.get("isDraft", True)) != drafts:
                    continue
                if tag and tag not in (fm.get("tags") or []):
                    continue
                if category and fm.get("category") != category:
                    continue
                if author and fm.get("author") != author:
                    continue
            items.append(self._summary(collection, record.slug, fm, locale))

        return ServiceResult(
            ok=True,
            op="list",
            data={"collection": collection, "items": items, "count": len(items)},
            warnings=warnings,
        )

    def search(self, collection: str, query: str, *, locale: str | None = None) -> ServiceResult:
        """Case-insensitive search over text fields, tags, slug and body."""
        needle = query.casefold().strip()
        if not needle:
            return ServiceResult.failure("search", INVALID_INPUT, "Search query must not be empty")

        text_fields = self._schema(collection).multilingual_names
        items: list[dict[str, Any]] = []
        for record in load_records(self._project.record_files(collection)):
            if record.error:
                continue
            fm = record.frontmatter
            matched: list[str] = []
            if needle in record.slug.casefold():
                matched.append("slug")
            for name in text_fields:
                if any(needle in text.casefold() for text in all_texts(fm.get(name))):
                    matched.append(name)
            if any(needle in str(t).casefold() for t in fm.get("tags") or []):
                matched.append("tags")
            if needle in record.body.casefold():
                matched.append("body")
            if matched:
                item = self._summary(collection, record.slug, fm, locale)
                item["matches"] = matched
                items.append(item)

        return ServiceResult(
            ok=True,
            op="search",
            data={"collection": collection, "query": query, "items": items, "count": len(items)},
        )

    # ------------------------------------------------------------------
    # Update / delete
    # ------------------------------------------------------------------

    def update(
        self,
        collection: str,
        slug: str,
        changes: Mapping[str, Any],
        *,
        body: str | None = None,
        locale: str | None = None,
    ) -> ServiceResult:
        """Apply *changes* to an existing record.

        A ``None`` value removes the key. For multilingual projects, a
        plain-string change to a text field updates only *locale* (or the
        default language) inside the existing language map.
        """
        op = "update"
        path = self._locate(collection, slug)
        if path is None or not path.is_file():
            return ServiceResult.failure(
                op, NOT_FOUND, f"{collection.capitalize()} {slug!r} not found"
            )
        if "slug" in changes and changes["slug"] != slug:
            return ServiceResult.failure(
                op,
                INVALID_INPUT,
                "Slug cannot be changed; create a new record and delete this one instead.",
            )
        try:
            existing, existing_body = read_content_file(path)
        except (OSError, ValueError) as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to read {path}: {exc}")

        multilingual_names = set(self._schema(collection).multilingual_names)
        merged = dict(existing)
        changed: list[str] = []
        for key, value in changes.items():
            if value is None:
                if key in merged:
                    merged.pop(key)
                    changed.append(key)
                continue
            if key in multilingual_names:
                value = self._merge_text(existing.get(key), value, locale)
            if merged.get(key) != value:
                merged[key] = value
                changed.append(key)
        merged = self._normalise(collection, merged, locale)

        if collection == "article":
            for field in REFERENCE_FIELDS:
                if field in changes:
                    message = self._missing_reference(field, merged.get(field))
                    if message:
                        return ServiceResult.failure(op, NOT_FOUND, message, field=field)

        outcome = self._schema(collection).validate(merged)
        if not outcome.valid:
            return ServiceResult.failure(
                op,
                VALIDATION_FAILED,
                f"Invalid {collection} frontmatter",
                issues=outcome.issues,
            )

        new_body = existing_body if body is None else body
        if body is not None and body != existing_body:
            changed.append("body")
        try:
            write_content_file(path, outcome.data, new_body)
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to write {path}: {exc}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "collection": collection,
                "slug": slug,
                "path": str(path),
                "fields_changed": sorted(changed),
            },
        )

    def references_to(self, collection: str, slug: str) -> list[str]:
        """Slugs of articles referencing the author/category *slug*."""
        if collection not in REFERENCE_FIELDS:
            return []
        field = REFERENCE_FIELDS[collection]
        return [
            record.slug
            for record in load_records(self._project.record_files("article"))
            if not record.error and record.frontmatter.get(field) == slug
        ]

    def delete(self, collection: str, slug: str, *, force: bool = False) -> ServiceResult:
        """Delete a record. Referenced authors/categories need *force*."""
        op = "delete"
        path = self._locate(collection, slug)
        if path is None or not path.is_file():
            return ServiceResult.failure(
                op, NOT_FOUND, f"{collection.capitalize()} {slug!r} not found"
            )

        warnings: list[str] = []
        referencing = self.references_to(collection, slug)
        if referencing and not force:
            return ServiceResult.failure(
                op,
                IN_USE,
                f"{collection.capitalize()} {slug!r} is referenced by {len(referencing)} article(s)",
                articles=referencing,
            )
        if referencing:
            warnings.append(f"Deleted while referenced by: {', '.join(referencing)}")

        try:
            path.unlink()
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to delete {path}: {exc}")
        return ServiceResult(
            ok=True,
            op=op,
            data={"collection": collection, "slug": slug, "path": str(path)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Article lifecycle
    # ------------------------------------------------------------------

    def _set_draft(self, slug: str, *, draft: bool) -> ServiceResult:
        op = "unpublish" if draft else "publish"
        path = self._locate("article", slug)
        if path is None or not path.is_file():
            return ServiceResult.failure(op, NOT_FOUND, f"Article {slug!r} not found")
        try:
            frontmatter, body = read_content_file(path)
        except (OSError, ValueError) as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to read {path}: {exc}")

        currently_draft = bool(frontmatter.get("isDraft", True))
        if currently_draft == draft:
            state = "a draft" if draft else "published"
            return ServiceResult.failure(op, INVALID_INPUT, f"Article {slug!r} is already {state}")

        frontmatter["isDraft"] = draft
        if not draft and not frontmatter.get("updatedAt"):
            frontmatter["updatedAt"] = today_iso()

        outcome = self._schema("article").validate(frontmatter)
        if not outcome.valid:
            return ServiceResult.failure(
                op, VALIDATION_FAILED, "Invalid article frontmatter", issues=outcome.issues
            )
        try:
            write_content_file(path, outcome.data, body)
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, f"Failed to write {path}: {exc}")
        return ServiceResult(
            ok=True,
            op=op,
            data={"collection": "article", "slug": slug, "path": str(path), "isDraft": draft},
        )

    def publish(self, slug: str) -> ServiceResult:
        """Mark a draft article as published."""
        return self._set_draft(slug, draft=False)

    def unpublish(self, slug: str) -> ServiceResult:
        """Return a published article to draft."""
        return self._set_draft(slug, draft=True)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def stats(self) -> ServiceResult:
        """Counts across all collections."""
        articles = [r for r in load_records(self._project.record_files("article")) if not r.error]
        by_locale: Counter[str] = Counter()
        by_tag: Counter[str] = Counter()
        by_category: Counter[str] = Counter()
        by_author: Counter[str] = Counter()
        drafts = featured = 0
        for record in articles:
            fm = record.frontmatter
            if fm.get("isDraft", True):
                drafts += 1
            if fm.get("isFeatured"):
                featured += 1
            by_locale[str(fm.get("locale") or self.config.default_language)] += 1
            by_tag.update(str(t) for t in fm.get("tags") or [])
            if fm.get("category"):
                by_category[str(fm["category"])] += 1
            if fm.get("author"):
                by_author[str(fm["author"])] += 1

        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "articles": len(articles),
                "drafts": drafts,
                "published": len(articles) - drafts,
                "featured": featured,
                "authors": len(self._project.record_files("author")),
                "categories": len(self._project.record_files("category")),
                "by_locale": dict(by_locale.most_common()),
                "by_tag": dict(by_tag.most_common()),
                "by_category": dict(by_category.most_common()),
                "by_author": dict(by_author.most_common()),
            },
        )
