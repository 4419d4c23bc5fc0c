"""DoctorService — validation and cross-reference checks.

Follows the linter pattern: nothing is modified, every problem becomes an
issue dict with a category and severity. Files are read concurrently and
validated independently; an unparseable file is an issue, not a crash.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from blogforge.config.models import COLLECTIONS
from blogforge.infrastructure.filesystem import LoadedRecord, load_records
from blogforge.services.base import BaseService
from blogforge.services.result import INVALID_INPUT, ServiceResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_PARSE = "parse"
CAT_SCHEMA = "schema"
CAT_REFERENCE = "reference"
CAT_STRUCTURE = "structure"


def _issue(
    category: str,
    severity: str,
    collection: str,
    record: LoadedRecord,
    message: str,
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "collection": collection,
        "file": record.path.name,
        "slug": record.slug,
        "message": message,
    }


class DoctorService(BaseService):
    """Validates content records against the synthesized schemas."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, collection: str) -> ServiceResult:
        """Validate every record of *collection*."""
        if collection not in COLLECTIONS:
            return ServiceResult.failure(
                "validate", INVALID_INPUT, f"Unknown collection: {collection!r}"
            )
        records = load_records(self._project.record_files(collection))
        issues = self._validate_records(collection, records)
        invalid = {issue["file"] for issue in issues if issue["severity"] == SEVERITY_ERROR}
        return ServiceResult(
            ok=True,
            op="validate",
            data={
                "collection": collection,
                "total": len(records),
                "valid": len(records) - len(invalid),
                "invalid": len(invalid),
                "issues": issues,
            },
        )

    def check(self) -> ServiceResult:
        """Validate all collections and check references between them."""
        loaded = {
            collection: load_records(self._project.record_files(collection))
            for collection in COLLECTIONS
        }
        issues: list[dict[str, Any]] = []
        for collection, records in loaded.items():
            issues.extend(self._validate_records(collection, records))
            issues.extend(self._check_structure(collection, records))
        issues.extend(self._check_references(loaded))

        errors = sum(1 for issue in issues if issue["severity"] == SEVERITY_ERROR)
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "counts": {name: len(records) for name, records in loaded.items()},
                "issues": issues,
                "errors": errors,
                "warnings": len(issues) - errors,
            },
        )

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _validate_records(
        self, collection: str, records: list[LoadedRecord]
    ) -> list[dict[str, Any]]:
        schema = self._schema(collection)
        issues: list[dict[str, Any]] = []
        for record in records:
            if record.error:
                issues.append(_issue(CAT_PARSE, SEVERITY_ERROR, collection, record, record.error))
                continue
            outcome = schema.validate(record.frontmatter)
            issues.extend(
                _issue(CAT_SCHEMA, SEVERITY_ERROR, collection, record, message)
                for message in outcome.issues
            )
        logger.debug("Validated %d %s record(s)", len(records), collection)
        return issues

    def _check_structure(
        self, collection: str, records: list[LoadedRecord]
    ) -> list[dict[str, Any]]:
        """Slug/filename agreement and duplicate slugs."""
        issues: list[dict[str, Any]] = []
        by_slug: dict[str, list[LoadedRecord]] = defaultdict(list)
        for record in records:
            if record.error:
                continue
            slug = record.frontmatter.get("slug")
            if not isinstance(slug, str) or not slug:
                continue
            by_slug[slug].append(record)
            if slug != record.slug:
                issues.append(
                    _issue(
                        CAT_STRUCTURE,
                        SEVERITY_WARNING,
                        collection,
                        record,
                        f"Slug '{slug}' does not match filename '{record.path.name}'",
                    )
                )
        for slug, owners in by_slug.items():
            if len(owners) < 2:
                continue
            names = ", ".join(owner.path.name for owner in owners)
            for owner in owners:
                issues.append(
                    _issue(
                        CAT_STRUCTURE,
                        SEVERITY_ERROR,
                        collection,
                        owner,
                        f"Duplicate slug '{slug}' in {names}",
                    )
                )
        return issues

    def _check_references(
        self, loaded: dict[str, list[LoadedRecord]]
    ) -> list[dict[str, Any]]:
        """Article author/category values must name existing records."""
        known = {
            collection: {record.slug for record in loaded[collection] if not record.error}
            for collection in ("author", "category")
        }
        issues: list[dict[str, Any]] = []
        for record in loaded["article"]:
            if record.error:
                continue
            for field in ("author", "category"):
                value = record.frontmatter.get(field)
                if not value:
                    continue
                # Authors are optional records: only checked once some exist.
                if field == "author" and not known["author"]:
                    continue
                if value not in known[field]:
                    issues.append(
                        _issue(
                            CAT_REFERENCE,
                            SEVERITY_ERROR,
                            "article",
                            record,
                            f"{field}: '{value}' does not match any {field} record",
                        )
                    )
        return issues
