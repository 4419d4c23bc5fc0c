"""SeoService — weighted SEO scoring of articles."""

from __future__ import annotations

from typing import Any

from blogforge.domain.multilingual import get_text_for_locale
from blogforge.domain.seo import SeoReport, analyze, primary_keyword
from blogforge.infrastructure.filesystem import LoadedRecord, load_records
from blogforge.services.base import BaseService
from blogforge.services.result import NOT_FOUND, ServiceResult


class SeoService(BaseService):
    """Scores articles for on-page SEO."""

    def check(
        self,
        slug: str | None = None,
        *,
        keyword: str | None = None,
        locale: str | None = None,
    ) -> ServiceResult:
        """Score one article, or every article (lowest score first).

        The keyword defaults to the first entry of the article's
        ``keywords`` field.
        """
        op = "seo_check"
        paths = self._project.record_files("article")
        if slug is not None:
            paths = [path for path in paths if path.stem == slug]
            if not paths:
                return ServiceResult.failure(op, NOT_FOUND, f"Article {slug!r} not found")

        warnings: list[str] = []
        results: list[dict[str, Any]] = []
        for record in load_records(paths):
            if record.error:
                warnings.append(f"{record.path.name}: {record.error}")
                continue
            report = self._score(record, keyword, locale)
            results.append(self._serialize(record, report, locale))

        results.sort(key=lambda item: item["score"])
        return ServiceResult(
            ok=True,
            op=op,
            data={"results": results, "count": len(results)},
            warnings=warnings,
        )

    def _score(self, record: LoadedRecord, keyword: str | None, locale: str | None) -> SeoReport:
        fm = record.frontmatter
        return analyze(
            title=get_text_for_locale(fm.get("title"), self.config, locale),
            description=get_text_for_locale(fm.get("description"), self.config, locale),
            content=record.body,
            keyword=keyword or primary_keyword(fm.get("keywords")),
        )

    def _serialize(
        self, record: LoadedRecord, report: SeoReport, locale: str | None
    ) -> dict[str, Any]:
        return {
            "slug": record.slug,
            "file": record.path.name,
            "title": get_text_for_locale(record.frontmatter.get("title"), self.config, locale),
            "keyword": report.keyword,
            "score": round(report.overall, 4),
            "grade": report.grade,
            "factors": {
                name: {
                    "score": factor.score,
                    "passed": factor.passed,
                    "recommendation": factor.recommendation,
                    **factor.metrics,
                }
                for name, factor in report.factors.items()
            },
            "actionable": [
                {"factor": name, "recommendation": factor.recommendation}
                for name, factor in report.actionable()
            ],
        }
