"""SEO scoring for an article's title, description and Markdown body.

Each factor scores 0, 0.5 or 1 with a recommendation. The overall score
is the weighted mean of the factors using :data:`SEO_WEIGHTS`.

Pure functions only: no I/O, no config access.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

SEO_WEIGHTS: dict[str, float] = {
    "title": 0.15,
    "description": 0.10,
    "keyword": 0.15,
    "headings": 0.10,
    "links": 0.10,
    "readability": 0.10,
    "imageAlt": 0.10,
    "wordCount": 0.10,
    "anchorText": 0.10,
}

TITLE_LENGTH = (40, 65)
DESCRIPTION_LENGTH = (120, 170)
KEYWORD_DENSITY = (0.5, 2.5)
MIN_WORDS = 300
SENTENCE_WORDS = (10, 25)
LONG_SENTENCE_WORDS = 30
MAX_LONG_SENTENCES = 3

_LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_INTERNAL_LINK_RE = re.compile(r"\]\(/?[\w\-/]+\)")
_EXTERNAL_LINK_RE = re.compile(r"\]\(https?://")
_HEADING_RE = re.compile(r"^(#{1,6}) (.+)$", re.MULTILINE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_DESCRIPTIVE_ANCHOR_RE = re.compile(r"^(here|click|this|link)$", re.IGNORECASE)


@dataclass(frozen=True)
class FactorScore:
    """Score of one SEO factor."""

    score: float
    recommendation: str
    metrics: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.score == 1


@dataclass(frozen=True)
class SeoReport:
    """All factor scores for one article plus the weighted total."""

    keyword: str
    factors: dict[str, FactorScore]
    overall: float

    @property
    def grade(self) -> str:
        return grade_for(self.overall)

    def actionable(self) -> list[tuple[str, FactorScore]]:
        """Failing factors, worst first."""
        failing = [(name, factor) for name, factor in self.factors.items() if not factor.passed]
        return sorted(failing, key=lambda item: item[1].score)


def grade_for(score: float) -> str:
    if score >= 0.9:
        return "A"
    if score >= 0.8:
        return "B"
    if score >= 0.7:
        return "C"
    if score >= 0.6:
        return "D"
    return "F"


def contains_keyword(text: str, keyword: str) -> bool:
    """Whole-word, case-insensitive keyword match."""
    if not keyword or not text:
        return False
    return re.search(rf"\b{re.escape(keyword)}\b", text, re.IGNORECASE) is not None


def count_words(text: str) -> int:
    return len(text.split())


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------


def analyze_title(title: str, keyword: str) -> FactorScore:
    length = len(title)
    present = contains_keyword(title, keyword)
    metrics = {"length": length, "keyword_present": present}
    low, high = TITLE_LENGTH
    if not title:
        return FactorScore(0, "Missing title.", metrics)
    if length < low:
        return FactorScore(0, "Title is too short. Aim for 40-60 characters.", metrics)
    if length > high:
        return FactorScore(0, "Title is too long. Keep it under 60-65 characters.", metrics)
    if not present:
        return FactorScore(0.5, "Add the main keyword to the title.", metrics)
    return FactorScore(1, "Good title length and keyword present.", metrics)


def analyze_description(description: str, keyword: str) -> FactorScore:
    length = len(description)
    present = contains_keyword(description, keyword)
    metrics = {"length": length, "keyword_present": present}
    low, high = DESCRIPTION_LENGTH
    if not description:
        return FactorScore(0, "Missing meta description.", metrics)
    if length < low:
        return FactorScore(0, "Description is too short. Aim for 120-160 characters.", metrics)
    if length > high:
        return FactorScore(0, "Description is too long. Keep it under 160-170 characters.", metrics)
    if not present:
        return FactorScore(0.5, "Add the main keyword to the description.", metrics)
    return FactorScore(1, "Good description length and keyword present.", metrics)


def analyze_keyword_usage(content: str, keyword: str) -> FactorScore:
    if not keyword:
        return FactorScore(0, "No keyword provided.", {"density": 0.0, "in_first_paragraph": False})
    words = count_words(content)
    occurrences = len(re.findall(re.escape(keyword), content, re.IGNORECASE))
    density = round(occurrences / words * 100, 2) if words else 0.0
    first_paragraph = re.split(r"\n\n+", content.strip(), maxsplit=1)[0]
    in_first = contains_keyword(first_paragraph, keyword)
    metrics = {"density": density, "in_first_paragraph": in_first}
    low, high = KEYWORD_DENSITY
    if density < low:
        return FactorScore(0, "Keyword density is low. Consider using the main keyword more.", metrics)
    if density > high:
        return FactorScore(0, "Keyword density is high. Avoid keyword stuffing.", metrics)
    if not in_first:
        return FactorScore(0.5, "Add the main keyword to the first paragraph.", metrics)
    return FactorScore(1, "Keyword density is optimal and present in first paragraph.", metrics)


def analyze_headings(content: str, keyword: str) -> FactorScore:
    headings = [(len(m.group(1)), m.group(2)) for m in _HEADING_RE.finditer(content)]
    levels = [level for level, _ in headings]
    h1, h2, h3 = levels.count(1), levels.count(2), levels.count(3)
    in_heading = any(contains_keyword(text, keyword) for _, text in headings)
    metrics = {"h1": h1, "h2": h2, "h3": h3, "keyword_in_heading": in_heading}

    problems: list[str] = []
    score = 1.0
    if h1 != 1:
        problems.append(f"Should have exactly one H1 heading (found {h1}).")
        score = 0
    if h2 < 1:
        problems.append("Add at least one H2 heading.")
        score = 0
    if not in_heading:
        problems.append("Add the main keyword to at least one heading.")
        score = min(score, 0.5)
    if h1 + h2 + h3 < 3:
        problems.append("Consider adding more heading structure.")
        score = min(score, 0.5)
    return FactorScore(score, " ".join(problems) or "Heading structure looks good.", metrics)


def analyze_links(content: str) -> FactorScore:
    internal = len(_INTERNAL_LINK_RE.findall(content))
    external = len(_EXTERNAL_LINK_RE.findall(content))
    metrics = {"internal": internal, "external": external}
    problems: list[str] = []
    if internal < 1:
        problems.append("Add at least one internal link.")
    if external < 1:
        problems.append("Add at least one external link.")
    if problems:
        return FactorScore(0.5, " ".join(problems), metrics)
    return FactorScore(1, "Good mix of internal and external links.", metrics)


def analyze_readability(content: str) -> FactorScore:
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(content) if s.strip()]
    if not sentences:
        return FactorScore(
            0, "No sentences found in content.", {"avg_words": 0.0, "long_sentences": 0}
        )
    lengths = [count_words(sentence) for sentence in sentences]
    average = round(sum(lengths) / len(lengths), 1)
    long_count = sum(1 for n in lengths if n > LONG_SENTENCE_WORDS)
    metrics = {"avg_words": average, "long_sentences": long_count}

    low, high = SENTENCE_WORDS
    if average > high:
        score = 0.0
        recommendation = "Sentences are too long. Try to keep average sentence length below 25 words."
    elif average < low:
        score = 0.5
        recommendation = "Sentences are very short. Consider varying sentence length for better flow."
    else:
        score = 1.0
        recommendation = "Good average sentence length."
    if long_count > MAX_LONG_SENTENCES:
        recommendation += f" Found {long_count} very long sentences (>30 words)."
        score = min(score, 0.5)
    return FactorScore(score, recommendation, metrics)


def analyze_image_alt(content: str, keyword: str) -> FactorScore:
    alts = [m.group(1) for m in _IMAGE_RE.finditer(content)]
    if not alts:
        return FactorScore(
            1, "No images found.", {"total": 0, "missing_alt": 0, "keyword_in_alt": False}
        )
    missing = sum(1 for alt in alts if not alt.strip())
    in_alt = any(contains_keyword(alt, keyword) for alt in alts)
    metrics = {"total": len(alts), "missing_alt": missing, "keyword_in_alt": in_alt}
    if missing:
        percent = round(missing / len(alts) * 100)
        return FactorScore(
            0.5 if missing < len(alts) else 0,
            f"Missing alt text for {missing} out of {len(alts)} images ({percent}%).",
            metrics,
        )
    if not in_alt:
        return FactorScore(0.5, "Add the main keyword to at least one image alt text.", metrics)
    return FactorScore(1, "All images have alt text and keyword present.", metrics)


def analyze_word_count(content: str) -> FactorScore:
    words = count_words(content)
    if words < MIN_WORDS:
        return FactorScore(0, "Content is too short. Aim for at least 300 words.", {"words": words})
    return FactorScore(1, "Good content length.", {"words": words})


def analyze_anchor_text(content: str) -> FactorScore:
    anchors = [m.group(1).strip() for m in _LINK_RE.finditer(content)]
    vague = sum(1 for text in anchors if _NON_DESCRIPTIVE_ANCHOR_RE.match(text))
    descriptive = len(anchors) - vague
    metrics = {"descriptive": descriptive, "non_descriptive": vague}
    if vague:
        return FactorScore(
            0.5 if descriptive else 0,
            f"Found {vague} non-descriptive anchor texts (e.g., 'here', 'click'). "
            "Use descriptive text for links.",
            metrics,
        )
    return FactorScore(1, "All anchor texts are descriptive.", metrics)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def primary_keyword(keywords: Any) -> str:
    """First entry of a comma-separated ``keywords`` value."""
    if not keywords:
        return ""
    if isinstance(keywords, list):
        return str(keywords[0]).strip() if keywords else ""
    return str(keywords).split(",")[0].strip()


def weighted_score(factors: dict[str, FactorScore]) -> float:
    total = sum(SEO_WEIGHTS.get(name, 0) for name in factors)
    if not total:
        return 0.0
    weighted = sum(factor.score * SEO_WEIGHTS.get(name, 0) for name, factor in factors.items())
    return weighted / total


def analyze(title: str, description: str, content: str, keyword: str) -> SeoReport:
    """Score an article across every factor."""
    factors = {
        "title": analyze_title(title, keyword),
        "description": analyze_description(description, keyword),
        "keyword": analyze_keyword_usage(content, keyword),
        "headings": analyze_headings(content, keyword),
        "links": analyze_links(content),
        "readability": analyze_readability(content),
        "imageAlt": analyze_image_alt(content, keyword),
        "wordCount": analyze_word_count(content),
        "anchorText": analyze_anchor_text(content),
    }
    return SeoReport(keyword=keyword, factors=factors, overall=weighted_score(factors))
