"""Scoring engine: turns findings into category scores, an overall score and recommendations.

Everything here is a pure function of its arguments: no I/O, no state kept
between calls. Callers may invoke these concurrently from independent audits.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from site_audit.models import CATEGORIES, Finding, RecommendationBundle, ScoreBoard, Severity

logger = logging.getLogger(__name__)

BASE_SCORE = 100

DEDUCTIONS: dict[Severity, int] = {
    Severity.HIGH: 15,
    Severity.MEDIUM: 7,
    Severity.LOW: 3,
}

DEFAULT_WEIGHTS: dict[str, float] = {
    "performance": 0.25,
    "code": 0.20,
    "seo": 0.20,
    "accessibility": 0.20,
    "security": 0.15,
}

WEIGHT_TOLERANCE = 1e-6


class ConfigurationError(ValueError):
    """Raised when scoring weights (or other configuration) are invalid."""


def validate_weights(weights: Mapping[str, float]) -> None:
    """Check that *weights* covers every category, has only finite non-negative values and sums to 1.0.

    Raises:
        ConfigurationError: describing the first problem found.
    """
    missing = [c for c in CATEGORIES if c not in weights]
    if missing:
        raise ConfigurationError(f"Missing weight for categories: {', '.join(missing)}")

    unknown = sorted(set(weights) - set(CATEGORIES))
    if unknown:
        raise ConfigurationError(f"Unknown weight categories: {', '.join(unknown)}")

    non_finite = [c for c in CATEGORIES if not math.isfinite(weights[c])]
    if non_finite:
        raise ConfigurationError(f"Weight is not a finite number for categories: {', '.join(non_finite)}")

    negative = [c for c in CATEGORIES if weights[c] < 0]
    if negative:
        raise ConfigurationError(f"Negative weight for categories: {', '.join(negative)}")

    total = sum(weights[c] for c in CATEGORIES)
    if not abs(total - 1.0) <= WEIGHT_TOLERANCE:
        raise ConfigurationError(f"Category weights must sum to 1.0 (got {total:.6f})")


def score_category(findings: Iterable[Finding]) -> int:
    """Score one category: 100 minus a fixed deduction per finding severity, clamped to [0, 100]."""
    total_deduction = sum(DEDUCTIONS[f.severity] for f in findings)
    return max(0, min(BASE_SCORE, BASE_SCORE - total_deduction))


def round_half_up(value: float) -> int:
    # Scores are never negative, so floor(x + 0.5) is the usual "round half up".
    return int(math.floor(value + 0.5))


def compute_overall_score(
    category_scores: Mapping[str, int],
    weights: Mapping[str, float] | None = None,
) -> int:
    """Weighted average of the five category scores, rounded half up.

    Args:
        category_scores: Score per category; every category in CATEGORIES is required.
        weights: Weight per category. Defaults to DEFAULT_WEIGHTS.

    Raises:
        ConfigurationError: if the weights are invalid or a category score is missing.
    """
    weights = DEFAULT_WEIGHTS if weights is None else weights
    validate_weights(weights)

    missing = [c for c in CATEGORIES if c not in category_scores]
    if missing:
        raise ConfigurationError(f"Missing scores for categories: {', '.join(missing)}")

    weighted = sum(category_scores[c] * weights[c] for c in CATEGORIES)
    return round_half_up(weighted)


def collect_findings(category_results: Mapping[str, Sequence[Finding]]) -> list[Finding]:
    """Concatenate findings in canonical category order, preserving each category's order."""
    all_findings: list[Finding] = []
    for category in CATEGORIES:
        all_findings.extend(category_results.get(category, ()))
    return all_findings


def build_scoreboard(
    category_results: Mapping[str, Sequence[Finding]],
    weights: Mapping[str, float] | None = None,
) -> ScoreBoard:
    """Score every category and compute the overall score.

    A category absent from *category_results* is scored as an empty sequence (100).
    """
    scores = {c: score_category(category_results.get(c, ())) for c in CATEGORIES}
    overall = compute_overall_score(scores, weights)
    logger.debug("Calculated scores - overall: %d (%s)", overall, scores)
    return ScoreBoard(categories=scores, overall=overall)


def build_recommendations(all_findings: Iterable[Finding]) -> RecommendationBundle:
    """Partition findings by severity and produce a stable severity-ordered list.

    Every input finding appears once in its severity bucket and once in ``all``;
    findings of equal severity keep their input order.
    """
    ordered = list(all_findings)
    return RecommendationBundle(
        high=[f for f in ordered if f.severity == Severity.HIGH],
        medium=[f for f in ordered if f.severity == Severity.MEDIUM],
        low=[f for f in ordered if f.severity == Severity.LOW],
        all=sorted(ordered, key=lambda f: f.severity.rank),
    )


def verdict_for(overall: int) -> str:
    """Headline label for an overall score."""
    if overall >= 90:
        return "GOOD"
    if overall >= 70:
        return "NEEDS IMPROVEMENT"
    return "POOR"
