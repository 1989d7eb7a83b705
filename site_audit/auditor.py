"""Audit orchestrator: discovers and runs detectors, then scores the results."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from datetime import datetime, timezone

from site_audit.models import CATEGORIES, AuditReport, DetectorResult
from site_audit.registry import discover_detectors
from site_audit.scoring import build_recommendations, build_scoreboard, collect_findings
from site_audit.snapshot import RepositorySnapshot, file_stats
from site_audit.technologies import detect_technologies


def run_audit(
    snapshot: RepositorySnapshot,
    categories: list[str] | None = None,
    exclude: set[str] | None = None,
    include_only: set[str] | None = None,
    weights: Mapping[str, float] | None = None,
    verbose: bool = False,
) -> AuditReport:
    """Execute all discovered detectors against the repository snapshot.

    Args:
        snapshot: File inventory of the repository under audit.
        categories: Optional list of categories to limit detectors.
        exclude: Optional set of detector names to exclude.
        include_only: Optional set of detector names to include (whitelist mode).
        weights: Category weights for the overall score. Defaults to the built-in weights.
        verbose: Print progress to stderr.

    Returns:
        AuditReport with detector results, scores and recommendations.

    Raises:
        ConfigurationError: if weights are invalid.
    """
    report = AuditReport(
        repository=str(snapshot.root.resolve()),
        timestamp=datetime.now(timezone.utc),
    )

    detectors = discover_detectors(categories=categories, exclude=exclude, include_only=include_only)
    total = len(detectors)

    if verbose:
        print(f"Audit: running {total} detectors against {snapshot.root}...", file=sys.stderr)

    for i, detector in enumerate(detectors, 1):
        if verbose:
            print(
                f"  [{i}/{total}] {detector.category}/{detector.name}: {detector.description}",
                file=sys.stderr,
            )

        result = DetectorResult(
            detector_name=detector.name,
            category=detector.category,
            description=detector.description,
        )

        reason = detector.skip_reason(snapshot)
        if reason is not None:
            result.skipped = True
            result.skip_reason = reason
            if verbose:
                print(f"    SKIPPED: {result.skip_reason}", file=sys.stderr)
            report.results.append(result)
            continue

        try:
            result.findings = detector.detect(snapshot)
        except Exception as exc:
            result.error = f"{type(exc).__name__}: {exc}"
            if verbose:
                print(f"    ERROR: {result.error}", file=sys.stderr)

        report.results.append(result)

    report.unavailable_categories = _unavailable_categories(report.results)

    # Errored and unselected categories contribute no findings and so score 100
    category_results = report.category_results
    report.scores = build_scoreboard(category_results, weights)
    report.recommendations = build_recommendations(collect_findings(category_results))
    report.file_stats = file_stats(snapshot)
    report.technologies = detect_technologies(snapshot)

    if verbose:
        if report.unavailable_categories:
            print(
                f"  No findings available for: {', '.join(report.unavailable_categories)}",
                file=sys.stderr,
            )
        print(
            f"Done. Overall score {report.scores.overall}/100: "
            f"{report.high_count} high, "
            f"{report.medium_count} medium, "
            f"{report.low_count} low.",
            file=sys.stderr,
        )

    return report


def _unavailable_categories(results: list[DetectorResult]) -> list[str]:
    """Categories with no detector that ran to completion."""
    completed = {r.category for r in results if not r.error and not r.skipped}
    return [c for c in CATEGORIES if c not in completed]
