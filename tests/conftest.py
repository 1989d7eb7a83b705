"""Shared fixtures for site-audit tests."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from site_audit.models import AuditReport, DetectorResult, Finding, Severity, Technology
from site_audit.scoring import build_recommendations, build_scoreboard, collect_findings
from site_audit.snapshot import scan_repository


def make_finding(
    severity: Severity = Severity.LOW,
    id: str = "test-finding",
    title: str = "Test finding",
    description: str = "Test description",
    category: str = "performance",
    **kwargs,
) -> Finding:
    """Factory for creating Finding instances with sensible defaults."""
    return Finding(
        id=id,
        title=title,
        description=description,
        severity=severity,
        category=category,
        **kwargs,
    )


def write_files(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create a repository tree under *root* from a {relative path: contents} mapping."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_snapshot(tmp_path):
    """Build a RepositorySnapshot from a {path: contents} mapping."""

    def _make(files: dict[str, str | bytes]):
        return scan_repository(write_files(tmp_path, files))

    return _make


def finalize(report: AuditReport) -> AuditReport:
    """Fill in scores and recommendations the way the auditor does."""
    category_results = report.category_results
    report.scores = build_scoreboard(category_results)
    report.recommendations = build_recommendations(collect_findings(category_results))
    return report


@pytest.fixture
def empty_report() -> AuditReport:
    """AuditReport with no results."""
    return finalize(
        AuditReport(
            repository="/srv/sites/acme",
            timestamp=datetime(2026, 1, 27, 12, 0, 0, tzinfo=timezone.utc),
        )
    )


@pytest.fixture
def sample_report() -> AuditReport:
    """AuditReport with a mix of severities, a passing detector and an errored one."""
    report = AuditReport(
        repository="/srv/sites/acme",
        timestamp=datetime(2026, 1, 27, 12, 0, 0, tzinfo=timezone.utc),
        technologies=[Technology(name="HTML5", category="frontend", confidence=100)],
    )

    report.results.append(DetectorResult(
        detector_name="unminified_assets",
        category="performance",
        description="Unminified assets",
        findings=[make_finding(
            severity=Severity.MEDIUM,
            id="perf-unminified",
            title="Unminified JavaScript and CSS",
            category="performance",
            affected=["js/main.js"],
            recommendations=["Implement minification for JavaScript and CSS files"],
        )],
    ))

    report.results.append(DetectorResult(
        detector_name="structured_data",
        category="seo",
        description="Structured data",
        findings=[make_finding(
            severity=Severity.LOW,
            id="seo-schema",
            title="No structured data",
            category="seo",
            affected=["index.html"],
        )],
    ))

    report.results.append(DetectorResult(
        detector_name="xss_sinks",
        category="security",
        description="XSS sinks",
        findings=[make_finding(
            severity=Severity.HIGH,
            id="sec-xss",
            title="Potential XSS vulnerabilities",
            category="security",
            affected=["js/contact-form.js"],
            recommendations=["Sanitize all user input before displaying it"],
        )],
    ))

    # Passing detector
    report.results.append(DetectorResult(
        detector_name="jquery_usage",
        category="code",
        description="jQuery usage",
    ))

    # Errored detector
    report.results.append(DetectorResult(
        detector_name="color_contrast",
        category="accessibility",
        description="Colour contrast",
        error="UnicodeDecodeError: bad stylesheet",
    ))
    report.unavailable_categories = ["accessibility"]

    return finalize(report)
