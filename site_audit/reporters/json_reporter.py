"""JSON report renderer."""

from __future__ import annotations

import json

from site_audit import __version__
from site_audit.models import AuditReport, Finding


def _finding_dict(f: Finding) -> dict:
    return {
        "id": f.id,
        "category": f.category,
        "severity": f.severity.value,
        "title": f.title,
        "description": f.description,
        "affected": list(f.affected),
        "recommendations": list(f.recommendations),
    }


def render(report: AuditReport) -> str:
    """Render an AuditReport as a JSON string."""
    recs = report.recommendations
    data = {
        "meta": {
            "tool": "site-audit",
            "version": __version__,
            "timestamp": report.timestamp.isoformat(),
            "repository": report.repository,
        },
        "summary": {
            "total_detectors": report.detectors_total,
            "detectors_passed": report.detectors_passed,
            "detectors_skipped": report.detectors_skipped,
            "high": report.high_count,
            "medium": report.medium_count,
            "low": report.low_count,
            "unavailable_categories": report.unavailable_categories,
        },
        "scores": report.scores.as_dict(),
        "fileStats": {
            "totalFiles": report.file_stats.total_files,
            "totalSize": report.file_stats.total_size,
            "byType": report.file_stats.by_type,
        },
        "technologies": [
            {"name": t.name, "category": t.category, "confidence": t.confidence}
            for t in report.technologies
        ],
        "results": {
            category: [_finding_dict(f) for f in findings]
            for category, findings in report.category_results.items()
        },
        "detectors": [],
        "recommendations": {
            "high": [f.id for f in recs.high],
            "medium": [f.id for f in recs.medium],
            "low": [f.id for f in recs.low],
            "all": [_finding_dict(f) for f in recs.all],
        },
    }

    for result in report.results:
        entry = {
            "name": result.detector_name,
            "category": result.category,
            "description": result.description,
            "passed": len(result.findings) == 0 and not result.error,
            "skipped": result.skipped,
            "error": result.error,
        }
        if result.skipped:
            entry["skip_reason"] = result.skip_reason
        data["detectors"].append(entry)

    return json.dumps(data, indent=2, default=str)
