"""Markdown report renderer."""

from __future__ import annotations

from site_audit import __version__
from site_audit.models import CATEGORIES, AuditReport, Severity
from site_audit.scoring import verdict_for

_CATEGORY_LABELS = {
    "performance": "Performance",
    "code": "Code Quality",
    "seo": "SEO",
    "accessibility": "Accessibility",
    "security": "Security",
}

_VERDICT_TEXT = {
    "GOOD": "No significant problems found.",
    "NEEDS IMPROVEMENT": "Several issues should be addressed.",
    "POOR": "Serious issues need attention before launch.",
}


def category_label(category: str) -> str:
    return _CATEGORY_LABELS.get(category, category)


def render(report: AuditReport, todo_list: bool = True) -> str:
    """Render an AuditReport as a Markdown document."""
    lines: list[str] = []
    scores = report.scores
    verdict = verdict_for(scores.overall)

    lines.append("# Site Audit Report")
    lines.append("")
    lines.append(f"**Repository:** {report.repository}  ")
    lines.append(f"**Audit Time:** {report.timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')}  ")
    lines.append(f"**Files:** {report.file_stats.total_files} ({report.file_stats.total_size:,} bytes)")
    lines.append("")
    lines.append(f"> **{verdict}** ({scores.overall}/100): {_VERDICT_TEXT[verdict]}")
    lines.append("")

    # Scores
    lines.append("## Scores")
    lines.append("")
    lines.append("| Category | Score |")
    lines.append("|---|---|")
    for category in CATEGORIES:
        label = category_label(category)
        if category in report.unavailable_categories:
            label += " (unavailable)"
        lines.append(f"| {label} | {scores[category]} |")
    lines.append(f"| **Overall** | **{scores.overall}** |")
    lines.append("")

    if report.technologies:
        lines.append("## Technologies")
        lines.append("")
        for tech in report.technologies:
            lines.append(f"- {tech.name} ({tech.category}, {tech.confidence}%)")
        lines.append("")

    # Findings by severity
    recs = report.recommendations
    for severity, findings in (
        (Severity.HIGH, recs.high),
        (Severity.MEDIUM, recs.medium),
        (Severity.LOW, recs.low),
    ):
        if not findings:
            continue
        lines.append(f"## {severity.value.upper()} ({len(findings)})")
        lines.append("")
        for f in findings:
            lines.append(f"### {f.title}")
            lines.append("")
            lines.append(f"*{category_label(f.category)}* · `{f.id}`")
            lines.append("")
            lines.append(f.description)
            lines.append("")
            if f.affected:
                lines.append("**Affected:** " + ", ".join(f"`{a}`" for a in f.affected))
                lines.append("")
            if f.recommendations:
                lines.append("**Recommendations:**")
                lines.append("")
                for rec in f.recommendations:
                    lines.append(f"- {rec}")
                lines.append("")

    errors = [r for r in report.results if r.error]
    if errors:
        lines.append("## Errors")
        lines.append("")
        for r in errors:
            lines.append(f"- **{r.category}/{r.detector_name}**: {r.error}")
        lines.append("")

    if todo_list and recs.all:
        lines.append("## To Do List")
        lines.append("")
        for f in recs.all:
            lines.append(f"- [ ] **[{f.severity.value.upper()}]** {f.title}")
            if f.recommendations:
                lines.append(f"  - {f.recommendations[0]}")
        lines.append("")

    lines.append("---")
    lines.append(f"*Generated by site-audit v{__version__}*")
    lines.append("")
    return "\n".join(lines)
