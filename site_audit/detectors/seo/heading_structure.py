"""Detect pages whose headings do not form a proper outline."""

from __future__ import annotations

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def outline_problems(levels: list[int]) -> list[str]:
    """Describe what is wrong with a page's heading levels, in document order."""
    problems = []
    h1_count = levels.count(1)
    if h1_count != 1:
        problems.append(f"{h1_count} H1 tags")

    previous = 0
    for level in levels:
        if level > previous + 1:
            problems.append(f"H{previous} followed by H{level}" if previous else f"starts at H{level}")
            break
        previous = level
    return problems


class HeadingStructureDetector(PageDetector):
    name = "heading_structure"
    category = "seo"
    description = "Pages with missing, duplicated or skipped heading levels"

    def detect(self, snapshot) -> list[Finding]:
        affected = []
        for entry, soup in html_pages(snapshot):
            levels = [int(tag.name[1]) for tag in soup.find_all(_HEADING_TAGS)]
            if outline_problems(levels):
                affected.append(entry.path)

        if not affected:
            return []

        return [
            Finding(
                id="seo-headings",
                title="Improper heading structure",
                description="Headings are not properly hierarchical (H1 → H2 → H3)",
                severity=Severity.MEDIUM,
                affected=affected,
                recommendations=[
                    "Ensure each page has exactly one H1 tag",
                    "Follow proper heading hierarchy (H1 → H2 → H3)",
                    "Use headings to create a logical document outline",
                ],
                category=self.category,
            )
        ]
