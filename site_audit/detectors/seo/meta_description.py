"""Detect pages without a meta description."""

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity


class MetaDescriptionDetector(PageDetector):
    name = "meta_description"
    category = "seo"
    description = "Pages missing a meta description"

    def detect(self, snapshot) -> list[Finding]:
        affected = []
        for entry, soup in html_pages(snapshot):
            meta = soup.find("meta", attrs={"name": lambda v: v and v.lower() == "description"})
            if meta is None or not (meta.get("content") or "").strip():
                affected.append(entry.path)

        if not affected:
            return []

        return [
            Finding(
                id="seo-meta",
                title="Missing meta descriptions",
                description=f"{len(affected)} pages lack meta descriptions",
                severity=Severity.MEDIUM,
                affected=affected,
                recommendations=[
                    "Add unique, descriptive meta descriptions to all pages",
                    "Keep meta descriptions between 120-158 characters",
                    "Include relevant keywords naturally in descriptions",
                ],
                category=self.category,
            )
        ]
