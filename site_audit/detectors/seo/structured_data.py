"""Detect pages that carry no structured data markup."""

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity


def has_structured_data(soup) -> bool:
    if soup.find("script", attrs={"type": "application/ld+json"}):
        return True
    return soup.find(attrs={"itemtype": True}) is not None


class StructuredDataDetector(PageDetector):
    name = "structured_data"
    category = "seo"
    description = "Pages without JSON-LD or microdata schema markup"

    def detect(self, snapshot) -> list[Finding]:
        affected = [entry.path for entry, soup in html_pages(snapshot) if not has_structured_data(soup)]
        if not affected:
            return []

        return [
            Finding(
                id="seo-schema",
                title="No structured data",
                description="Website lacks structured data/schema markup",
                severity=Severity.LOW,
                affected=affected,
                recommendations=[
                    "Implement schema.org markup for appropriate content types",
                    "Add Organization, LocalBusiness, and Service schema",
                    "Use BreadcrumbList schema for navigation paths",
                ],
                category=self.category,
            )
        ]
