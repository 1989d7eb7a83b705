"""Detect images without alt text."""

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity


class ImageAltDetector(PageDetector):
    name = "image_alt"
    category = "seo"
    description = "Images missing an alt attribute"

    def detect(self, snapshot) -> list[Finding]:
        affected = []
        missing = 0
        for entry, soup in html_pages(snapshot):
            # alt="" is valid for decorative images; only a missing attribute counts
            count = sum(1 for img in soup.find_all("img") if not img.has_attr("alt"))
            if count:
                missing += count
                affected.append(entry.path)

        if not affected:
            return []

        return [
            Finding(
                id="seo-img-alt",
                title="Missing image alt text",
                description=f"{missing} images lack alt text attributes",
                severity=Severity.HIGH,
                affected=affected,
                recommendations=[
                    "Add descriptive alt text to all images",
                    "Keep alt text concise but descriptive",
                    "Use empty alt text for decorative images",
                ],
                category=self.category,
            )
        ]
