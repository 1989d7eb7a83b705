"""Detect click handlers on elements that cannot receive keyboard focus."""

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity

FOCUSABLE_TAGS = frozenset({"a", "button", "input", "select", "textarea", "summary", "option"})


def unreachable_elements(soup) -> list:
    return [
        tag
        for tag in soup.find_all(attrs={"onclick": True})
        if tag.name not in FOCUSABLE_TAGS and not tag.has_attr("tabindex")
    ]


class KeyboardAccessDetector(PageDetector):
    name = "keyboard_access"
    category = "accessibility"
    description = "Interactive elements unreachable by keyboard"

    def detect(self, snapshot) -> list[Finding]:
        affected = [entry.path for entry, soup in html_pages(snapshot) if unreachable_elements(soup)]
        if not affected:
            return []

        return [
            Finding(
                id="a11y-keyboard",
                title="Not keyboard accessible",
                description="Some interactive elements cannot be accessed via keyboard",
                severity=Severity.HIGH,
                affected=affected,
                recommendations=[
                    "Ensure all interactive elements are keyboard accessible",
                    "Add proper focus states for all interactive elements",
                    "Test navigation using only a keyboard",
                ],
                category=self.category,
            )
        ]
