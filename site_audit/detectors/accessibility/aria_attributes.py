"""Detect custom widgets built from generic elements without ARIA semantics."""

import re

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity

_WIDGET_CLASS = re.compile(r"dropdown|modal|dialog|tabs?\b|accordion|carousel|slider|menu|toggle|tooltip", re.I)


def is_unlabelled_widget(tag) -> bool:
    if tag.has_attr("role") or any(attr.startswith("aria-") for attr in tag.attrs):
        return False
    classes = " ".join(tag.get("class") or [])
    return bool(_WIDGET_CLASS.search(classes))


class AriaAttributesDetector(PageDetector):
    name = "aria_attributes"
    category = "accessibility"
    description = "Custom UI components without ARIA roles"

    def detect(self, snapshot) -> list[Finding]:
        affected = []
        for entry, soup in html_pages(snapshot):
            if any(is_unlabelled_widget(tag) for tag in soup.find_all(["div", "span", "ul", "li"])):
                affected.append(entry.path)

        if not affected:
            return []

        return [
            Finding(
                id="a11y-aria",
                title="Missing ARIA attributes",
                description="Custom UI components lack proper ARIA roles and attributes",
                severity=Severity.MEDIUM,
                affected=affected,
                recommendations=[
                    "Add appropriate ARIA roles, states, and properties",
                    "Follow WAI-ARIA authoring practices",
                    "Test with screen readers",
                ],
                category=self.category,
            )
        ]
