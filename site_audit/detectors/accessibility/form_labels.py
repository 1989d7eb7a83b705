"""Detect form fields that have no accessible label."""

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity

_UNLABELLED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "reset", "image"})


def unlabelled_fields(soup) -> list:
    label_targets = {label.get("for") for label in soup.find_all("label") if label.get("for")}
    missing = []
    for field in soup.find_all(["input", "select", "textarea"]):
        if field.name == "input" and (field.get("type") or "text").lower() in _UNLABELLED_INPUT_TYPES:
            continue
        if field.get("id") in label_targets:
            continue
        if field.find_parent("label") is not None:
            continue
        if field.get("aria-label") or field.get("aria-labelledby") or field.get("title"):
            continue
        missing.append(field)
    return missing


class FormLabelsDetector(PageDetector):
    name = "form_labels"
    category = "accessibility"
    description = "Form fields without associated labels"

    def detect(self, snapshot) -> list[Finding]:
        affected = [entry.path for entry, soup in html_pages(snapshot) if unlabelled_fields(soup)]
        if not affected:
            return []

        return [
            Finding(
                id="a11y-form-labels",
                title="Missing form labels",
                description="Form fields lack associated labels",
                severity=Severity.MEDIUM,
                affected=affected,
                recommendations=[
                    "Add explicit labels for all form inputs",
                    'Use the "for" attribute to associate labels with inputs',
                    "Avoid using placeholder as the only form of labeling",
                ],
                category=self.category,
            )
        ]
