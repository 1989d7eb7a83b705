"""Detect hand-written scripts that still lean on jQuery."""

import re

from site_audit.detectors.base import BaseDetector
from site_audit.detectors.helpers import script_files
from site_audit.models import Finding, Severity

_JQUERY_PATTERN = re.compile(r"\bjQuery\s*\(|\$\(\s*(?:document|window|this|['\"`])|\$\.(?:ajax|get|post|each|extend)\b")


class JQueryUsageDetector(BaseDetector):
    name = "jquery_usage"
    category = "code"
    description = "Scripts written against jQuery instead of the DOM API"
    requires = ("js", "html")

    def detect(self, snapshot) -> list[Finding]:
        affected = [entry.path for entry, text in script_files(snapshot) if _JQUERY_PATTERN.search(text)]
        if not affected:
            return []

        return [
            Finding(
                id="code-jquery",
                title="Use of outdated jQuery practices",
                description="jQuery is used with older patterns that could be modernized",
                severity=Severity.MEDIUM,
                affected=affected,
                recommendations=[
                    "Consider using modern vanilla JavaScript instead of jQuery",
                    "Update jQuery to the latest version if it must be used",
                    "Use modern JavaScript standards (ES6+) and features",
                ],
                category=self.category,
            )
        ]
