"""Detect DOM sinks that render unsanitised markup."""

import re

from site_audit.detectors.base import BaseDetector
from site_audit.detectors.helpers import script_files
from site_audit.models import Finding, Severity

_XSS_SINK = re.compile(
    r"\.(?:innerHTML|outerHTML)\s*\+?=(?!=)"
    r"|\bdocument\.write(?:ln)?\s*\("
    r"|\binsertAdjacentHTML\s*\("
    r"|\beval\s*\("
    r"|\bdangerouslySetInnerHTML\b"
)


class XssSinksDetector(BaseDetector):
    name = "xss_sinks"
    category = "security"
    description = "innerHTML, document.write and eval usage in scripts"
    requires = ("js", "html")

    def detect(self, snapshot) -> list[Finding]:
        affected = [entry.path for entry, text in script_files(snapshot) if _XSS_SINK.search(text)]
        if not affected:
            return []

        return [
            Finding(
                id="sec-xss",
                title="Potential XSS vulnerabilities",
                description="User input is not properly sanitized",
                severity=Severity.HIGH,
                affected=affected,
                recommendations=[
                    "Sanitize all user input before displaying it",
                    "Use safe DOM manipulation methods instead of innerHTML",
                    "Implement Content-Security-Policy header with strict directives",
                ],
                category=self.category,
            )
        ]
