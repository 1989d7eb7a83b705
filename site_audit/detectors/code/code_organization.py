"""Detect monolithic script files with no clear module structure."""

import re

from site_audit.detectors.base import BaseDetector
from site_audit.detectors.helpers import script_files
from site_audit.models import Finding, Severity

MAX_LINES = 500
MAX_TOP_LEVEL_FUNCTIONS = 25

_TOP_LEVEL_FUNCTION = re.compile(
    r"^(?:export\s+)?(?:async\s+)?function\s*\*?\s*\w+"
    r"|^(?:export\s+)?(?:const|let|var)\s+\w+\s*=\s*(?:async\s+)?(?:function\b|\([^)]*\)\s*=>|\w+\s*=>)",
    re.MULTILINE,
)


class CodeOrganizationDetector(BaseDetector):
    name = "code_organization"
    category = "code"
    description = "Oversized script files mixing many concerns"
    requires = ("js", "html")

    def detect(self, snapshot) -> list[Finding]:
        affected = []
        for entry, text in script_files(snapshot):
            line_count = text.count("\n") + 1
            function_count = len(_TOP_LEVEL_FUNCTION.findall(text))
            if line_count > MAX_LINES or function_count > MAX_TOP_LEVEL_FUNCTIONS:
                affected.append(entry.path)

        if not affected:
            return []

        return [
            Finding(
                id="code-organization",
                title="Poor code organization",
                description="JavaScript has mixed concerns and lacks clear structure",
                severity=Severity.MEDIUM,
                affected=affected,
                recommendations=[
                    "Separate code into modules with clear responsibilities",
                    "Use a consistent pattern for organizing code",
                    "Consider adopting a framework or architecture like MVC",
                ],
                category=self.category,
            )
        ]
