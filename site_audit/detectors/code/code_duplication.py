"""Detect blocks of code repeated across script files."""

from __future__ import annotations

import re

from site_audit.detectors.base import BaseDetector
from site_audit.detectors.helpers import script_files
from site_audit.models import Finding, Severity

# Consecutive significant lines that must match for a block to count as duplicated
WINDOW = 6

_TRIVIAL_LINE = re.compile(r"^[\W_]*$")
_WHITESPACE = re.compile(r"\s+")


def _significant_lines(text: str) -> list[str]:
    lines = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("//", "/*", "*")) or _TRIVIAL_LINE.match(line):
            continue
        lines.append(_WHITESPACE.sub(" ", line))
    return lines


class CodeDuplicationDetector(BaseDetector):
    name = "code_duplication"
    category = "code"
    description = "Identical code blocks repeated across script files"
    requires = ("js", "html")

    def detect(self, snapshot) -> list[Finding]:
        block_files: dict[tuple[str, ...], set[str]] = {}
        for entry, text in script_files(snapshot):
            lines = _significant_lines(text)
            for i in range(len(lines) - WINDOW + 1):
                block_files.setdefault(tuple(lines[i : i + WINDOW]), set()).add(entry.path)

        duplicated: set[str] = set()
        for paths in block_files.values():
            if len(paths) > 1:
                duplicated.update(paths)

        if not duplicated:
            return []

        return [
            Finding(
                id="code-duplication",
                title="Code duplication detected",
                description="Similar code patterns repeated across multiple files",
                severity=Severity.MEDIUM,
                affected=sorted(duplicated),
                recommendations=[
                    "Extract common functionality into utility functions",
                    "Implement DRY (Don't Repeat Yourself) principles",
                    "Create reusable components for common UI elements",
                ],
                category=self.category,
            )
        ]
