"""Detect front-end libraries with releases known to carry vulnerabilities."""

from __future__ import annotations

import re

from site_audit.detectors.base import BaseDetector
from site_audit.models import Finding, Severity
from site_audit.technologies import package_dependencies

# package name -> (display name, first version without known XSS advisories)
MINIMUM_SAFE_VERSIONS: dict[str, tuple[str, tuple[int, ...]]] = {
    "jquery": ("jQuery", (3, 5, 0)),
    "bootstrap": ("Bootstrap", (4, 3, 1)),
    "angular": ("AngularJS", (1, 8, 0)),
    "lodash": ("Lodash", (4, 17, 21)),
    "moment": ("Moment.js", (2, 29, 4)),
}

# Vendored files and CDN URLs: jquery-1.11.3.min.js, bootstrap/3.3.5/js/bootstrap.min.js
_VERSIONED_REFERENCE = re.compile(
    r"\b(jquery|bootstrap|angular|lodash|moment)[/@.-]v?(\d+\.\d+(?:\.\d+)?)", re.IGNORECASE
)

_VERSION = re.compile(r"(\d+(?:\.\d+)*)")


def parse_version(spec: str) -> tuple[int, ...] | None:
    """Extract a version tuple from a dependency spec such as '^1.11.3' or '~3.3'."""
    m = _VERSION.search(spec)
    if not m:
        return None
    return tuple(int(part) for part in m.group(1).split("."))


def _is_outdated(package: str, version: tuple[int, ...]) -> bool:
    _, minimum = MINIMUM_SAFE_VERSIONS[package]
    width = max(len(version), len(minimum))
    return version + (0,) * (width - len(version)) < minimum + (0,) * (width - len(minimum))


class OutdatedLibrariesDetector(BaseDetector):
    name = "outdated_libraries"
    category = "security"
    description = "Outdated JavaScript libraries with known vulnerabilities"

    def detect(self, snapshot) -> list[Finding]:
        outdated: dict[str, None] = {}

        for package, spec in package_dependencies(snapshot).items():
            if package not in MINIMUM_SAFE_VERSIONS:
                continue
            version = parse_version(spec)
            if version and _is_outdated(package, version):
                outdated[f"{MINIMUM_SAFE_VERSIONS[package][0]} {'.'.join(map(str, version))}"] = None

        sources = [entry.path for entry in snapshot.files]
        sources.extend(text for _entry, text in snapshot.iter_text("html"))
        for source in sources:
            for package, version_text in _VERSIONED_REFERENCE.findall(source):
                package = package.lower()
                version = parse_version(version_text)
                if version and _is_outdated(package, version):
                    outdated[f"{MINIMUM_SAFE_VERSIONS[package][0]} {version_text}"] = None

        if not outdated:
            return []

        return [
            Finding(
                id="sec-outdated",
                title="Outdated libraries with known vulnerabilities",
                description="Some JavaScript libraries are outdated with security issues",
                severity=Severity.HIGH,
                affected=list(outdated),
                recommendations=[
                    "Update all libraries to their latest versions",
                    "Implement a process for regular dependency updates",
                    "Consider using fewer external dependencies",
                ],
                category=self.category,
            )
        ]
