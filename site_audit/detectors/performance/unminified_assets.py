"""Detect JavaScript and CSS assets shipped without minification."""

from site_audit.detectors.base import BaseDetector
from site_audit.detectors.helpers import is_minified
from site_audit.models import Finding, Severity

UNMINIFIED_MIN_BYTES = 20_000


class UnminifiedAssetsDetector(BaseDetector):
    name = "unminified_assets"
    category = "performance"
    description = "Unminified JavaScript and CSS over 20KB"
    requires = ("js", "css")

    def detect(self, snapshot) -> list[Finding]:
        assets = [
            f
            for f in snapshot.by_type("js", "css")
            if not is_minified(f.path) and f.size > UNMINIFIED_MIN_BYTES
        ]
        if not assets:
            return []

        return [
            Finding(
                id="perf-unminified",
                title="Unminified JavaScript and CSS",
                description=f"{len(assets)} unminified assets detected",
                severity=Severity.MEDIUM,
                affected=[f.path for f in assets],
                recommendations=[
                    "Implement minification for JavaScript and CSS files",
                    "Use a build tool like Webpack, Parcel, or Gulp",
                    "Enable GZIP or Brotli compression on the server",
                ],
                category=self.category,
            )
        ]
