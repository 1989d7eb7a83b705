"""Detect image files large enough to slow page loads."""

from site_audit.detectors.base import BaseDetector
from site_audit.models import Finding, Severity

LARGE_IMAGE_BYTES = 500_000
# More large images than this escalates the finding to HIGH
HIGH_SEVERITY_COUNT = 3


class LargeImagesDetector(BaseDetector):
    name = "large_images"
    category = "performance"
    description = "Images larger than 500KB"
    requires = ("image",)

    def detect(self, snapshot) -> list[Finding]:
        large = [f for f in snapshot.by_type("image") if f.size > LARGE_IMAGE_BYTES]
        if not large:
            return []

        return [
            Finding(
                id="perf-large-images",
                title="Large images detected",
                description=f"{len(large)} images exceed 500KB in size",
                severity=Severity.HIGH if len(large) > HIGH_SEVERITY_COUNT else Severity.MEDIUM,
                affected=[f.path for f in large],
                recommendations=[
                    "Compress images using modern formats like WebP",
                    "Implement responsive images with srcset and sizes attributes",
                    "Consider lazy loading for images below the fold",
                ],
                category=self.category,
            )
        ]
