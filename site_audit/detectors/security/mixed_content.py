"""Detect resources loaded over plain HTTP."""

from site_audit.detectors.base import PageDetector
from site_audit.detectors.helpers import html_pages
from site_audit.models import Finding, Severity

# tag -> attribute that loads a subresource
_RESOURCE_ATTRS = {
    "script": "src",
    "link": "href",
    "img": "src",
    "iframe": "src",
    "source": "src",
    "audio": "src",
    "video": "src",
    "embed": "src",
    "object": "data",
}

_LOCAL_HOSTS = ("http://localhost", "http://127.0.0.1")


def insecure_resources(soup) -> list[str]:
    urls = []
    for tag_name, attr in _RESOURCE_ATTRS.items():
        for tag in soup.find_all(tag_name):
            url = (tag.get(attr) or "").strip()
            if url.lower().startswith("http://") and not url.lower().startswith(_LOCAL_HOSTS):
                urls.append(url)
    return urls


class MixedContentDetector(PageDetector):
    name = "mixed_content"
    category = "security"
    description = "Scripts, styles and media referenced over HTTP"

    def detect(self, snapshot) -> list[Finding]:
        affected = [entry.path for entry, soup in html_pages(snapshot) if insecure_resources(soup)]
        if not affected:
            return []

        return [
            Finding(
                id="sec-mixed-content",
                title="Mixed content",
                description="Some resources are loaded over HTTP on an HTTPS site",
                severity=Severity.HIGH,
                affected=affected,
                recommendations=[
                    "Ensure all resources are loaded over HTTPS",
                    "Update hardcoded HTTP URLs to HTTPS or protocol-relative URLs",
                    "Implement Content-Security-Policy header",
                ],
                category=self.category,
            )
        ]
