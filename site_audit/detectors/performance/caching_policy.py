"""Detect repositories that never configure cache headers for static assets."""

import re

from site_audit.detectors.base import BaseDetector
from site_audit.models import Finding, Severity

# Hosting/server config files that commonly carry cache rules
_CONFIG_NAMES = frozenset(
    {".htaccess", "_headers", "netlify.toml", "vercel.json", "firebase.json", "web.config", "nginx.conf"}
)

_CACHE_PATTERN = re.compile(
    r"cache-control|max-?age|ExpiresActive|ExpiresByType|mod_expires|\bexpires\s+\d",
    re.IGNORECASE,
)

_STATIC_TYPES = ("css", "js", "image", "font")


class CachingPolicyDetector(BaseDetector):
    name = "caching_policy"
    category = "performance"
    description = "Cache headers configured for static assets"
    requires = _STATIC_TYPES

    def detect(self, snapshot) -> list[Finding]:
        if not snapshot.by_type(*_STATIC_TYPES):
            return []

        for entry in snapshot.files:
            filename = entry.path.rsplit("/", 1)[-1]
            if filename not in _CONFIG_NAMES and not filename.endswith(".conf") and entry.type != "server":
                continue
            text = snapshot.read_text(entry.path)
            if text and _CACHE_PATTERN.search(text):
                return []

        return [
            Finding(
                id="perf-no-caching",
                title="No caching policy",
                description="Static assets lack proper cache headers",
                severity=Severity.MEDIUM,
                affected=["All static assets"],
                recommendations=[
                    "Implement appropriate cache-control headers",
                    "Set up browser caching for static assets",
                    "Use versioning for cache busting when content changes",
                ],
                category=self.category,
            )
        ]
