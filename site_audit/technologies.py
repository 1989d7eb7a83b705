"""Technology detection from file types, package.json and HTML references."""

from __future__ import annotations

import json
import logging
import re

from site_audit.models import Technology
from site_audit.snapshot import RepositorySnapshot

logger = logging.getLogger(__name__)

# package.json dependency name -> (display name, category)
_PACKAGE_TECHNOLOGIES: dict[str, tuple[str, str]] = {
    "react": ("React", "frontend"),
    "vue": ("Vue", "frontend"),
    "svelte": ("Svelte", "frontend"),
    "@angular/core": ("Angular", "frontend"),
    "jquery": ("jQuery", "frontend"),
    "bootstrap": ("Bootstrap", "frontend"),
    "tailwindcss": ("Tailwind CSS", "frontend"),
    "@fortawesome/fontawesome-free": ("Font Awesome", "frontend"),
    "next": ("Next.js", "frontend"),
    "vite": ("Vite", "build"),
    "webpack": ("Webpack", "build"),
    "express": ("Express", "backend"),
    "typescript": ("TypeScript", "language"),
}

# Regex over HTML/JS text -> (display name, category, confidence)
_REFERENCE_PATTERNS: list[tuple[re.Pattern, str, str, int]] = [
    (re.compile(r"jquery[.-]?[\d.]*(\.min)?\.js|code\.jquery\.com", re.I), "jQuery", "frontend", 90),
    (re.compile(r"bootstrap[\w.-]*\.(css|js)", re.I), "Bootstrap", "frontend", 85),
    (re.compile(r"google-analytics\.com|googletagmanager\.com|gtag\(", re.I), "Google Analytics", "analytics", 75),
    (re.compile(r"font-?awesome|kit\.fontawesome\.com", re.I), "Font Awesome", "frontend", 70),
]

# File type -> (display name, category)
_FILE_TYPE_TECHNOLOGIES: dict[str, tuple[str, str]] = {
    "html": ("HTML5", "frontend"),
    "css": ("CSS3", "frontend"),
    "js": ("JavaScript", "frontend"),
}

_SERVER_EXTENSIONS: dict[str, str] = {
    ".php": "PHP",
    ".py": "Python",
    ".rb": "Ruby",
    ".java": "Java",
    ".go": "Go",
    ".cs": "C#",
    ".rs": "Rust",
}


def read_package_json(snapshot: RepositorySnapshot) -> dict:
    """Return the parsed root package.json, or an empty dict if absent or invalid."""
    text = snapshot.read_text("package.json") if snapshot.get("package.json") else None
    if not text:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring invalid package.json: %s", e)
        return {}
    return data if isinstance(data, dict) else {}


def package_dependencies(snapshot: RepositorySnapshot) -> dict[str, str]:
    data = read_package_json(snapshot)
    deps: dict[str, str] = {}
    for key in ("dependencies", "devDependencies"):
        section = data.get(key) or {}
        if isinstance(section, dict):
            deps.update({str(k): str(v) for k, v in section.items()})
    return deps


def detect_technologies(snapshot: RepositorySnapshot) -> list[Technology]:
    """Detect technologies used by the repository, highest confidence first."""
    found: dict[str, Technology] = {}

    def add(name: str, category: str, confidence: int):
        existing = found.get(name)
        if existing is None or existing.confidence < confidence:
            found[name] = Technology(name=name, category=category, confidence=confidence)

    types_present = {f.type for f in snapshot.files}
    for file_type, (name, category) in _FILE_TYPE_TECHNOLOGIES.items():
        if file_type in types_present:
            add(name, category, 100)

    for f in snapshot.by_type("server"):
        ext = "." + f.path.rsplit(".", 1)[-1].lower()
        if ext in _SERVER_EXTENSIONS:
            add(_SERVER_EXTENSIONS[ext], "backend", 60)

    if any(f.path.endswith((".ts", ".tsx")) for f in snapshot.files):
        add("TypeScript", "language", 100)

    for dep in package_dependencies(snapshot):
        if dep in _PACKAGE_TECHNOLOGIES:
            name, category = _PACKAGE_TECHNOLOGIES[dep]
            add(name, category, 95)

    for entry in snapshot.files:
        for pattern, name, category, confidence in _REFERENCE_PATTERNS:
            if pattern.search(entry.path):
                add(name, category, confidence)

    for _entry, text in snapshot.iter_text("html"):
        for pattern, name, category, confidence in _REFERENCE_PATTERNS:
            if pattern.search(text):
                add(name, category, confidence)

    return sorted(found.values(), key=lambda t: (-t.confidence, t.name))
