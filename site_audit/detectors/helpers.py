"""Shared helpers for detectors: file selection and HTML parsing."""

from __future__ import annotations

from bs4 import BeautifulSoup

from site_audit.snapshot import FileEntry, RepositorySnapshot

PAGE_EXTENSIONS = (".html", ".htm", ".xhtml")
SCRIPT_EXTENSIONS = (".js", ".mjs", ".cjs", ".ts", ".jsx", ".tsx")


def is_minified(path: str) -> bool:
    return ".min." in path.rsplit("/", 1)[-1]


def page_entries(snapshot: RepositorySnapshot) -> list[FileEntry]:
    """Static HTML pages, leaving out component sources that share the html type."""
    return [f for f in snapshot.by_type("html") if f.path.lower().endswith(PAGE_EXTENSIONS)]


def html_pages(snapshot: RepositorySnapshot) -> list[tuple[FileEntry, BeautifulSoup]]:
    """Parse every static HTML page in the snapshot."""
    pages = []
    for entry in page_entries(snapshot):
        text = snapshot.read_text(entry.path)
        if text is not None:
            pages.append((entry, parse_html(text)))
    return pages


def script_files(snapshot: RepositorySnapshot, include_minified: bool = False) -> list[tuple[FileEntry, str]]:
    """Return (entry, text) for hand-written JavaScript/TypeScript sources."""
    scripts = []
    for entry, text in snapshot.iter_text("js", "html"):
        if not entry.path.lower().endswith(SCRIPT_EXTENSIONS):
            continue
        if not include_minified and is_minified(entry.path):
            continue
        scripts.append((entry, text))
    return scripts


def parse_html(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "html.parser")
