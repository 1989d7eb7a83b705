"""Repository snapshot: the file inventory every detector works from."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from site_audit.config import DEFAULT_MAX_FILE_SIZE, DEFAULT_SKIP_DIRS, AnalysisConfig
from site_audit.models import FileStats

logger = logging.getLogger(__name__)

# Checked in order; the first matching table wins, so .jsx/.tsx count as html.
FILE_TYPES: list[tuple[str, frozenset[str]]] = [
    ("html", frozenset({".html", ".htm", ".xhtml", ".jsx", ".tsx", ".vue", ".svelte"})),
    ("css", frozenset({".css", ".scss", ".sass", ".less", ".styl"})),
    ("js", frozenset({".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"})),
    ("image", frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp"})),
    ("font", frozenset({".woff", ".woff2", ".ttf", ".eot", ".otf"})),
    ("server", frozenset({".php", ".py", ".rb", ".java", ".go", ".cs", ".rs"})),
    ("json", frozenset({".json"})),
    ("markdown", frozenset({".md", ".markdown"})),
    ("text", frozenset({".txt", ".gitignore", ".htaccess", ".conf", ".toml", ".yaml", ".yml"})),
]


def classify(path: str) -> str:
    """Return the file type for *path* based on its extension."""
    name = path.rsplit("/", 1)[-1].lower()
    ext = os.path.splitext(name)[1] or (name if name.startswith(".") else "")
    for file_type, extensions in FILE_TYPES:
        if ext in extensions:
            return file_type
    return "other"


@dataclass(frozen=True)
class FileEntry:
    path: str  # POSIX path relative to the snapshot root
    size: int
    type: str


@dataclass
class RepositorySnapshot:
    root: Path
    files: list[FileEntry] = field(default_factory=list)
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    _text_cache: dict[str, str | None] = field(default_factory=dict, repr=False)
    _by_path: dict[str, FileEntry] = field(init=False, repr=False)

    def __post_init__(self):
        self._by_path = {f.path: f for f in self.files}

    def by_type(self, *file_types: str) -> list[FileEntry]:
        return [f for f in self.files if f.type in file_types]

    def get(self, path: str) -> FileEntry | None:
        return self._by_path.get(path)

    def read_text(self, path: str) -> str | None:
        """Return the decoded contents of *path*, or None if it is too large or unreadable."""
        if path in self._text_cache:
            return self._text_cache[path]

        entry = self.get(path)
        text = None
        if entry is not None and entry.size > self.max_file_size:
            logger.info("Skipping %s: %d bytes exceeds max_file_size", path, entry.size)
        else:
            try:
                text = (self.root / path).read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning("Failed to read %s: %s", path, e)

        self._text_cache[path] = text
        return text

    def iter_text(self, *file_types: str):
        """Yield (entry, text) for readable files of the given types."""
        for entry in self.by_type(*file_types):
            text = self.read_text(entry.path)
            if text is not None:
                yield entry, text


def scan_repository(root: str | Path, settings: AnalysisConfig | None = None) -> RepositorySnapshot:
    """Walk *root* and build a snapshot of every file outside the skipped directories.

    Raises:
        FileNotFoundError: if root does not exist.
        NotADirectoryError: if root is not a directory.
    """
    settings = settings or AnalysisConfig()
    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Repository path not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Repository path is not a directory: {root}")

    skip_dirs = settings.skip_dirs or DEFAULT_SKIP_DIRS
    files: list[FileEntry] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(d for d in dirnames if d not in skip_dirs)
        for filename in sorted(filenames):
            full = Path(dirpath) / filename
            try:
                size = full.stat().st_size
            except OSError as e:
                logger.warning("Failed to stat %s: %s", full, e)
                continue
            rel = full.relative_to(root_path).as_posix()
            files.append(FileEntry(path=rel, size=size, type=classify(rel)))

    logger.debug("Found %d files in %s", len(files), root_path)
    return RepositorySnapshot(root=root_path, files=files, max_file_size=settings.max_file_size)


def file_stats(snapshot: RepositorySnapshot) -> FileStats:
    stats = FileStats(
        total_files=len(snapshot.files),
        total_size=sum(f.size for f in snapshot.files),
    )
    for f in snapshot.files:
        bucket = stats.by_type.setdefault(f.type, {"count": 0, "size": 0})
        bucket["count"] += 1
        bucket["size"] += f.size
    return stats
