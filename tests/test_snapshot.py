"""Tests for site_audit.snapshot: repository walking, classification and file stats."""

from __future__ import annotations

import pytest
from conftest import write_files

from site_audit.config import AnalysisConfig
from site_audit.snapshot import FileEntry, RepositorySnapshot, classify, file_stats, scan_repository


class TestClassify:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("index.html", "html"),
            ("src/App.tsx", "html"),
            ("components/Nav.jsx", "html"),
            ("css/styles.scss", "css"),
            ("js/main.js", "js"),
            ("server/routes.ts", "js"),
            ("images/HERO.JPG", "image"),
            ("fonts/roboto.woff2", "font"),
            ("contact.php", "server"),
            ("package.json", "json"),
            ("README.md", "markdown"),
            (".gitignore", "text"),
            ("public/.htaccess", "text"),
            ("Makefile", "other"),
        ],
    )
    def test_types(self, path, expected):
        assert classify(path) == expected


class TestScanRepository:
    def test_lists_files_sorted_with_posix_paths(self, tmp_path):
        write_files(tmp_path, {"b.html": "<p>", "a/z.js": "x", "a/y.css": "y"})
        snapshot = scan_repository(tmp_path)
        # Top-down walk: a directory's own files come before its subdirectories
        assert [f.path for f in snapshot.files] == ["b.html", "a/y.css", "a/z.js"]

    def test_skips_default_dirs(self, tmp_path):
        write_files(tmp_path, {
            "index.html": "<p>",
            "node_modules/lib/index.js": "x",
            ".git/config": "x",
            "dist/bundle.js": "x",
        })
        snapshot = scan_repository(tmp_path)
        assert [f.path for f in snapshot.files] == ["index.html"]

    def test_custom_skip_dirs(self, tmp_path):
        write_files(tmp_path, {"index.html": "<p>", "public/a.js": "x", "dist/b.js": "y"})
        snapshot = scan_repository(tmp_path, AnalysisConfig(skip_dirs=frozenset({"public"})))
        assert sorted(f.path for f in snapshot.files) == ["dist/b.js", "index.html"]

    def test_records_size_and_type(self, tmp_path):
        write_files(tmp_path, {"images/hero.jpg": b"\xff" * 1234})
        entry = scan_repository(tmp_path).files[0]
        assert entry.size == 1234
        assert entry.type == "image"

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            scan_repository(tmp_path / "nope")

    def test_root_is_file(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(NotADirectoryError):
            scan_repository(path)


class TestGet:
    def test_returns_entry(self, tmp_path):
        write_files(tmp_path, {"index.html": "<h1>Hi</h1>", "css/a.css": "a{}"})
        snapshot = scan_repository(tmp_path)
        entry = snapshot.get("css/a.css")
        assert entry.type == "css"
        assert entry.size == 3

    def test_unknown_path(self, tmp_path):
        write_files(tmp_path, {"index.html": "<h1>Hi</h1>"})
        assert scan_repository(tmp_path).get("missing.html") is None

    def test_large_inventory(self, tmp_path):
        files = [FileEntry(path=f"js/m{i}.js", size=i, type="js") for i in range(20000)]
        snapshot = RepositorySnapshot(root=tmp_path, files=files)
        assert all(snapshot.get(f.path) is f for f in files)
        assert snapshot.get("js/m20000.js") is None


class TestReadText:
    def test_reads_and_caches(self, tmp_path):
        write_files(tmp_path, {"index.html": "<h1>Hi</h1>"})
        snapshot = scan_repository(tmp_path)
        assert snapshot.read_text("index.html") == "<h1>Hi</h1>"
        (tmp_path / "index.html").write_text("changed")
        assert snapshot.read_text("index.html") == "<h1>Hi</h1>"

    def test_oversized_file_skipped(self, tmp_path):
        write_files(tmp_path, {"big.js": "x" * 100})
        snapshot = scan_repository(tmp_path, AnalysisConfig(max_file_size=10))
        assert snapshot.read_text("big.js") is None

    def test_invalid_utf8_replaced(self, tmp_path):
        write_files(tmp_path, {"page.html": b"<p>\xff</p>"})
        snapshot = scan_repository(tmp_path)
        assert snapshot.read_text("page.html").startswith("<p>")

    def test_iter_text_by_type(self, tmp_path):
        write_files(tmp_path, {"a.css": "a{}", "b.js": "b()", "c.html": "<p>"})
        snapshot = scan_repository(tmp_path)
        assert [e.path for e, _ in snapshot.iter_text("css", "js")] == ["a.css", "b.js"]


class TestFileStats:
    def test_counts_by_type(self, tmp_path):
        write_files(tmp_path, {"a.html": "12345", "b.html": "123", "c.css": "1"})
        stats = file_stats(scan_repository(tmp_path))
        assert stats.total_files == 3
        assert stats.total_size == 9
        assert stats.by_type == {"html": {"count": 2, "size": 8}, "css": {"count": 1, "size": 1}}

    def test_empty_repository(self, tmp_path):
        stats = file_stats(scan_repository(tmp_path))
        assert stats.total_files == 0
        assert stats.by_type == {}
