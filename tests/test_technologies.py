"""Tests for site_audit.technologies."""

from __future__ import annotations

import json

from site_audit.technologies import detect_technologies, package_dependencies


def _names(techs):
    return [t.name for t in techs]


class TestPackageDependencies:
    def test_merges_dev_dependencies(self, make_snapshot):
        snapshot = make_snapshot({
            "package.json": json.dumps({
                "dependencies": {"react": "^18.2.0"},
                "devDependencies": {"vite": "^5.0.0"},
            })
        })
        assert package_dependencies(snapshot) == {"react": "^18.2.0", "vite": "^5.0.0"}

    def test_missing_package_json(self, make_snapshot):
        assert package_dependencies(make_snapshot({"index.html": "<p>"})) == {}

    def test_invalid_package_json(self, make_snapshot):
        assert package_dependencies(make_snapshot({"package.json": "{not json"})) == {}


class TestDetectTechnologies:
    def test_file_types(self, make_snapshot):
        techs = detect_technologies(make_snapshot({"index.html": "<p>", "a.css": "", "b.js": ""}))
        assert {"HTML5", "CSS3", "JavaScript"} <= set(_names(techs))

    def test_package_json(self, make_snapshot):
        snapshot = make_snapshot({
            "package.json": json.dumps({"dependencies": {"react": "18", "express": "4"}}),
        })
        techs = {t.name: t for t in detect_technologies(snapshot)}
        assert techs["React"].category == "frontend"
        assert techs["Express"].category == "backend"

    def test_html_references(self, make_snapshot):
        snapshot = make_snapshot({
            "index.html": (
                '<script src="https://code.jquery.com/jquery-1.11.3.min.js"></script>'
                '<script async src="https://www.googletagmanager.com/gtag/js?id=G-1"></script>'
            ),
        })
        names = _names(detect_technologies(snapshot))
        assert "jQuery" in names
        assert "Google Analytics" in names

    def test_server_language(self, make_snapshot):
        techs = {t.name: t for t in detect_technologies(make_snapshot({"contact.php": "<?php"}))}
        assert techs["PHP"].confidence == 60

    def test_sorted_by_confidence(self, make_snapshot):
        snapshot = make_snapshot({
            "index.html": '<link href="https://use.fontawesome.com/releases/v5/css/all.css">',
            "contact.php": "<?php",
        })
        confidences = [t.confidence for t in detect_technologies(snapshot)]
        assert confidences == sorted(confidences, reverse=True)

    def test_empty_repository(self, make_snapshot):
        assert detect_technologies(make_snapshot({})) == []
