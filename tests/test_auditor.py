"""Tests for site_audit.auditor: running detectors and scoring the results."""

from __future__ import annotations

import pytest

from site_audit.auditor import run_audit
from site_audit.detectors.accessibility.color_contrast import ColorContrastDetector
from site_audit.models import CATEGORIES, Severity
from site_audit.scoring import DEFAULT_WEIGHTS, ConfigurationError

CLEAN_PAGE = (
    "<!DOCTYPE html><html><head>"
    '<meta name="description" content="Acme builds websites">'
    '<script type="application/ld+json">{"@type": "Organization"}</script>'
    '<script src="https://cdn.example.com/app.js"></script>'
    "</head><body><h1>Acme</h1><h2>Services</h2>"
    '<img src="images/logo.png" alt="Acme logo">'
    "</body></html>"
)

CLEAN_SITE = {
    "index.html": CLEAN_PAGE,
    "css/styles.css": "body { color: #222; background: #fff; }",
    "js/main.js": "document.querySelector('nav').classList.add('ready');\n",
}


def _by_name(report):
    return {r.detector_name: r for r in report.results}


class TestRunAudit:
    def test_clean_site(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE))
        # The only problem is the missing cache configuration
        assert [f.id for f in report.findings] == ["perf-no-caching"]
        assert report.scores["performance"] == 93
        assert report.scores.overall == 98
        assert report.unavailable_categories == []

    def test_repository_is_resolved(self, make_snapshot, tmp_path):
        report = run_audit(make_snapshot(CLEAN_SITE))
        assert report.repository == str(tmp_path.resolve())
        assert report.name == tmp_path.name

    def test_file_stats_and_technologies(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE))
        assert report.file_stats.total_files == 3
        assert {"HTML5", "CSS3", "JavaScript"} <= {t.name for t in report.technologies}

    def test_recommendations_ordered_by_severity(self, make_snapshot):
        files = dict(CLEAN_SITE, **{"about.html": CLEAN_PAGE.replace(' alt="Acme logo"', "")})
        report = run_audit(make_snapshot(files))
        ids = [f.id for f in report.recommendations.all]
        assert ids == ["seo-img-alt", "perf-no-caching"]
        assert report.recommendations.all[0].severity == Severity.HIGH

    def test_detector_order(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE))
        keys = [(r.category, r.detector_name) for r in report.results]
        assert keys == sorted(keys)
        assert len(keys) == 17


class TestSkippedDetectors:
    def test_missing_file_types_skip(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE))
        large_images = _by_name(report)["large_images"]
        assert large_images.skipped
        assert large_images.skip_reason == "No image files in repository"
        assert report.detectors_skipped == 1
        assert report.detectors_total == 16

    def test_category_with_only_skips_is_unavailable(self, make_snapshot):
        report = run_audit(make_snapshot({"README.md": "# Acme"}))
        assert report.unavailable_categories == ["performance", "code", "seo", "accessibility"]
        # outdated_libraries always runs
        assert "security" not in report.unavailable_categories
        assert report.scores.overall == 100

    def test_component_only_repo_skips_page_detectors(self, make_snapshot):
        report = run_audit(make_snapshot({
            "src/App.tsx": 'export const App = () => <main><img src="logo.png" /></main>;\n',
            "src/main.tsx": "createRoot(document.getElementById('root')).render(<App />);\n",
        }))
        results = _by_name(report)
        for name in ("meta_description", "image_alt", "form_labels", "mixed_content"):
            assert results[name].skipped, name
            assert results[name].skip_reason == "No HTML pages in repository"
        assert "seo" in report.unavailable_categories
        assert "accessibility" in report.unavailable_categories
        assert report.scores["seo"] == 100
        # component sources are still scanned as scripts
        assert not results["xss_sinks"].skipped

    def test_component_sources_beside_a_page_run_page_detectors(self, make_snapshot):
        report = run_audit(make_snapshot({
            "index.html": CLEAN_PAGE,
            "src/App.tsx": "export const App = () => <main />;\n",
        }))
        assert not _by_name(report)["meta_description"].skipped
        assert "seo" not in report.unavailable_categories


class TestDetectorErrors:
    def test_error_recorded_and_category_unavailable(self, make_snapshot, monkeypatch):
        def boom(self, snapshot):
            raise RuntimeError("stylesheet exploded")

        monkeypatch.setattr(ColorContrastDetector, "detect", boom)
        # Only CSS present, so the other accessibility detectors are skipped
        report = run_audit(make_snapshot({"css/a.css": ".muted { color: #999; background: #fff; }"}))

        result = _by_name(report)["color_contrast"]
        assert result.error == "RuntimeError: stylesheet exploded"
        assert result.findings == []
        assert "accessibility" in report.unavailable_categories
        assert report.scores["accessibility"] == 100

    def test_same_repo_without_error_scores_finding(self, make_snapshot):
        report = run_audit(make_snapshot({"css/a.css": ".muted { color: #999; background: #fff; }"}))
        assert report.scores["accessibility"] == 85
        assert "accessibility" not in report.unavailable_categories

    def test_error_does_not_abort_other_detectors(self, make_snapshot, monkeypatch):
        def boom(self, snapshot):
            raise ValueError("bad")

        monkeypatch.setattr(ColorContrastDetector, "detect", boom)
        report = run_audit(make_snapshot(CLEAN_SITE))
        assert [f.id for f in report.findings] == ["perf-no-caching"]
        assert sum(1 for r in report.results if r.error) == 1


class TestSelection:
    def test_categories_filter(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE), categories=["seo"])
        assert {r.category for r in report.results} == {"seo"}
        assert report.unavailable_categories == ["performance", "code", "accessibility", "security"]
        # caching finding is not counted when performance was not selected
        assert report.scores["performance"] == 100
        assert report.scores.overall == 100

    def test_exclude(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE), exclude={"caching_policy"})
        assert report.findings == []
        assert "caching_policy" not in _by_name(report)

    def test_include_only(self, make_snapshot):
        report = run_audit(make_snapshot(CLEAN_SITE), include_only={"caching_policy"})
        assert list(_by_name(report)) == ["caching_policy"]
        assert report.unavailable_categories == [c for c in CATEGORIES if c != "performance"]


class TestWeights:
    def test_custom_weights(self, make_snapshot):
        weights = {"performance": 1.0, "code": 0.0, "seo": 0.0, "accessibility": 0.0, "security": 0.0}
        report = run_audit(make_snapshot(CLEAN_SITE), weights=weights)
        assert report.scores.overall == 93

    def test_invalid_weights_raise(self, make_snapshot):
        with pytest.raises(ConfigurationError):
            run_audit(make_snapshot(CLEAN_SITE), weights=dict(DEFAULT_WEIGHTS, seo=0.5))


class TestVerbose:
    def test_progress_on_stderr(self, make_snapshot, capsys):
        run_audit(make_snapshot(CLEAN_SITE), verbose=True)
        err = capsys.readouterr().err
        assert "Audit: running 17 detectors" in err
        assert "SKIPPED: No image files in repository" in err
        assert "Overall score 98/100" in err
