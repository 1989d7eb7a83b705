"""Data models for findings, detector results and audit reports."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

# Canonical category order. Scoring, recommendation ordering and reporters
# all iterate categories in this order.
CATEGORIES: tuple[str, ...] = ("performance", "code", "seo", "accessibility", "security")


class Severity(enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


_SEVERITY_RANK = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


@dataclass(frozen=True)
class Finding:
    id: str
    title: str
    description: str
    severity: Severity
    affected: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    category: str = ""

    def __post_init__(self):
        # Accept any iterable from detectors but store tuples so findings stay immutable
        object.__setattr__(self, "affected", tuple(self.affected))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))


@dataclass
class ScoreBoard:
    categories: dict[str, int] = field(default_factory=dict)
    overall: int = 100

    def __getitem__(self, category: str) -> int:
        if category == "overall":
            return self.overall
        return self.categories[category]

    def as_dict(self) -> dict[str, int]:
        data = {c: self.categories[c] for c in CATEGORIES if c in self.categories}
        data["overall"] = self.overall
        return data


@dataclass
class RecommendationBundle:
    high: list[Finding] = field(default_factory=list)
    medium: list[Finding] = field(default_factory=list)
    low: list[Finding] = field(default_factory=list)
    all: list[Finding] = field(default_factory=list)


@dataclass(frozen=True)
class Technology:
    name: str
    category: str
    confidence: int


@dataclass
class FileStats:
    total_files: int = 0
    total_size: int = 0
    by_type: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass
class DetectorResult:
    detector_name: str
    category: str
    description: str
    findings: list[Finding] = field(default_factory=list)
    error: str | None = None
    skipped: bool = False
    skip_reason: str = ""


@dataclass
class AuditReport:
    repository: str
    timestamp: datetime
    results: list[DetectorResult] = field(default_factory=list)
    scores: ScoreBoard = field(default_factory=ScoreBoard)
    recommendations: RecommendationBundle = field(default_factory=RecommendationBundle)
    file_stats: FileStats = field(default_factory=FileStats)
    technologies: list[Technology] = field(default_factory=list)
    unavailable_categories: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.repository.rstrip("/\\").replace("\\", "/").rsplit("/", 1)[-1] or "site"

    @property
    def category_results(self) -> dict[str, list[Finding]]:
        """Findings grouped by category, every category present, detector order preserved."""
        grouped: dict[str, list[Finding]] = {c: [] for c in CATEGORIES}
        for r in self.results:
            grouped.setdefault(r.category, []).extend(r.findings)
        return grouped

    @property
    def findings(self) -> list[Finding]:
        all_findings = []
        for category_findings in self.category_results.values():
            all_findings.extend(category_findings)
        return all_findings

    @property
    def high_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.HIGH)

    @property
    def medium_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.MEDIUM)

    @property
    def low_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.LOW)

    @property
    def detectors_passed(self) -> int:
        return sum(1 for r in self.results if not r.findings and not r.error and not r.skipped)

    @property
    def detectors_skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def detectors_total(self) -> int:
        return sum(1 for r in self.results if not r.skipped)
