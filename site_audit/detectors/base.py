"""Base class for all detectors."""

from __future__ import annotations

import abc

from site_audit.detectors.helpers import page_entries
from site_audit.models import Finding
from site_audit.snapshot import RepositorySnapshot


class BaseDetector(abc.ABC):
    """Abstract base class for all site-audit detectors.

    To create a new detector, subclass this and implement `detect()`.
    The registry auto-discovers all subclasses found in the detectors/ directory.

    Attributes:
        name: Unique identifier for this detector.
        category: One of performance, code, seo, accessibility, security.
        description: Human-readable summary of what this detector looks for.
        requires: File types the detector inspects. When the repository has
            none of them the auditor skips the detector. Empty means always run.

    Override `skip_reason()` when the detector needs something narrower than
    a file type to have anything to inspect.
    """

    name: str = ""
    category: str = ""
    description: str = ""
    requires: tuple[str, ...] = ()

    @abc.abstractmethod
    def detect(self, snapshot: RepositorySnapshot) -> list[Finding]:
        """Inspect the repository snapshot.

        Args:
            snapshot: File inventory of the repository under audit.

        Returns:
            List of Finding objects. Empty list means nothing was detected.
        """
        ...

    def skip_reason(self, snapshot: RepositorySnapshot) -> str | None:
        """Return why the detector cannot run on *snapshot*, or None if it can."""
        if self.requires and not snapshot.by_type(*self.requires):
            return f"No {'/'.join(self.requires)} files in repository"
        return None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.name:
            cls.name = cls.__name__

    def __repr__(self):
        return f"<{self.__class__.__name__} [{self.category}] {self.name}>"


class PageDetector(BaseDetector):
    """Base for detectors that parse static HTML pages.

    Component sources (.jsx, .tsx, .vue, .svelte) share the "html" file type
    but are never parsed as pages, so a repository made only of components
    has nothing for these detectors to inspect.
    """

    requires = ("html",)

    def skip_reason(self, snapshot: RepositorySnapshot) -> str | None:
        reason = super().skip_reason(snapshot)
        if reason is None and not page_entries(snapshot):
            return "No HTML pages in repository"
        return reason
