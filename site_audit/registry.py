"""Auto-discovery and registration of detector modules."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from site_audit.detectors.base import BaseDetector

logger = logging.getLogger(__name__)


def discover_detectors(
    categories: list[str] | None = None,
    exclude: set[str] | None = None,
    include_only: set[str] | None = None,
) -> list[BaseDetector]:
    """
    Discover and instantiate all BaseDetector subclasses under the site_audit.detectors package.

    Parameters:
        categories (list[str] | None): If provided, only include detectors whose `category` is in this list.
        exclude (set[str] | None): Detector names to leave out.
        include_only (set[str] | None): If provided, only detectors with these names are returned,
            whatever their category.

    Returns:
        list[BaseDetector]: Instantiated detector objects, sorted by (category, name).
    """
    detectors_package = importlib.import_module("site_audit.detectors")
    assert detectors_package.__file__ is not None
    detectors_dir = Path(detectors_package.__file__).parent

    _import_submodules("site_audit.detectors", detectors_dir)

    instances = []
    seen = set()
    for cls in _all_subclasses(BaseDetector):
        if cls in seen or not cls.category:
            continue
        seen.add(cls)
        if exclude and cls.name in exclude:
            continue
        if include_only is not None:
            if cls.name not in include_only:
                continue
        elif categories and cls.category not in categories:
            continue
        instances.append(cls())

    instances.sort(key=lambda d: (d.category, d.name))
    return instances


def _import_submodules(package_name: str, package_dir: Path):
    """
    Recursively import all submodules in a package directory.

    A module that fails to import is logged and skipped so one broken detector
    does not hide the others.
    """
    for _importer, modname, _ispkg in pkgutil.walk_packages(
        path=[str(package_dir)],
        prefix=package_name + ".",
    ):
        try:
            importlib.import_module(modname)
        except Exception as e:
            logger.warning("Failed to import detector module %s: %s", modname, e)


def _all_subclasses(cls):
    """Collect all subclasses of a class recursively, depth-first."""
    result = []
    for sub in cls.__subclasses__():
        result.append(sub)
        result.extend(_all_subclasses(sub))
    return result
