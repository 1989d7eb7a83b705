"""Configuration loading and management for site-audit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from site_audit.scoring import DEFAULT_WEIGHTS, ConfigurationError, validate_weights

CONFIG_FILENAME = "site-audit.yaml"

DEFAULT_SKIP_DIRS = frozenset({"node_modules", ".git", "dist", "build", "vendor"})
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB


@dataclass
class DetectorConfig:
    """Configuration for which detectors to include/exclude."""

    exclude: set[str] = field(default_factory=set)
    include_only: set[str] | None = None  # None = no whitelist, run all minus exclude


@dataclass
class ScoringConfig:
    weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))


@dataclass
class AnalysisConfig:
    """Repository walk settings."""

    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


@dataclass
class ReportConfig:
    """Configuration for report generation."""

    todo_list: bool = True


@dataclass
class Config:
    """Complete configuration for site-audit."""

    detectors: DetectorConfig = field(default_factory=DetectorConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def find_config_file() -> str | None:
    """Search for site-audit.yaml in cwd, then home dir.

    Returns:
        Path to config file if found, None otherwise.
    """
    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.is_file():
        return str(cwd_config)

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.is_file():
        return str(home_config)

    return None


def load_config(config_path: str | None = None, auto_discover: bool = True) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file. If None and auto_discover is True,
                     searches default locations.
        auto_discover: If True and config_path is None, search for config file.

    Returns:
        Config object. Returns default config if no file found.

    Raises:
        FileNotFoundError: if an explicit config_path does not exist.
        ConfigurationError: if the file contents are invalid (e.g. weights not summing to 1.0).
    """
    if config_path is None and auto_discover:
        config_path = find_config_file()

    if config_path is None:
        return Config()

    if not os.path.isfile(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    return _parse_config(data)


def _parse_config(data: dict) -> Config:
    """Parse YAML data into Config object."""
    config = Config()

    if "detectors" in data:
        config.detectors = _parse_detector_config(data["detectors"] or {})

    if "scoring" in data:
        config.scoring = _parse_scoring_config(data["scoring"] or {})

    if "analysis" in data:
        config.analysis = _parse_analysis_config(data["analysis"] or {})

    if "report" in data:
        report_data = data["report"] or {}
        config.report = ReportConfig(todo_list=report_data.get("todo_list", True))

    return config


def _parse_detector_config(data: dict) -> DetectorConfig:
    """Parse detector configuration section."""
    exclude = set(data.get("exclude", []))

    include_only = None
    if "include_only" in data:
        include_only = set(data["include_only"])

    return DetectorConfig(exclude=exclude, include_only=include_only)


def _parse_analysis_config(data: dict) -> AnalysisConfig:
    """Parse analysis section; max_file_size must be a whole number of bytes."""
    value = data.get("max_file_size", DEFAULT_MAX_FILE_SIZE)
    try:
        max_file_size = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"max_file_size is not a number of bytes: {value!r}") from exc
    if max_file_size < 0:
        raise ConfigurationError(f"max_file_size must not be negative: {max_file_size}")

    return AnalysisConfig(
        skip_dirs=frozenset(data.get("skip_dirs", DEFAULT_SKIP_DIRS)),
        max_file_size=max_file_size,
    )


def _parse_scoring_config(data: dict) -> ScoringConfig:
    """Parse scoring section; partial weight maps are merged over the defaults."""
    weights = dict(DEFAULT_WEIGHTS)
    for category, value in (data.get("weights") or {}).items():
        try:
            weights[category] = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Weight for '{category}' is not a number: {value!r}") from exc

    validate_weights(weights)
    return ScoringConfig(weights=weights)


def merge_cli_with_config(
    config: Config,
    cli_exclude: set[str] | None = None,
    cli_include_only: set[str] | None = None,
    cli_no_todo: bool = False,
) -> tuple[DetectorConfig, ReportConfig]:
    """Merge CLI arguments with config file settings.

    CLI arguments take precedence over config file.

    Args:
        config: Loaded configuration.
        cli_exclude: Detectors to exclude (from --exclude flag).
        cli_include_only: Detectors to include only (from --include-only flag).
        cli_no_todo: Whether to disable To Do list (from --no-todo flag).

    Returns:
        Tuple of (DetectorConfig, ReportConfig) with merged settings.
    """
    detector_cfg = config.detectors

    # CLI exclude adds to config exclude
    if cli_exclude:
        detector_cfg = DetectorConfig(
            exclude=detector_cfg.exclude | cli_exclude,
            include_only=detector_cfg.include_only,
        )

    # CLI include_only completely overrides config
    if cli_include_only is not None:
        detector_cfg = DetectorConfig(
            exclude=detector_cfg.exclude,
            include_only=cli_include_only,
        )

    report_cfg = ReportConfig(todo_list=not cli_no_todo and config.report.todo_list)

    return detector_cfg, report_cfg
