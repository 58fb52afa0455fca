"""
Configuration file support for codeguard.

Looks for a .codeguard.yml file in the project and loads settings that
control which files are collected and how the analyzer is called.

Example .codeguard.yml:

    # Extra directory names to skip (added to the built-in list)
    exclude_dirs:
      - fixtures
      - third_party

    # Files to exclude (glob patterns relative to the scan path)
    exclude:
      - "*.min.js"
      - "docs/*"

    # Per-file size ceiling in bytes; larger files are skipped
    max_file_size: 200000

    # Replace the default source extensions
    extensions: [".py", ".js"]

    # Claude model used for analysis
    model: claude-sonnet-4-20250514

    # Show low severity findings in the console report
    show_all: false
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from codeguard.analyzer.claude_client import DEFAULT_MODEL
from codeguard.collector.file_collector import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_FILE_SIZE,
    CollectOptions,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".codeguard.yml"


@dataclass
class Config:
    """Parsed codeguard configuration."""
    exclude_dirs: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    extensions: Optional[list[str]] = None  # None = built-in list
    model: str = DEFAULT_MODEL
    show_all: bool = False

    def collect_options(self) -> CollectOptions:
        """Turn the file-selection settings into collector options."""
        extensions = DEFAULT_EXTENSIONS
        if self.extensions is not None:
            extensions = frozenset(
                e.lower() if e.startswith(".") else f".{e.lower()}"
                for e in self.extensions
            )
        return CollectOptions(
            exclude_dirs=DEFAULT_EXCLUDE_DIRS | frozenset(self.exclude_dirs),
            extensions=extensions,
            exclude=list(self.exclude),
            max_file_size=self.max_file_size,
        )


def _as_list(raw: dict, key: str) -> list[str]:
    value = raw.get(key) or []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        logger.warning("Config '%s' should be a list, ignoring", key)
        return []
    return [str(v) for v in value]


def load_config(config_path: Optional[str] = None, scan_path: Optional[str] = None) -> Config:
    """
    Load configuration from a .codeguard.yml file.

    Search order:
      1. Explicit config_path if provided
      2. .codeguard.yml in the scan_path directory (or its parents)
      3. .codeguard.yml in the current working directory

    Returns a Config with defaults if no config file is found.

    Raises:
        ValueError: If max_file_size isn't a positive integer.
    """
    path = _find_config_file(config_path, scan_path)

    if path is None:
        logger.debug("No config file found, using defaults")
        return Config()

    logger.info("Loading config from %s", path)

    with open(path, "r") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        logger.warning("Config file is not a YAML mapping, using defaults")
        return Config()

    max_file_size = raw.get("max_file_size", DEFAULT_MAX_FILE_SIZE)
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int) or max_file_size <= 0:
        raise ValueError(f"max_file_size must be a positive integer, got {max_file_size!r}")

    return Config(
        exclude_dirs=_as_list(raw, "exclude_dirs"),
        exclude=_as_list(raw, "exclude"),
        max_file_size=max_file_size,
        extensions=_as_list(raw, "extensions") if "extensions" in raw else None,
        model=str(raw.get("model") or DEFAULT_MODEL),
        show_all=bool(raw.get("show_all", False)),
    )


def _find_config_file(
    config_path: Optional[str] = None,
    scan_path: Optional[str] = None,
) -> Optional[str]:
    """Find the config file, returning its path or None."""
    # 1. Explicit path
    if config_path:
        p = Path(config_path)
        if p.is_file():
            return str(p)
        logger.warning("Config file not found: %s", config_path)
        return None

    # 2. Scan directory, then walk up (e.g. scan_path is src/ inside the repo)
    if scan_path:
        scan_p = Path(scan_path)
        if scan_p.is_file():
            scan_p = scan_p.parent
        for directory in (scan_p, *scan_p.parents):
            candidate = directory / DEFAULT_CONFIG_FILENAME
            if candidate.is_file():
                return str(candidate)

    # 3. Current working directory
    cwd_candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    return None
