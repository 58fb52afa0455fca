"""
File collector: walks a project directory and picks the files to send for analysis.

Version-control metadata and dependency/build directories are pruned from
the walk entirely. Files over the size ceiling are left out and counted.
"""

import fnmatch
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 100 * 1024  # 100 KB

DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({
    # version control
    ".git", ".hg", ".svn",
    # dependencies / virtualenvs
    "node_modules", "vendor", "bower_components", ".venv", "venv",
    # build output and tool caches
    "dist", "build", ".next", "target", "__pycache__",
    ".tox", ".mypy_cache", ".pytest_cache",
})

DEFAULT_EXTENSIONS: frozenset[str] = frozenset({
    ".py", ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs",
    ".go", ".rs", ".java", ".kt", ".scala", ".rb", ".php", ".cs",
    ".c", ".h", ".cpp", ".hpp", ".swift", ".m",
    ".sh", ".bash", ".ps1", ".sql",
    ".html", ".vue", ".svelte",
    ".json", ".yml", ".yaml", ".toml", ".xml", ".ini",
    ".tf", ".gradle",
})

# Source files that usually have no extension
DEFAULT_FILENAMES: frozenset[str] = frozenset({
    "Dockerfile", "Makefile", "Jenkinsfile", "Gemfile", "Procfile",
})


@dataclass
class CollectedFile:
    """One file selected for analysis."""
    path: str      # POSIX path relative to the collection root
    content: str


@dataclass
class CollectOptions:
    """Rules deciding which files are eligible."""
    exclude_dirs: frozenset[str] = DEFAULT_EXCLUDE_DIRS
    extensions: frozenset[str] = DEFAULT_EXTENSIONS  # empty = every file
    filenames: frozenset[str] = DEFAULT_FILENAMES
    exclude: list[str] = field(default_factory=list)  # glob patterns on the relative path
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


@dataclass
class CollectionResult:
    """Files picked by one collection pass."""
    root: str
    files: list[CollectedFile] = field(default_factory=list)
    skipped_files: int = 0  # over the size ceiling


def _is_eligible(rel_path: str, name: str, options: CollectOptions) -> bool:
    if options.extensions:
        ext = os.path.splitext(name)[1].lower()
        if ext not in options.extensions and name not in options.filenames:
            return False
    if any(fnmatch.fnmatch(rel_path, pat) for pat in options.exclude):
        logger.debug("Excluded by pattern: %s", rel_path)
        return False
    return True


def collect_files(root: str, options: Optional[CollectOptions] = None) -> CollectionResult:
    """
    Collect the source files under a directory.

    Args:
        root: Directory to walk.
        options: Inclusion rules; defaults are used when omitted.

    Returns:
        A CollectionResult with files sorted by relative path.

    Raises:
        FileNotFoundError: If root doesn't exist.
        NotADirectoryError: If root isn't a directory.
    """
    options = options or CollectOptions()
    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Path not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    logger.info("Collecting files under %s", root)
    t0 = time.monotonic()
    result = CollectionResult(root=str(root_path))

    for dirpath, dirnames, filenames in os.walk(root_path):
        # Prune in place so excluded trees are never entered
        dirnames[:] = [d for d in dirnames if d not in options.exclude_dirs]

        for name in filenames:
            full = os.path.join(dirpath, name)
            if os.path.islink(full) or not os.path.isfile(full):
                continue

            rel_path = Path(full).relative_to(root_path).as_posix()
            if not _is_eligible(rel_path, name, options):
                continue

            size = os.path.getsize(full)
            if size > options.max_file_size:
                logger.debug("Skipping %s (%d bytes > %d)", rel_path, size, options.max_file_size)
                result.skipped_files += 1
                continue

            with open(full, "rb") as f:
                content = f.read().decode("utf-8", errors="replace")
            result.files.append(CollectedFile(path=rel_path, content=content))

    result.files.sort(key=lambda cf: cf.path)
    elapsed_ms = (time.monotonic() - t0) * 1000
    logger.info(
        "Collected %d file(s), skipped %d (too large) in %.1fms",
        len(result.files), result.skipped_files, elapsed_ms,
    )
    return result
