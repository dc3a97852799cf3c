"""Discovery of declaration files from glob patterns."""

import glob
import logging
import os
from pathlib import Path

from ..config import get_config
from ..errors import NoFilesFoundError

logger = logging.getLogger(__name__)

# Default folders to exclude
DEFAULT_EXCLUDE_DIRS = {
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    ".next",
    ".nuxt",
    ".cache",
    "coverage",
    "bower_components",
}


def expand_brace_patterns(pattern: str) -> list[str]:
    """Expand brace patterns like {ts,tsx} into multiple patterns.

    Args:
        pattern: A glob pattern that may contain brace expansions

    Returns:
        List of expanded glob patterns

    Examples:
        "src/**/*.{ts,tsx}" -> ["src/**/*.ts", "src/**/*.tsx"]
        "src/{models,api}/*.ts" -> ["src/models/*.ts", "src/api/*.ts"]
        "src/**/*.ts" -> ["src/**/*.ts"]  # No braces, return as-is
    """
    open_index = pattern.find("{")
    close_index = pattern.find("}", open_index + 1)
    if open_index == -1 or close_index == -1:
        return [pattern]

    options = [opt.strip() for opt in pattern[open_index + 1 : close_index].split(",")]
    options = [opt for opt in options if opt]
    if not options:
        # Empty braces - treat as literal
        return [pattern]

    results = []
    for option in options:
        expanded = pattern[:open_index] + option + pattern[close_index + 1 :]
        results.extend(expand_brace_patterns(expanded))
    return results


def _glob_base(pattern: str) -> Path:
    """Leading part of a pattern that holds no wildcards."""
    literal_parts = []
    for part in Path(pattern).parts[:-1]:
        if any(ch in part for ch in "*?["):
            break
        literal_parts.append(part)
    return Path(*literal_parts) if literal_parts else Path()


def _should_exclude_path(path: Path, base: Path, exclude_dirs: set[str]) -> bool:
    """Check directories below the pattern base against the exclude list."""
    try:
        parts = path.relative_to(base).parts
    except ValueError:
        parts = path.parts
    return any(part in exclude_dirs for part in parts[:-1])


def get_files(patterns: str | list[str], project_root: str | None = None) -> list[str]:
    """
    Resolve glob patterns to an ordered list of files.

    Files are ordered by pattern, then by path within a pattern; a file matched
    by several patterns is listed once, at its first match.

    Args:
        patterns: One glob pattern or a list of them; `**` recurses
        project_root: Base for relative patterns, defaults to the configured root

    Returns:
        Absolute file paths

    Raises:
        NoFilesFoundError: if nothing matches
    """
    pattern_list = [patterns] if isinstance(patterns, str) else list(patterns)
    root = Path(project_root or get_config().project_root).resolve()

    files: list[str] = []
    seen: set[str] = set()
    for pattern in pattern_list:
        for expanded_pattern in expand_brace_patterns(pattern):
            if os.path.isabs(expanded_pattern):
                base = _glob_base(expanded_pattern).resolve()
                matches = glob.glob(expanded_pattern, recursive=True)
            else:
                base = (root / _glob_base(expanded_pattern)).resolve()
                matches = [str(root / match) for match in glob.glob(expanded_pattern, root_dir=root, recursive=True)]

            for match in sorted(matches):
                path = Path(match).resolve()
                if not path.is_file() or _should_exclude_path(path, base, DEFAULT_EXCLUDE_DIRS):
                    continue
                if str(path) not in seen:
                    seen.add(str(path))
                    files.append(str(path))

    if not files:
        raise NoFilesFoundError(f"No files found for {pattern_list}")

    logger.debug(f"Found {len(files)} files for {pattern_list}")
    return files
