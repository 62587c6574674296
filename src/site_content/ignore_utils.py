"""Utilities for skipping non-content paths during discovery."""

import fnmatch
from pathlib import Path
from typing import Iterable, Optional, Set

from loguru import logger

# Directories and files that never hold content records
DEFAULT_IGNORE_PATTERNS = {
    ".git",
    ".hg",
    "node_modules",
    "__pycache__",
    ".DS_Store",
    "Thumbs.db",
    ".idea",
    ".vscode",
    ".obsidian",
    "public/",
    "resources/_gen/",
    "*.swp",
    "*~",
    ".#*",
}


def load_ignore_patterns(base_path: Path, extra: Optional[Iterable[str]] = None) -> Set[str]:
    """Collect default patterns, .gitignore patterns and configured extras.

    Args:
        base_path: Content root, searched for a .gitignore file
        extra: Additional patterns, usually from configuration

    Returns:
        Set of patterns to ignore
    """
    patterns = set(DEFAULT_IGNORE_PATTERNS)
    if extra:
        patterns.update(p.strip() for p in extra if p.strip())

    gitignore_file = base_path / ".gitignore"
    if gitignore_file.exists():
        try:
            with gitignore_file.open("r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    # Skip empty lines and comments
                    if line and not line.startswith("#"):
                        patterns.add(line)
        except OSError as e:
            logger.warning(f"Could not read {gitignore_file}, using default patterns: {e}")

    return patterns


def should_ignore_path(file_path: Path, base_path: Path, ignore_patterns: Set[str]) -> bool:
    """Check if a file path matches any ignore pattern.

    Args:
        file_path: The file path to check
        base_path: The content root for relative path calculation
        ignore_patterns: Set of patterns to match against

    Returns:
        True if the path should be ignored
    """
    try:
        relative_path = file_path.relative_to(base_path)
    except ValueError:
        return False

    relative_posix = relative_path.as_posix()
    parts = relative_path.parts

    for pattern in ignore_patterns:
        # Root relative pattern
        if pattern.startswith("/"):
            root_pattern = pattern[1:]
            if root_pattern.endswith("/"):
                if parts and parts[0] == root_pattern[:-1]:
                    return True
            elif fnmatch.fnmatch(relative_posix, root_pattern):
                return True
            continue

        # Directory pattern, matches at any depth
        if pattern.endswith("/"):
            if pattern[:-1] in parts[:-1]:
                return True
            continue

        if pattern in parts:
            return True

        if fnmatch.fnmatch(relative_posix, pattern) or fnmatch.fnmatch(file_path.name, pattern):
            return True

    return False
