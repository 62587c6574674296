"""Utilities for file operations."""

import hashlib
from pathlib import Path
from typing import Optional

from loguru import logger


class FileError(Exception):
    """Base exception for file operations."""

    pass


class FileWriteError(FileError):
    """Raised when file operations fail."""

    pass


class RecordNotFound(FileError):
    """Raised when a content file does not exist."""

    pass


class ParseError(FileError):
    """Raised when parsing file content fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MalformedRecord(ParseError):
    """Raised when a file has no parseable front matter block."""

    pass


class UnterminatedMetadata(MalformedRecord):
    """Raised when the opening sentinel has no matching closing sentinel."""

    pass


class InvalidDate(ParseError):
    """Raised when a date value cannot be parsed into a datetime."""

    pass


class DuplicateRecord(Exception):
    """Two or more files resolve to the same published location."""

    def __init__(self, permalink: str, paths: list[str]):
        self.permalink = permalink
        self.paths = sorted(paths)
        super().__init__(f"{permalink} is published by {', '.join(self.paths)}")


def compute_checksum(content: str) -> str:
    """
    Compute SHA-256 checksum of content.

    Args:
        content: Text content to hash

    Returns:
        SHA-256 hex digest
    """
    return hashlib.sha256(content.encode()).hexdigest()


def write_file_atomic(path: Path, content: str) -> None:
    """
    Write file with atomic operation using temporary file.

    Args:
        path: Target file path
        content: Content to write

    Raises:
        FileWriteError: If write operation fails
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory: {path.parent}: {e}")
        raise FileWriteError(f"Failed to create directory {path.parent}: {e}") from e

    temp_path = path.with_suffix(".tmp")
    try:
        temp_path.write_text(content, encoding="utf-8")
        temp_path.replace(path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        logger.error(f"Failed to write file: {path}: {e}")
        raise FileWriteError(f"Failed to write file {path}: {e}") from e
