"""Utility functions for site-content."""

import os
import re
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from unidecode import unidecode


def slugify(text: str) -> str:
    """Lowercase ASCII slug of a single name, dots and spaces become hyphens.

    Examples:
        >>> slugify("Node.js tips")
        'node-js-tips'
    """
    clean_text = re.sub(r"[^a-z0-9\-_]", "-", unidecode(text).lower())
    return re.sub(r"-+", "-", clean_text).strip("-")


def generate_permalink(file_path: Union[str, Path]) -> str:
    """Generate the published location for a content file path.

    The extension is dropped and every directory segment is slugified.

    Examples:
        >>> generate_permalink("posts/My Feature.md")
        'posts/my-feature'
        >>> generate_permalink("projects/NES (emulator).md")
        'projects/nes-emulator'
    """
    base = os.path.splitext(Path(file_path).as_posix())[0]
    return "/".join(slugify(segment) for segment in base.split("/"))


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Configure loguru sinks.

    Args:
        level: Minimum level for the stderr sink
        log_file: Optional file that receives debug output, rotated at 10 MB
    """
    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True)

    if log_file:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            enqueue=False,
        )

    logger.debug(f"Logging configured at {level}")
