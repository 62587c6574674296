"""Parser for content files into ContentRecord objects."""

from pathlib import Path
from typing import Union

from loguru import logger

from site_content.file_utils import ParseError, RecordNotFound, compute_checksum
from site_content.markdown.front_matter import DEFAULT_DELIMITER, parse_front_matter
from site_content.markdown.schemas import ContentRecord


class ContentParser:
    """Parser for content files under a content root."""

    def __init__(self, base_path: Path, delimiter: str = DEFAULT_DELIMITER):
        """Initialize parser with base path for relative record paths."""
        self.base_path = Path(base_path).resolve()
        self.delimiter = delimiter

    def get_file_path(self, path: Union[Path, str]) -> Path:
        """Get absolute path for a file using the content root."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.base_path / path

    def relative_path(self, absolute_path: Path) -> str:
        """Record identifier: POSIX path relative to the content root."""
        try:
            return absolute_path.resolve().relative_to(self.base_path).as_posix()
        except ValueError:
            return absolute_path.as_posix()

    def parse_file(self, path: Union[Path, str], encoding: str = "utf-8") -> ContentRecord:
        """
        Parse a content file.

        Args:
            path: Absolute path, or path relative to the content root
            encoding: File encoding to use

        Returns:
            Parsed ContentRecord

        Raises:
            RecordNotFound: If the file does not exist
            ParseError: If the file cannot be decoded or has no valid front matter
        """
        absolute_path = self.get_file_path(path)
        rel_path = self.relative_path(absolute_path)

        if not absolute_path.is_file():
            raise RecordNotFound(f"File does not exist: {rel_path}")

        try:
            file_content = absolute_path.read_text(encoding=encoding)
        except UnicodeError as e:
            raise ParseError(f"Failed to decode as {encoding}: {e}", rel_path) from e

        return self.parse_content_str(file_content, rel_path)

    def parse_content_str(self, content: str, path: str) -> ContentRecord:
        """
        Parse raw file text into a ContentRecord keyed by path.

        Raises:
            MalformedRecord: If there is no parseable front matter block
            UnterminatedMetadata: If the closing sentinel is missing
        """
        metadata, body = parse_front_matter(content, delimiter=self.delimiter, path=path)
        logger.debug(f"Parsed {path}: {len(metadata)} metadata keys, {len(body)} body chars")
        return ContentRecord(
            path=path,
            metadata=metadata,
            body=body,
            checksum=compute_checksum(content),
        )
