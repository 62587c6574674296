"""Content record store: discovery, fail-soft parsing and lint checks."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from loguru import logger

from site_content.config import ContentConfig
from site_content.file_utils import DuplicateRecord, FileError, InvalidDate
from site_content.ignore_utils import load_ignore_patterns, should_ignore_path
from site_content.markdown import ContentParser, ContentRecord, parse_date


@dataclass
class ScanResult:
    """Records found under a content root, plus the files that failed.

    Attributes:
        records: Parsed records, sorted by path
        errors: Relative path -> error message for files that could not be parsed
        ignored: Number of candidate files skipped by ignore patterns
    """

    records: List[ContentRecord] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)
    ignored: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class LintReport:
    """Data quality findings across a batch of records.

    Attributes:
        errors: Files that failed to parse
        duplicate_titles: Title -> paths sharing it
        duplicate_locations: Published locations claimed by more than one file
        identical_files: Checksum -> paths with byte-identical content
        missing_fields: Path -> conventional fields it lacks
    """

    errors: Dict[str, str] = field(default_factory=dict)
    duplicate_titles: Dict[str, List[str]] = field(default_factory=dict)
    duplicate_locations: List[DuplicateRecord] = field(default_factory=list)
    identical_files: Dict[str, List[str]] = field(default_factory=dict)
    missing_fields: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        """Parse failures and location collisions break publishing."""
        return bool(self.errors or self.duplicate_locations)

    @property
    def total_warnings(self) -> int:
        return len(self.duplicate_titles) + len(self.identical_files) + len(self.missing_fields)


class ContentStore:
    """
    Reads content records from a directory tree.
    The filesystem is the only source of truth; nothing is cached.
    """

    def __init__(self, root: Union[Path, str], config: Optional[ContentConfig] = None):
        self.root = Path(root).resolve()
        self.config = config or ContentConfig(content_dir=self.root)
        self.parser = ContentParser(self.root, delimiter=self.config.delimiter)
        self.ignore_patterns = load_ignore_patterns(self.root, self.config.ignore_patterns)

    def is_content_file(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in self.config.extensions

    def discover(self) -> tuple[List[Path], int]:
        """
        Find candidate content files under the root.

        Returns:
            Tuple of (sorted content file paths, ignored count)
        """
        if not self.root.is_dir():
            logger.warning(f"Content directory does not exist: {self.root}")
            return [], 0

        files = []
        ignored = 0
        for path in sorted(self.root.rglob("*")):
            if not self.is_content_file(path):
                continue
            if should_ignore_path(path, self.root, self.ignore_patterns):
                logger.debug(f"Ignoring {path.relative_to(self.root).as_posix()}")
                ignored += 1
                continue
            files.append(path)

        return files, ignored

    def _iter_parsed(self, paths: Iterable[Path], result: ScanResult) -> Iterator[ContentRecord]:
        for path in paths:
            rel_path = self.parser.relative_path(path)
            try:
                yield self.parser.parse_file(path)
            except (FileError, OSError) as e:
                result.errors[rel_path] = str(e)
                logger.error(f"Failed to parse {rel_path}: {e}")

    def scan(self) -> ScanResult:
        """
        Parse every content file under the root.

        A file that fails to parse is reported in the result and the batch
        continues with the remaining files.
        """
        logger.debug(f"Scanning content directory: {self.root}")
        files, ignored = self.discover()

        result = ScanResult(ignored=ignored)
        result.records.extend(self._iter_parsed(files, result))

        logger.info(f"Found {len(result.records)} content records in {self.root}")
        if result.errors:
            logger.warning(f"Skipped {len(result.errors)} files with errors")
        return result

    def records(self) -> Iterator[ContentRecord]:
        """Stream records one at a time, logging and skipping failed files."""
        files, _ = self.discover()
        yield from self._iter_parsed(files, ScanResult())

    def get(self, path: Union[Path, str]) -> ContentRecord:
        """
        Parse a single record.

        Raises:
            RecordNotFound: If the file does not exist
            ParseError: If the file cannot be parsed
        """
        return self.parser.parse_file(path)

    def lint(self, result: Optional[ScanResult] = None) -> LintReport:
        """Run every data quality check over a scan."""
        result = result or self.scan()
        return LintReport(
            errors=dict(result.errors),
            duplicate_titles=find_duplicate_titles(result.records),
            duplicate_locations=find_duplicate_locations(result.records),
            identical_files=find_identical_files(result.records),
            missing_fields=find_missing_fields(result.records),
        )


def find_duplicate_titles(records: Iterable[ContentRecord]) -> Dict[str, List[str]]:
    """Titles shared by more than one record.

    Records stay separate and keyed by path; no version is picked as canonical.
    """
    by_title: Dict[str, List[str]] = defaultdict(list)
    for record in records:
        if record.title:
            by_title[str(record.title)].append(record.path)

    duplicates = {title: sorted(paths) for title, paths in by_title.items() if len(paths) > 1}
    for title, paths in sorted(duplicates.items()):
        logger.warning(f"Title {title!r} is shared by {', '.join(paths)}")
    return duplicates


def find_duplicate_locations(records: Iterable[ContentRecord]) -> List[DuplicateRecord]:
    """Files that would be published at the same location."""
    by_permalink: Dict[str, List[str]] = defaultdict(list)
    for record in records:
        by_permalink[record.permalink].append(record.path)

    duplicates = [
        DuplicateRecord(permalink, paths)
        for permalink, paths in sorted(by_permalink.items())
        if len(paths) > 1
    ]
    for duplicate in duplicates:
        logger.error(str(duplicate))
    return duplicates


def find_identical_files(records: Iterable[ContentRecord]) -> Dict[str, List[str]]:
    """Files with byte-identical content, keyed by checksum."""
    by_checksum: Dict[str, List[str]] = defaultdict(list)
    for record in records:
        if record.checksum:
            by_checksum[record.checksum].append(record.path)
    return {checksum: sorted(paths) for checksum, paths in by_checksum.items() if len(paths) > 1}


def find_missing_fields(records: Iterable[ContentRecord]) -> Dict[str, List[str]]:
    """Records lacking a title or date."""
    missing = {}
    for record in records:
        if record.missing_fields:
            missing[record.path] = record.missing_fields
    return missing


def _date_key(record: ContentRecord) -> Optional[datetime]:
    if record.date is None:
        return None
    try:
        return parse_date(record.date, record.path).astimezone()
    except (InvalidDate, ValueError, OverflowError):
        logger.debug(f"Unsortable date in {record.path}: {record.date!r}")
        return None


def sort_by_date(records: Iterable[ContentRecord], reverse: bool = True) -> List[ContentRecord]:
    """Chronological listing, newest first by default.

    Records without a usable date come last, ordered by path.
    """
    by_path = sorted(records, key=lambda r: r.path)
    dated = []
    undated = []
    for record in by_path:
        key = _date_key(record)
        if key is None:
            undated.append(record)
        else:
            dated.append((key, record))

    dated.sort(key=lambda item: item[0], reverse=reverse)
    return [record for _, record in dated] + undated


def group_by_tag(records: Iterable[ContentRecord]) -> Dict[str, List[ContentRecord]]:
    """Tag -> records carrying it, tags in alphabetical order."""
    groups: Dict[str, List[ContentRecord]] = defaultdict(list)
    for record in records:
        for tag in record.tags:
            groups[tag].append(record)
    return {tag: groups[tag] for tag in sorted(groups)}
