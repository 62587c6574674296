"""Base package for content file parsing."""

from site_content.file_utils import InvalidDate, MalformedRecord, ParseError, UnterminatedMetadata
from site_content.markdown.front_matter import (
    dump_front_matter,
    parse_date,
    parse_front_matter,
)
from site_content.markdown.record_parser import ContentParser
from site_content.markdown.schemas import RECOGNIZED_KEYS, ContentRecord

__all__ = [
    "ContentParser",
    "ContentRecord",
    "InvalidDate",
    "MalformedRecord",
    "ParseError",
    "RECOGNIZED_KEYS",
    "UnterminatedMetadata",
    "dump_front_matter",
    "parse_date",
    "parse_front_matter",
]
