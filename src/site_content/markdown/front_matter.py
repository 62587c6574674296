"""Split, decode and encode the front matter block of a content file.

A content file looks like::

    +++
    title = "Hugo"
    date = "2019-03-06T00:57:32+05:30"
    tags = ["go", "static-sites"]
    +++

    Markdown body...

The block is TOML when fenced by ``+++`` and YAML when fenced by ``---``.
Decoding goes through the python-frontmatter handlers, the sentinel scan is
done here so that an unterminated block is an error instead of being read as
plain text, and so that the body is returned without being stripped.
"""

from datetime import date, datetime, time
from typing import Any, Dict, Optional, Tuple

import dateparser
import tomli_w
import yaml
from frontmatter.default_handlers import BaseHandler, TOMLHandler, YAMLHandler

from site_content.file_utils import InvalidDate, MalformedRecord, UnterminatedMetadata
from site_content.markdown.schemas import RECOGNIZED_KEYS

DEFAULT_DELIMITER = "+++"


class ContentTOMLHandler(TOMLHandler):
    """TOML handler that writes with tomli_w.

    toml.dumps does not escape backslashes, so a backslash followed by "x"
    would read back as a reserved escape sequence.
    """

    def export(self, metadata: Dict[str, Any], **kwargs: Any) -> str:
        return tomli_w.dumps(metadata)


HANDLERS = {
    "+++": ContentTOMLHandler,
    "---": YAMLHandler,
}


def get_handler(delimiter: str = DEFAULT_DELIMITER) -> BaseHandler:
    """Return the python-frontmatter handler for a sentinel."""
    handler_cls = HANDLERS.get(delimiter)
    if handler_cls is None:
        raise ValueError(f"Unsupported front matter delimiter: {delimiter!r}")
    return handler_cls()


def _normalize_value(value: Any) -> Any:
    # Unquoted TOML/YAML dates decode to date objects, keep the raw string form
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, list):
        return [_normalize_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize_value(v) for k, v in value.items()}
    return value


def split_front_matter(
    text: str, delimiter: str = DEFAULT_DELIMITER, path: Optional[str] = None
) -> Tuple[str, str]:
    """
    Split raw file text into the front matter block and the body.

    Args:
        text: Raw file content
        delimiter: Sentinel line fencing the block
        path: File path used in error messages

    Returns:
        Tuple of (block text without sentinels, body)

    Raises:
        MalformedRecord: If the text does not open with the sentinel
        UnterminatedMetadata: If the closing sentinel is missing
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != delimiter:
        raise MalformedRecord(f"No front matter block (expected opening {delimiter!r})", path)

    for index in range(1, len(lines)):
        if lines[index].rstrip() == delimiter:
            block = "".join(lines[1:index])
            rest = lines[index + 1 :]
            break
    else:
        raise UnterminatedMetadata(f"Front matter opened with {delimiter!r} is never closed", path)

    # Blank separator line between block and body
    if rest and not rest[0].strip():
        rest = rest[1:]

    return block, "".join(rest)


def parse_front_matter(
    text: str, delimiter: str = DEFAULT_DELIMITER, path: Optional[str] = None
) -> Tuple[Dict[str, Any], str]:
    """
    Parse front matter from content.

    Recognized keys are mapped verbatim and unknown keys pass through
    unchanged. Dates are kept as strings; see parse_date for structured dates.

    Args:
        text: Raw file content
        delimiter: Sentinel line fencing the block
        path: File path used in error messages

    Returns:
        Tuple of (metadata dict, body)

    Raises:
        MalformedRecord: If the block is missing, cannot be decoded, or has
            tags that are neither a string nor a list
        UnterminatedMetadata: If the closing sentinel is missing
    """
    block, body = split_front_matter(text, delimiter, path)
    handler = get_handler(delimiter)

    try:
        metadata = handler.load(block)
    except (ValueError, yaml.YAMLError) as e:
        raise MalformedRecord(f"Invalid front matter: {e}", path) from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedRecord("Front matter must be a key/value table", path)

    tags = metadata.get("tags")
    if tags is not None and not isinstance(tags, (str, list)):
        raise MalformedRecord(f"tags must be a string or a list, not {type(tags).__name__}", path)

    return {str(k): _normalize_value(v) for k, v in metadata.items()}, body


def order_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """Recognized keys first, in their conventional order, then the rest."""
    ordered = {key: metadata[key] for key in RECOGNIZED_KEYS if key in metadata}
    ordered.update((k, v) for k, v in metadata.items() if k not in ordered)
    return ordered


def dump_front_matter(
    metadata: Dict[str, Any], body: str = "", delimiter: str = DEFAULT_DELIMITER
) -> str:
    """
    Serialize metadata and body back into the content file format.

    Args:
        metadata: Front matter key/value pairs
        body: Markdown body
        delimiter: Sentinel line fencing the block

    Returns:
        File text that parse_front_matter reads back to the same metadata
    """
    handler = get_handler(delimiter)
    ordered = order_metadata(metadata)

    if isinstance(handler, YAMLHandler):
        block = handler.export(ordered, sort_keys=False) if ordered else ""
    else:
        block = handler.export(ordered)
    block = block.rstrip("\n")

    parts = [delimiter, "\n"]
    if block:
        parts += [block, "\n"]
    parts += [delimiter, "\n"]
    if body:
        parts += ["\n", body]
    return "".join(parts)


def parse_date(value: Any, path: Optional[str] = None) -> datetime:
    """Parse a front matter date into a datetime.

    ISO-8601 is tried first, then dateparser for human friendly formats like:
    - 2024-01-15
    - Jan 15, 2024
    - 2024-01-15 10:00 AM

    Raises:
        InvalidDate: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            pass
        parsed = dateparser.parse(text)
        if parsed:
            return parsed
    raise InvalidDate(f"Invalid date: {value!r}", path)
