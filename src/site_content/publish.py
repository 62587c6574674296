"""Hand content records to an external static-site generator.

Rendering, templating and tag-index pages belong to the generator. This
module only turns records into a stream it can read.
"""

import json
from typing import Any, Dict, Iterable, Iterator, TextIO

from loguru import logger

from site_content.markdown import ContentRecord
from site_content.store import ContentStore, sort_by_date


def iter_records(store: ContentStore) -> Iterator[ContentRecord]:
    """Readable stream of records, failed files skipped."""
    return store.records()


def record_to_dict(record: ContentRecord) -> Dict[str, Any]:
    """JSON-safe representation of a record."""
    return {
        "path": record.path,
        "permalink": record.permalink,
        "metadata": record.metadata,
        "body": record.body,
    }


def write_manifest(records: Iterable[ContentRecord], out: TextIO) -> int:
    """
    Write records as JSON Lines, newest first.

    Args:
        records: Records to publish
        out: Writable text stream

    Returns:
        Number of records written
    """
    count = 0
    for record in sort_by_date(records):
        out.write(json.dumps(record_to_dict(record), ensure_ascii=False, default=str))
        out.write("\n")
        count += 1

    logger.debug(f"Wrote {count} records to manifest")
    return count
