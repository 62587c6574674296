"""Schema models for content files."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from site_content.utils import generate_permalink

# Keys the site generator understands. Everything else passes through.
RECOGNIZED_KEYS = ("title", "date", "tags", "description")


class ContentRecord(BaseModel):
    """One content file: front matter metadata plus the raw markdown body."""

    path: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    body: str = ""
    checksum: Optional[str] = None

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get("title")

    @property
    def date(self) -> Optional[str]:
        return self.metadata.get("date")

    @property
    def description(self) -> Optional[str]:
        return self.metadata.get("description")

    @property
    def tags(self) -> List[str]:
        """Tags as a list, empty when the record has none."""
        tags = self.metadata.get("tags")
        if tags is None:
            return []
        if not isinstance(tags, (list, tuple)):
            return [str(tags)]
        return [str(t) for t in tags]

    @property
    def permalink(self) -> str:
        """Published location derived from the file path."""
        return generate_permalink(self.path)

    @property
    def missing_fields(self) -> List[str]:
        """Conventional fields (title, date) that are absent or empty."""
        return [key for key in ("title", "date") if not self.metadata.get(key)]
