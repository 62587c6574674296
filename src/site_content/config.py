"""Configuration management for site-content."""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONTENT_DIR_NAME = "content"
SUPPORTED_DELIMITERS = ("+++", "---")


class ContentConfig(BaseSettings):
    """Configuration for reading a site's content directory."""

    content_dir: Path = Field(
        default_factory=lambda: Path.cwd() / CONTENT_DIR_NAME,
        description="Root directory holding the content files",
    )
    extensions: List[str] = Field(
        default_factory=lambda: [".md"],
        description="File suffixes treated as content records",
    )
    delimiter: str = Field(
        default="+++",
        description="Sentinel line fencing the front matter block",
    )
    ignore_patterns: List[str] = Field(
        default_factory=list,
        description="Extra gitignore-style patterns skipped during discovery",
    )
    log_level: str = Field(default="INFO", description="Log level for stderr output")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    model_config = SettingsConfigDict(
        env_prefix="SITE_CONTENT_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Lowercase suffixes and make sure each starts with a dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    @field_validator("delimiter")
    @classmethod
    def check_delimiter(cls, v: str) -> str:
        v = v.strip()
        if v not in SUPPORTED_DELIMITERS:
            raise ValueError(f"delimiter must be one of {', '.join(SUPPORTED_DELIMITERS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


def get_config(**overrides) -> ContentConfig:
    """Load config from env and .env, with explicit overrides taking precedence."""
    return ContentConfig(**{k: v for k, v in overrides.items() if v is not None})
