"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import Optional

import typer

from site_content.config import ContentConfig
from site_content.store import ContentStore


def get_config(ctx: typer.Context) -> ContentConfig:
    """Config loaded by the app callback."""
    if isinstance(ctx.obj, ContentConfig):
        return ctx.obj
    return ContentConfig()  # pragma: no cover


def get_store(ctx: typer.Context, root: Optional[Path] = None) -> ContentStore:
    """Build a store for ROOT, falling back to the configured content dir."""
    config = get_config(ctx)
    content_root = root or config.content_dir
    if not content_root.is_dir():
        typer.echo(f"Content directory does not exist: {content_root}", err=True)
        raise typer.Exit(1)
    return ContentStore(content_root, config)
