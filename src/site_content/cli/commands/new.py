"""New command for site-content CLI."""

from datetime import datetime
from typing import List, Optional

import typer
from loguru import logger

from site_content.cli.app import app
from site_content.cli.commands.command_utils import get_config
from site_content.file_utils import FileWriteError, write_file_atomic
from site_content.markdown import dump_front_matter
from site_content.utils import slugify


def build_front_matter(
    title: str,
    tags: Optional[List[str]] = None,
    description: Optional[str] = None,
    draft: bool = False,
    now: Optional[datetime] = None,
) -> dict:
    """Metadata for a freshly created record."""
    now = now or datetime.now().astimezone()
    metadata = {
        "title": title,
        "date": now.isoformat(timespec="seconds"),
    }
    if tags:
        metadata["tags"] = list(tags)
    if description:
        metadata["description"] = description
    if draft:
        metadata["draft"] = True
    return metadata


@app.command()
def new(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the new post"),
    section: str = typer.Option("posts", "--section", "-s", help="Subdirectory under the content root"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag, may be repeated"),
    description: Optional[str] = typer.Option(None, "--description", help="Summary line"),
    draft: bool = typer.Option(False, "--draft", help="Mark the post as a draft"),
):
    """Create a content file with front matter filled in."""
    config = get_config(ctx)

    slug = slugify(title)
    if not slug:
        typer.echo(f"Cannot derive a file name from title {title!r}", err=True)
        raise typer.Exit(1)

    suffix = config.extensions[0] if config.extensions else ".md"
    path = config.content_dir / section / f"{slug}{suffix}"
    if path.exists():
        typer.echo(f"Refusing to overwrite existing file: {path}", err=True)
        raise typer.Exit(1)

    metadata = build_front_matter(title, tags=tag, description=description, draft=draft)
    try:
        write_file_atomic(path, dump_front_matter(metadata, delimiter=config.delimiter))
    except FileWriteError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger.info(f"Created {path}")
    typer.echo(str(path))
