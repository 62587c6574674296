"""Export command for site-content CLI."""

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from site_content.cli.app import app
from site_content.cli.commands.command_utils import get_store
from site_content.publish import write_manifest


@app.command()
def export(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(None, help="Content root (defaults to configured dir)"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the JSON Lines manifest here instead of stdout"
    ),
):
    """Write every record as JSON Lines for a site generator."""
    store = get_store(ctx, root)
    result = store.scan()

    if output:
        try:
            with output.open("w", encoding="utf-8") as f:
                count = write_manifest(result.records, f)
        except OSError as e:
            typer.echo(f"Error writing {output}: {e}", err=True)
            raise typer.Exit(1)
        logger.info(f"Exported {count} records to {output}")
    else:
        write_manifest(result.records, sys.stdout)

    if result.errors:
        typer.echo(f"Skipped {len(result.errors)} files with errors", err=True)
