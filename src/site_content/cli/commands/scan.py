"""Scan and show commands for site-content CLI."""

from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from site_content.cli.app import app
from site_content.cli.commands.command_utils import get_config, get_store
from site_content.file_utils import FileError
from site_content.markdown import ContentParser, ContentRecord
from site_content.store import ScanResult, sort_by_date

console = Console()


def display_records(result: ScanResult) -> None:
    """Show records as a table, newest first, followed by any failed files."""
    table = Table(title=f"{len(result.records)} content records")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Tags", style="magenta")
    table.add_column("Path", style="dim")

    for record in sort_by_date(result.records):
        table.add_row(
            escape(str(record.date or "-")),
            escape(str(record.title or "-")),
            escape(", ".join(record.tags)),
            escape(record.path),
        )
    console.print(table)

    if result.errors:
        console.print(f"[red]{len(result.errors)} files could not be parsed:[/red]")
        for path, error in sorted(result.errors.items()):
            console.print(f"  [yellow]{escape(path)}[/yellow]: {escape(error)}", highlight=False)


def display_record(record: ContentRecord) -> None:
    """Show one record's front matter and body size."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in record.metadata.items():
        text = ", ".join(map(str, value)) if isinstance(value, list) else str(value)
        table.add_row(escape(key), escape(text))

    table.add_row("", "")
    table.add_row("permalink", record.permalink)
    table.add_row("body", f"{len(record.body)} characters, {len(record.body.splitlines())} lines")
    console.print(Panel(table, title=escape(record.path), expand=False))


@app.command()
def scan(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(None, help="Content root (defaults to configured dir)"),
):
    """List every content record under the content root."""
    store = get_store(ctx, root)
    display_records(store.scan())


@app.command()
def show(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Content file, absolute or relative to the content root"),
):
    """Show the front matter of one content file."""
    config = get_config(ctx)
    parser = ContentParser(config.content_dir, delimiter=config.delimiter)
    try:
        record = parser.parse_file(path)
    except FileError as e:
        logger.debug(f"show failed for {path}: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    display_record(record)
