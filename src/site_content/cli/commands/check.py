"""Check command for site-content CLI."""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from site_content.cli.app import app
from site_content.cli.commands.command_utils import get_store
from site_content.store import LintReport

console = Console()


def group_errors_by_directory(errors: Dict[str, str]) -> Dict[str, List[tuple[str, str]]]:
    """Group parse errors by the directory holding the file."""
    grouped = defaultdict(list)
    for path, error in errors.items():
        dir_name = Path(path).parent.as_posix()
        grouped["" if dir_name == "." else dir_name].append((path, error))
    return dict(grouped)


def display_report(report: LintReport) -> None:
    """Display lint findings as a tree."""
    tree = Tree("Content check")

    if not report.has_errors and report.total_warnings == 0:
        tree.add("[green]No problems found[/green]")
        console.print(Panel(tree, expand=False))
        return

    if report.errors:
        branch = tree.add(f"[red bold]Parse errors[/red bold] ({len(report.errors)})")
        for dir_name, dir_errors in sorted(group_errors_by_directory(report.errors).items()):
            dir_branch = branch
            if dir_name:
                dir_branch = branch.add(f"[bold blue]{escape(dir_name)}/[/bold blue]")
            for path, error in sorted(dir_errors):
                dir_branch.add(
                    Text.assemble(("└─ ", "dim"), (Path(path).name, "yellow"), ": ", (error, "red"))
                )

    if report.duplicate_locations:
        branch = tree.add(
            f"[red bold]Duplicate published locations[/red bold] ({len(report.duplicate_locations)})"
        )
        for duplicate in report.duplicate_locations:
            loc = branch.add(f"[bold]{duplicate.permalink}[/bold]")
            for path in duplicate.paths:
                loc.add(f"[yellow]{escape(path)}[/yellow]")

    if report.duplicate_titles:
        branch = tree.add(f"[yellow bold]Shared titles[/yellow bold] ({len(report.duplicate_titles)})")
        for title, paths in sorted(report.duplicate_titles.items()):
            title_branch = branch.add(Text(title, style="bold"))
            for path in paths:
                title_branch.add(f"[yellow]{escape(path)}[/yellow]")

    if report.identical_files:
        branch = tree.add(f"[yellow bold]Identical files[/yellow bold] ({len(report.identical_files)})")
        for checksum, paths in sorted(report.identical_files.items()):
            dup = branch.add(f"[dim]{checksum[:8]}[/dim]")
            for path in paths:
                dup.add(f"[yellow]{escape(path)}[/yellow]")

    if report.missing_fields:
        branch = tree.add(f"[yellow bold]Missing fields[/yellow bold] ({len(report.missing_fields)})")
        for path, fields in sorted(report.missing_fields.items()):
            branch.add(Text.assemble((path, "yellow"), ": ", ", ".join(fields)))

    console.print(Panel(tree, expand=False))


@app.command()
def check(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(None, help="Content root (defaults to configured dir)"),
):
    """Report parse errors, shared titles and colliding published locations."""
    store = get_store(ctx, root)
    report = store.lint()
    display_report(report)
    if report.has_errors:
        raise typer.Exit(1)
