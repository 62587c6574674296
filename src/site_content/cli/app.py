from pathlib import Path
from typing import Optional

import typer

from site_content.config import get_config
from site_content.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import site_content

        typer.echo(f"site-content version: {site_content.__version__}")
        raise typer.Exit()


app = typer.Typer(name="site-content", no_args_is_help=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    content_dir: Optional[Path] = typer.Option(
        None,
        "--content-dir",
        "-d",
        help="Content root to read records from",
        envvar="SITE_CONTENT_CONTENT_DIR",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """site-content - read and check the content records of a static site."""
    config = get_config(content_dir=content_dir)
    setup_logging(level="DEBUG" if verbose else config.log_level, log_file=config.log_file)
    ctx.obj = config
