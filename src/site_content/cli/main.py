"""Main CLI entry point for site-content."""  # pragma: no cover

from site_content.cli.app import app  # pragma: no cover

# Register commands
from site_content.cli.commands import check, export, new, scan  # pragma: no cover

__all__ = ["app", "check", "export", "new", "scan"]  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
