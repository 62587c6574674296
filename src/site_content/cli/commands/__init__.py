"""CLI commands for site-content."""

from . import check, export, new, scan

__all__ = ["check", "export", "new", "scan"]
