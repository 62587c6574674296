"""site-content - content records for a static site."""

__version__ = "0.1.0"
