"""Command line interface for kumiko."""

from kumiko.cli.main import app

__all__ = ["app"]
