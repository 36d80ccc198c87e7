"""Command line interface."""

from skillshelf.cli.main import app

__all__ = ["app"]
