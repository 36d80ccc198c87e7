"""Skillshelf: tooling for Markdown skill corpora."""

__version__ = "0.1.0"
