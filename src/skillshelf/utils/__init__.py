"""Utilities package."""

from skillshelf.utils.def_loader import (
    DefNotFoundError,
    InvalidDefError,
    InvalidFrontmatterError,
    count_lines,
    discover_definitions,
    parse_frontmatter,
    split_lines,
)
from skillshelf.utils.logging import setup_logging

__all__ = [
    "DefNotFoundError",
    "InvalidDefError",
    "InvalidFrontmatterError",
    "count_lines",
    "discover_definitions",
    "parse_frontmatter",
    "setup_logging",
    "split_lines",
]
