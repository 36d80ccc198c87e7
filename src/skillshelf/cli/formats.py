"""Output format choices for CLI commands."""

from enum import Enum


class ReportOutput(str, Enum):
    TEXT = "text"
    JSON = "json"


class CatalogOutput(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"
    YAML = "yaml"
