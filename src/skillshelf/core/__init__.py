"""Core skill corpus functionality."""

from .catalog import CatalogEntry, build_catalog, render_catalog
from .context import SharedContext
from .findings import Finding, LintReport, Severity
from .linter import Linter, UnknownRuleError
from .skill_loader import (
    ResourceInfo,
    ResourceNotFoundError,
    SkillDef,
    SkillLoader,
    SkillMetadata,
    SkillNotFoundError,
)

__all__ = [
    "CatalogEntry",
    "Finding",
    "LintReport",
    "Linter",
    "ResourceInfo",
    "ResourceNotFoundError",
    "Severity",
    "SharedContext",
    "SkillDef",
    "SkillLoader",
    "SkillMetadata",
    "SkillNotFoundError",
    "UnknownRuleError",
    "build_catalog",
    "render_catalog",
]
