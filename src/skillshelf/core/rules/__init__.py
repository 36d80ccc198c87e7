"""Lint rules for skill corpus conventions."""

from skillshelf.core.rules.base import Corpus, LintRule, SkillDir
from skillshelf.core.rules.registry import RuleRegistry

__all__ = ["Corpus", "LintRule", "RuleRegistry", "SkillDir"]
