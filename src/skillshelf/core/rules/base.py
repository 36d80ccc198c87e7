"""Base classes for lint rules and the corpus snapshot they inspect."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from skillshelf.core.findings import Finding, Severity
from skillshelf.core.skill_loader import SKILL_FILENAME, is_markdown
from skillshelf.utils.config import LintConfig
from skillshelf.utils.def_loader import (
    InvalidFrontmatterError,
    body_start_line,
    parse_frontmatter,
    split_frontmatter,
    split_lines,
)

logger = logging.getLogger(__name__)


def _visible(path: Path, base: Path) -> bool:
    return not any(part.startswith(".") for part in path.relative_to(base).parts)


@dataclass
class SkillDir:
    """One directory directly under the skills root."""

    id: str
    path: Path
    content: str | None = None
    read_error: str | None = None
    has_frontmatter: bool = False
    frontmatter: dict[str, Any] | None = None
    frontmatter_error: InvalidFrontmatterError | None = None
    frontmatter_text: str = ""
    body: str = ""
    body_line: int = 1

    @property
    def skill_file(self) -> Path:
        return self.path / SKILL_FILENAME

    @property
    def has_skill_file(self) -> bool:
        return self.skill_file.is_file()

    @classmethod
    def scan(cls, path: Path) -> "SkillDir":
        skill = cls(id=path.name, path=path)
        if not skill.has_skill_file:
            return skill

        try:
            skill.content = skill.skill_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read {skill.skill_file}: {e}")
            skill.read_error = str(e)
            return skill

        frontmatter_text, body = split_frontmatter(skill.content)
        skill.has_frontmatter = frontmatter_text is not None
        skill.frontmatter_text = frontmatter_text or ""
        skill.body = body
        skill.body_line = body_start_line(skill.content)

        if skill.has_frontmatter:
            try:
                skill.frontmatter, _ = parse_frontmatter(skill.content)
            except InvalidFrontmatterError as e:
                skill.frontmatter_error = e
        return skill

    def field_line(self, name: str) -> int | None:
        """Line of a top-level frontmatter key, if it is written there."""
        for offset, line in enumerate(split_lines(self.frontmatter_text)):
            if line.startswith(f"{name}:"):
                return offset + 2
        return None

    def files(self) -> list[Path]:
        """Every visible file inside the skill directory."""
        return [
            p
            for p in sorted(self.path.rglob("*"))
            if p.is_file() and _visible(p, self.path)
        ]


@dataclass
class Corpus:
    """Filesystem snapshot of a skill corpus, shared by all rules in a run."""

    workspace: Path
    skills_path: Path
    lint: LintConfig
    skills: list[SkillDir] = field(default_factory=list)
    markdown_files: list[Path] = field(default_factory=list)

    @classmethod
    def scan(
        cls,
        workspace: Path,
        skills_path: Path,
        lint: LintConfig,
        only: str | None = None,
    ) -> "Corpus":
        """
        Read the corpus from disk.

        Args:
            workspace: Repository root; finding paths are relative to it
            skills_path: Directory holding one folder per skill
            lint: Conventions to check
            only: Restrict the snapshot to a single skill directory
        """
        corpus = cls(workspace=workspace, skills_path=skills_path, lint=lint)
        if not skills_path.is_dir():
            return corpus

        for child in sorted(skills_path.iterdir()):
            if child.name.startswith("."):
                continue
            if only is not None and child.name != only:
                continue
            if child.is_dir():
                corpus.skills.append(SkillDir.scan(child))
            elif only is None and child.is_file() and is_markdown(child):
                corpus.markdown_files.append(child)

        for skill in corpus.skills:
            corpus.markdown_files.extend(p for p in skill.files() if is_markdown(p))

        logger.debug(
            f"Scanned {len(corpus.skills)} skill dir(s), "
            f"{len(corpus.markdown_files)} markdown file(s) under {skills_path}"
        )
        return corpus

    def relative(self, path: Path) -> str:
        """Path as shown in findings."""
        try:
            return path.relative_to(self.workspace).as_posix()
        except ValueError:
            return path.as_posix()

    def skill_for(self, path: Path) -> SkillDir | None:
        for skill in self.skills:
            if path.is_relative_to(skill.path):
                return skill
        return None

    def line_limit(self, path: Path) -> int:
        """Tier 1 limit for SKILL.md, Tier 2 limit inside resource dirs."""
        skill = self.skill_for(path)
        if skill is None:
            return self.lint.max_lines

        rel = path.relative_to(skill.path)
        if rel.parts == (SKILL_FILENAME,):
            return self.lint.skill_line_limit
        if len(rel.parts) > 1:
            return self.lint.reference_line_limit
        return self.lint.max_lines


class LintRule(ABC):
    """Base class for lint rules."""

    id: str
    description: str = ""
    default_severity: Severity = Severity.ERROR

    @abstractmethod
    def check(self, corpus: Corpus) -> Iterable[Finding]:
        """Yield findings for every violation in the corpus."""

    def finding(
        self,
        corpus: Corpus,
        path: Path,
        message: str,
        line: int | None = None,
    ) -> Finding:
        """Build a finding attributed to this rule."""
        return Finding(
            rule=self.id,
            severity=self.default_severity,
            path=corpus.relative(path),
            message=message,
            line=line,
        )
