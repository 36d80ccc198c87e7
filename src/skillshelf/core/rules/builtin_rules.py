"""Built-in rules for the skill corpus conventions."""

import re
from pathlib import Path
from typing import Any, Iterable

from skillshelf.core.findings import Finding, Severity
from skillshelf.core.links import extract_links, resolve_link
from skillshelf.core.rules.base import Corpus, LintRule, SkillDir
from skillshelf.core.skill_loader import SKILL_FILENAME, is_markdown
from skillshelf.utils.def_loader import count_lines

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def _parsed(corpus: Corpus) -> Iterable[tuple[SkillDir, dict[str, Any]]]:
    """Skills whose frontmatter was read and parsed, with that frontmatter."""
    for skill in corpus.skills:
        if skill.frontmatter is not None:
            yield skill, skill.frontmatter


class MissingSkillFileRule(LintRule):
    id = "missing-skill-file"
    description = "Every skill directory contains a SKILL.md"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill in corpus.skills:
            if not skill.has_skill_file:
                yield self.finding(
                    corpus, skill.path, f"Skill directory has no {SKILL_FILENAME}"
                )


class FrontmatterRule(LintRule):
    id = "frontmatter"
    description = "SKILL.md opens with a YAML frontmatter mapping"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill in corpus.skills:
            if not skill.has_skill_file:
                continue
            if skill.read_error is not None:
                yield self.finding(
                    corpus, skill.skill_file, f"Cannot read file: {skill.read_error}"
                )
            elif not skill.has_frontmatter:
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    "Missing frontmatter: file must start with a '---' delimited YAML block",
                    line=1,
                )
            elif skill.frontmatter_error is not None:
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    f"Malformed frontmatter: {skill.frontmatter_error.reason}",
                    line=skill.frontmatter_error.line,
                )


class RequiredFieldRule(LintRule):
    id = "required-field"
    description = "Required frontmatter fields are non-empty strings"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill, frontmatter in _parsed(corpus):
            for name in corpus.lint.required_fields:
                value = frontmatter.get(name)
                if name not in frontmatter:
                    message = f"Missing required field '{name}'"
                elif value is None or (isinstance(value, str) and not value.strip()):
                    message = f"Field '{name}' is empty"
                elif not isinstance(value, str):
                    message = f"Field '{name}' must be a string, got {type(value).__name__}"
                else:
                    continue
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    message,
                    line=skill.field_line(name) or 1,
                )


class NameFormatRule(LintRule):
    id = "name-format"
    description = "name is a lowercase kebab-case slug"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        limit = corpus.lint.max_name_length
        for skill, frontmatter in _parsed(corpus):
            name = frontmatter.get("name")
            if not isinstance(name, str) or not name.strip():
                continue
            line = skill.field_line("name")
            if not SLUG_RE.match(name):
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    f"name '{name}' is not a lowercase kebab-case slug",
                    line=line,
                )
            if len(name) > limit:
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    f"name is {len(name)} characters (max {limit})",
                    line=line,
                )


class NameMismatchRule(LintRule):
    id = "name-mismatch"
    description = "name matches the skill directory"
    default_severity = Severity.WARNING

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill, frontmatter in _parsed(corpus):
            name = frontmatter.get("name")
            if isinstance(name, str) and name.strip() and name.strip() != skill.id:
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    f"name '{name.strip()}' does not match directory '{skill.id}'",
                    line=skill.field_line("name"),
                )


class DescriptionLengthRule(LintRule):
    id = "description-length"
    description = "description fits the discovery budget"
    default_severity = Severity.WARNING

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        limit = corpus.lint.max_description_length
        for skill, frontmatter in _parsed(corpus):
            description = frontmatter.get("description")
            if isinstance(description, str) and len(description.strip()) > limit:
                yield self.finding(
                    corpus,
                    skill.skill_file,
                    f"description is {len(description.strip())} characters (max {limit})",
                    line=skill.field_line("description"),
                )


class LineLimitRule(LintRule):
    id = "line-limit"
    description = "Markdown files stay within their tier's line ceiling"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for path in corpus.markdown_files:
            try:
                lines = count_lines(path.read_text(encoding="utf-8"))
            except UnicodeDecodeError:
                lines = count_lines(path.read_text(encoding="utf-8", errors="replace"))
            limit = corpus.line_limit(path)
            if lines > limit:
                yield self.finding(
                    corpus,
                    path,
                    f"{lines} lines exceeds the {limit}-line limit; "
                    "split it into an index and deep-dive documents",
                    line=limit + 1,
                )


class NestingDepthRule(LintRule):
    id = "nesting-depth"
    description = "Skills and their resource directories are one level deep"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill in corpus.skills:
            flagged: list[Path] = []
            for path in sorted(skill.path.rglob("*")):
                rel = path.relative_to(skill.path)
                if any(part.startswith(".") for part in rel.parts):
                    continue
                if any(path.is_relative_to(parent) for parent in flagged):
                    continue

                if path.is_dir() and len(rel.parts) >= 2:
                    flagged.append(path)
                    yield self.finding(
                        corpus,
                        path,
                        f"Directory nested too deep in skill '{skill.id}'; "
                        "resource directories must be flat",
                    )
                elif path.is_file() and path.name == SKILL_FILENAME and len(rel.parts) >= 2:
                    yield self.finding(
                        corpus,
                        path,
                        f"Nested skill inside '{skill.id}'; skills live directly under "
                        f"{corpus.relative(corpus.skills_path)}/",
                    )


class UnknownSubdirRule(LintRule):
    id = "unknown-subdir"
    description = "Skill subdirectories use the known resource names"
    default_severity = Severity.WARNING

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        allowed = corpus.lint.resource_dirs
        for skill in corpus.skills:
            for child in sorted(skill.path.iterdir()):
                if child.is_dir() and not child.name.startswith("."):
                    if child.name not in allowed:
                        yield self.finding(
                            corpus,
                            child,
                            f"Unknown subdirectory '{child.name}' "
                            f"(expected one of: {', '.join(allowed)})",
                        )


class BrokenLinkRule(LintRule):
    id = "broken-link"
    description = "Relative links in skill documents point at existing files"

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill in corpus.skills:
            for path in skill.files():
                if not is_markdown(path):
                    continue
                if path == skill.skill_file:
                    if skill.content is None:
                        continue
                    links = extract_links(skill.body, skill.body_line)
                else:
                    try:
                        links = extract_links(path.read_text(encoding="utf-8"))
                    except UnicodeDecodeError:
                        continue

                for link in links:
                    target = resolve_link(link.target, path, corpus.workspace)
                    if target is not None and not target.exists():
                        yield self.finding(
                            corpus,
                            path,
                            f"Broken link: '{link.target}' does not exist",
                            line=link.line,
                        )


class OrphanDocumentRule(LintRule):
    id = "orphan-document"
    description = "Tier 2 documents are linked from their SKILL.md"
    default_severity = Severity.WARNING

    def check(self, corpus: Corpus) -> Iterable[Finding]:
        for skill in corpus.skills:
            if skill.content is None:
                continue

            linked = []
            for link in extract_links(skill.body, skill.body_line):
                target = resolve_link(link.target, skill.skill_file, corpus.workspace)
                if target is not None:
                    linked.append(target)

            for path in skill.files():
                rel = path.relative_to(skill.path)
                if len(rel.parts) != 2 or not is_markdown(path):
                    continue
                resolved = path.resolve()
                if any(resolved == t or resolved.is_relative_to(t) for t in linked):
                    continue
                yield self.finding(
                    corpus,
                    path,
                    f"Document is not linked from {skill.id}/{SKILL_FILENAME}",
                )


BUILTIN_RULES: list[type[LintRule]] = [
    MissingSkillFileRule,
    FrontmatterRule,
    RequiredFieldRule,
    NameFormatRule,
    NameMismatchRule,
    DescriptionLengthRule,
    LineLimitRule,
    NestingDepthRule,
    UnknownSubdirRule,
    BrokenLinkRule,
    OrphanDocumentRule,
]
