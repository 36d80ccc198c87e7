"""Run lint rules over a skill corpus."""

import logging
from typing import TYPE_CHECKING

from skillshelf.core.findings import Finding, LintReport, Severity
from skillshelf.core.rules import Corpus, RuleRegistry
from skillshelf.utils.def_loader import DefNotFoundError

if TYPE_CHECKING:
    from skillshelf.utils.config import Config

logger = logging.getLogger(__name__)

MISSING_ROOT_RULE = "missing-skills-root"


class UnknownRuleError(ValueError):
    """Config names a rule id that isn't registered."""

    def __init__(self, rule_ids: list[str], known: list[str]):
        super().__init__(
            f"Unknown lint rule(s): {', '.join(rule_ids)} "
            f"(known: {', '.join(known)})"
        )
        self.rule_ids = rule_ids


class Linter:
    """Check a corpus against the registered rules."""

    @staticmethod
    def from_config(config: "Config") -> "Linter":
        """Create Linter with the built-in rules."""
        return Linter(config)

    def __init__(self, config: "Config", registry: RuleRegistry | None = None):
        self.config = config
        self.registry = registry or RuleRegistry.with_builtins()

        lint = config.lint
        unknown = [
            rule_id
            for rule_id in [*lint.disabled_rules, *lint.severity_overrides]
            if rule_id not in self.registry
        ]
        if unknown:
            raise UnknownRuleError(sorted(set(unknown)), self.registry.ids())

    @property
    def enabled_rules(self):
        disabled = set(self.config.lint.disabled_rules)
        return [r for r in self.registry.list_all() if r.id not in disabled]

    def lint(self) -> LintReport:
        """Lint the whole corpus."""
        return self._run(only=None)

    def lint_skill(self, skill_id: str) -> LintReport:
        """
        Lint a single skill directory.

        Raises:
            DefNotFoundError: If there is no such directory under the skills root
        """
        skill_dir = self.config.skills_path / skill_id
        if "/" in skill_id or skill_id.startswith(".") or not skill_dir.is_dir():
            raise DefNotFoundError("skill", skill_id)
        return self._run(only=skill_id)

    def _run(self, only: str | None) -> LintReport:
        config = self.config
        corpus = Corpus.scan(config.workspace, config.skills_path, config.lint, only)
        report = LintReport(
            root=corpus.relative(config.skills_path),
            skills_checked=len(corpus.skills),
            files_checked=len(corpus.markdown_files),
        )

        if not config.skills_path.is_dir():
            logger.warning(f"Skills directory not found: {config.skills_path}")
            report.findings.append(
                Finding(
                    rule=MISSING_ROOT_RULE,
                    severity=Severity.ERROR,
                    path=report.root,
                    message="Skills directory does not exist",
                )
            )
            return report

        overrides = config.lint.severity_overrides
        findings: list[Finding] = []
        for rule in self.enabled_rules:
            try:
                rule_findings = list(rule.check(corpus))
            except OSError as e:
                logger.warning(f"Rule '{rule.id}' could not read the corpus: {e}")
                rule_findings = [
                    rule.finding(corpus, config.skills_path, f"Rule failed: {e}")
                ]

            for finding in rule_findings:
                if finding.rule in overrides:
                    finding.severity = Severity(overrides[finding.rule])
                findings.append(finding)
            logger.debug(f"Rule '{rule.id}': {len(rule_findings)} finding(s)")

        report.findings = sorted(findings, key=Finding.sort_key)
        logger.info(
            f"Linted {report.skills_checked} skill(s), {report.files_checked} file(s): "
            f"{report.error_count} error(s), {report.warning_count} warning(s)"
        )
        return report
