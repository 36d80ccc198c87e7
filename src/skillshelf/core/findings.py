"""Lint finding and report models."""

from collections import defaultdict
from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field


class Severity(str, Enum):
    """How bad a finding is. Errors fail `skillshelf lint`."""

    ERROR = "error"
    WARNING = "warning"


class Finding(BaseModel):
    """One convention violation."""

    model_config = ConfigDict(extra="forbid")

    rule: str
    severity: Severity
    path: str
    message: str
    line: int | None = None

    @property
    def location(self) -> str:
        return self.path if self.line is None else f"{self.path}:{self.line}"

    def sort_key(self) -> tuple[str, int, str]:
        return (self.path, self.line or 0, self.rule)


class LintReport(BaseModel):
    """Findings for one lint run over a corpus (or a single skill)."""

    root: str
    findings: list[Finding] = []
    skills_checked: int = 0
    files_checked: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return len(self.errors)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        """True when nothing would fail a normal run."""
        return not self.errors

    @property
    def ok_strict(self) -> bool:
        """True when there are no findings at all."""
        return not self.findings

    def by_path(self) -> dict[str, list[Finding]]:
        grouped: dict[str, list[Finding]] = defaultdict(list)
        for finding in self.findings:
            grouped[finding.path].append(finding)
        return dict(grouped)
