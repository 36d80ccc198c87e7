"""Lint CLI commands."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skillshelf.cli.formats import ReportOutput
from skillshelf.core.findings import LintReport, Severity
from skillshelf.core.linter import Linter
from skillshelf.utils.def_loader import DefNotFoundError

console = Console()

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
}


def print_report(report: LintReport) -> None:
    """Print findings grouped by file, then a one-line summary."""
    for path, findings in report.by_path().items():
        console.print(f"[bold]{escape(path)}[/bold]")
        for finding in findings:
            style = SEVERITY_STYLES[finding.severity]
            line = f"{finding.line}:" if finding.line is not None else ""
            console.print(
                f"  {line}[{style}]{finding.severity.value}[/{style}] "
                f"{escape(finding.message)} [dim]({finding.rule})[/dim]"
            )

    summary = (
        f"{report.skills_checked} skill(s), {report.files_checked} file(s) checked: "
        f"{report.error_count} error(s), {report.warning_count} warning(s)"
    )
    style = "red" if report.errors else "yellow" if report.warnings else "green"
    console.print(f"\n[{style}]{summary}[/{style}]")


def lint_command(
    ctx: typer.Context,
    skill_id: str | None = None,
    output: ReportOutput = ReportOutput.TEXT,
    strict: bool = False,
) -> None:
    """Lint the corpus (or one skill) and exit non-zero on failure."""
    config = ctx.obj.get("config")
    linter = Linter.from_config(config)

    if skill_id is None:
        report = linter.lint()
    else:
        try:
            report = linter.lint_skill(skill_id)
        except DefNotFoundError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)

    if output == ReportOutput.JSON:
        typer.echo(report.model_dump_json(indent=2))
    else:
        print_report(report)

    passed = report.ok_strict if strict else report.ok
    if not passed:
        raise typer.Exit(1)


def rules_command(ctx: typer.Context) -> None:
    """Print the rule table."""
    config = ctx.obj.get("config")
    linter = Linter.from_config(config)
    enabled = {rule.id for rule in linter.enabled_rules}
    overrides = config.lint.severity_overrides

    table = Table(title="Lint rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Enabled")
    table.add_column("Checks")

    for rule in linter.registry.list_all():
        severity = overrides.get(rule.id, rule.default_severity.value)
        table.add_row(
            rule.id,
            severity,
            "yes" if rule.id in enabled else "no",
            rule.description,
        )
    console.print(table)
