"""CLI interface for skillshelf using Typer."""

from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from skillshelf.cli.catalog import catalog_command
from skillshelf.cli.formats import CatalogOutput, ReportOutput
from skillshelf.cli.lint import lint_command, rules_command
from skillshelf.cli.server import server_command
from skillshelf.cli.skills import list_command, show_command
from skillshelf.core.linter import Linter, UnknownRuleError
from skillshelf.utils.config import Config
from skillshelf.utils.logging import setup_logging

app = typer.Typer(
    name="skillshelf",
    help="Skillshelf: lint, browse and serve a Markdown skill corpus",
    no_args_is_help=True,
    add_completion=True,
)

console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    workspace: Annotated[
        Path,
        typer.Option(
            "--workspace",
            "-w",
            help="Path to the corpus repository (contains skills/)",
        ),
    ] = Path("."),
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """
    Skillshelf: lint, browse and serve a Markdown skill corpus.

    Configuration is read from skillshelf.yaml (and skillshelf.local.yaml)
    in the workspace. Both are optional.
    """
    if ctx.resilient_parsing:
        return

    try:
        cfg = Config.load(workspace.resolve())
        # Fail on bad rule ids before any command runs
        Linter.from_config(cfg)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except (ValidationError, yaml.YAMLError, UnknownRuleError, ValueError) as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(cfg, console_output=verbose, verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@app.command()
def lint(
    ctx: typer.Context,
    skill_id: Annotated[
        str | None, typer.Argument(help="Lint only this skill directory")
    ] = None,
    output: Annotated[
        ReportOutput, typer.Option("--format", "-f", help="Report format")
    ] = ReportOutput.TEXT,
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on warnings too")
    ] = False,
) -> None:
    """Check the corpus against its structural conventions."""
    lint_command(ctx, skill_id=skill_id, output=output, strict=strict)


@app.command()
def rules(ctx: typer.Context) -> None:
    """List lint rules and whether they are enabled."""
    rules_command(ctx)


@app.command("list")
def list_skills(ctx: typer.Context) -> None:
    """List all valid skills."""
    list_command(ctx)


@app.command()
def show(
    ctx: typer.Context,
    skill_id: Annotated[str, typer.Argument(help="Skill directory name")],
    resource: Annotated[
        str | None,
        typer.Option(
            "--resource", "-r", help="Print a bundled file, e.g. references/api.md"
        ),
    ] = None,
) -> None:
    """Show a skill's metadata and content."""
    show_command(ctx, skill_id=skill_id, resource=resource)


@app.command()
def catalog(
    ctx: typer.Context,
    output: Annotated[
        CatalogOutput, typer.Option("--format", "-f", help="Catalog format")
    ] = CatalogOutput.MARKDOWN,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to a file instead of stdout"),
    ] = None,
) -> None:
    """Print the discovery catalog (name and description of every skill)."""
    catalog_command(ctx, output=output, output_file=output_file)


@app.command("serve")
def serve(
    ctx: typer.Context,
    host: Annotated[
        str | None, typer.Option("--host", help="Bind address (overrides config)")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", help="Port (overrides config)")
    ] = None,
) -> None:
    """Serve the corpus over a read-only HTTP API."""
    server_command(ctx, host=host, port=port)


if __name__ == "__main__":
    app()
