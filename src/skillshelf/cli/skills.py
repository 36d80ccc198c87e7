"""Skill browsing CLI commands."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from skillshelf.core.skill_loader import ResourceNotFoundError, SkillLoader
from skillshelf.utils.def_loader import DefNotFoundError, InvalidDefError

console = Console()


def list_command(ctx: typer.Context) -> None:
    """List all valid skills."""
    config = ctx.obj.get("config")
    loader = SkillLoader.from_config(config)

    skills = [loader.load_skill(meta.id) for meta in loader.discover_skills()]
    if not skills:
        console.print(f"[yellow]No skills found in {config.skills_path}[/yellow]")
        return

    table = Table(title=f"Available Skills: {len(skills)}")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Lines", justify="right")
    table.add_column("Resources", justify="right")
    table.add_column("Description")

    for skill in skills:
        table.add_row(
            skill.id,
            escape(skill.name),
            str(skill.line_count),
            str(len(skill.resources)),
            escape(skill.description),
        )
    console.print(table)


def show_command(
    ctx: typer.Context, skill_id: str, resource: str | None = None
) -> None:
    """Show a skill, or one of its bundled files."""
    config = ctx.obj.get("config")
    loader = SkillLoader.from_config(config)

    try:
        if resource is not None:
            typer.echo(loader.read_resource(skill_id, resource), nl=False)
            return
        skill = loader.load_skill(skill_id)
    except (DefNotFoundError, InvalidDefError, ResourceNotFoundError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[bold]{escape(skill.name)}[/bold]\n{escape(skill.description)}",
            title=escape(skill.path),
            border_style="cyan",
        )
    )
    console.print(f"Lines: {skill.line_count}")
    if skill.resources:
        console.print("Resources:")
        for res in skill.resources:
            lines = f" ({res.line_count} lines)" if res.line_count is not None else ""
            console.print(f"  - {escape(res.path)}{lines}")
    console.print()
    typer.echo(skill.content)
