"""Catalog CLI command."""

from pathlib import Path

import typer

from skillshelf.cli.formats import CatalogOutput
from skillshelf.core.catalog import build_catalog, render_catalog
from skillshelf.core.skill_loader import SkillLoader


def catalog_command(
    ctx: typer.Context,
    output: CatalogOutput = CatalogOutput.MARKDOWN,
    output_file: Path | None = None,
) -> None:
    """Render the discovery catalog to stdout or a file."""
    config = ctx.obj.get("config")
    entries = build_catalog(SkillLoader.from_config(config))
    rendered = render_catalog(entries, output.value)

    if output_file is None:
        typer.echo(rendered, nl=False)
        return

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(rendered, encoding="utf-8")
    typer.echo(f"Wrote {len(entries)} skill(s) to {output_file}", err=True)
