"""Discovery catalog: what an assistant sees before it loads any skill."""

import json
from typing import Literal

import yaml
from pydantic import BaseModel

from skillshelf.core.skill_loader import SkillLoader

CatalogFormat = Literal["markdown", "json", "yaml"]
CATALOG_FORMATS: tuple[str, ...] = ("markdown", "json", "yaml")


class CatalogEntry(BaseModel):
    id: str
    name: str
    description: str
    path: str


def build_catalog(loader: SkillLoader) -> list[CatalogEntry]:
    """One entry per valid skill, in directory order."""
    return [
        CatalogEntry(
            id=meta.id,
            name=meta.name,
            description=meta.description,
            path=meta.path,
        )
        for meta in loader.discover_skills()
    ]


def render_catalog(entries: list[CatalogEntry], fmt: str = "markdown") -> str:
    """
    Render the catalog for loading into an assistant's context.

    Args:
        entries: Catalog entries
        fmt: "markdown", "json" or "yaml"

    Raises:
        ValueError: If fmt is not a known format
    """
    if fmt == "markdown":
        if not entries:
            return "# Available skills\n\n_No skills found._\n"
        lines = ["# Available skills", ""]
        for entry in entries:
            description = " ".join(entry.description.split())
            lines.append(f"- **{entry.name}** (`{entry.path}`): {description}")
        return "\n".join(lines) + "\n"

    data = [entry.model_dump() for entry in entries]
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    raise ValueError(
        f"Unknown catalog format: {fmt} (expected one of: {', '.join(CATALOG_FORMATS)})"
    )
