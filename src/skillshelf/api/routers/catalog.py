"""Discovery catalog router."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from skillshelf.api.deps import get_context
from skillshelf.core.catalog import CatalogFormat, build_catalog, render_catalog
from skillshelf.core.context import SharedContext

router = APIRouter()

MEDIA_TYPES = {
    "markdown": "text/markdown",
    "json": "application/json",
    "yaml": "application/yaml",
}


@router.get("", response_class=PlainTextResponse)
def get_catalog(
    format: CatalogFormat = "markdown", ctx: SharedContext = Depends(get_context)
) -> PlainTextResponse:
    """Render the skill catalog."""
    entries = build_catalog(ctx.skill_loader)
    return PlainTextResponse(
        render_catalog(entries, format), media_type=MEDIA_TYPES[format]
    )
