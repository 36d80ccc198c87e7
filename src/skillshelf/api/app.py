"""FastAPI application factory."""

from fastapi import FastAPI

from skillshelf import __version__
from skillshelf.api.routers import catalog, lint, skills
from skillshelf.core.context import SharedContext


def create_app(context: SharedContext) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Skillshelf API",
        description="Read-only access to a skill corpus for AI assistants",
        version=__version__,
    )
    app.state.context = context

    app.include_router(skills.router, prefix="/skills", tags=["skills"])
    app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
    app.include_router(lint.router, prefix="/lint", tags=["lint"])

    return app
