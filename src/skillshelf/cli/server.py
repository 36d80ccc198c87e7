"""Serve CLI command for the HTTP API."""

import logging

import typer
import uvicorn

from skillshelf.api import create_app
from skillshelf.core.context import SharedContext
from skillshelf.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def server_command(
    ctx: typer.Context, host: str | None = None, port: int | None = None
) -> None:
    """Start the read-only HTTP API."""
    config = ctx.obj.get("config")

    # Enable console logging for server mode
    setup_logging(config, console_output=True)

    host = host or config.api.host
    port = port or config.api.port

    typer.echo("Starting skillshelf server...")
    typer.echo(f"Skills path: {config.skills_path}")
    typer.echo(f"Listening on http://{host}:{port}")
    typer.echo("Press Ctrl+C to stop")

    context = SharedContext(config)
    app = create_app(context)
    try:
        uvicorn.run(app, host=host, port=port, log_level="info")
    except KeyboardInterrupt:
        typer.echo("\nServer stopped")
