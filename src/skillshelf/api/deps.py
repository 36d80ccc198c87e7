"""Request dependencies shared by the skillshelf routers."""

from fastapi import Request

from skillshelf.core.context import SharedContext


def get_context(request: Request) -> SharedContext:
    """The SharedContext create_app stored for this corpus.

    Routers reach the skill loader and linter through it, so every request
    sees the workspace the server was started with.
    """
    return request.app.state.context
