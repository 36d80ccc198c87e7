"""HTTP API for serving the skill catalog."""

from skillshelf.api.app import create_app

__all__ = ["create_app"]
