"""FastAPI application entry point."""

from grso_pos.application import create_app

app = create_app()

__all__ = ["app"]
