"""FastAPI dashboard."""

from patchboard_cli.web.app import create_app

__all__ = ["create_app"]
