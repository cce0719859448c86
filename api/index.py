"""Vercel serverless entrypoint.

The project is installed from ``pyproject.toml``, so the app is imported
directly from the package.
"""

from foundation_mirror.api.asgi import app

__all__ = ["app"]
