"""ASGI entrypoint for the foundation mirror API."""

from foundation_mirror.api.app import create_app
from foundation_mirror.containers import build_container

app = create_app(build_container())
