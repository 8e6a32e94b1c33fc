"""ASGI entrypoint for the nutrition core API."""

from nutrition_core.api.app import create_app
from nutrition_core.containers import build_container

app = create_app(build_container())
