"""ASGI entrypoint for the drinkr analytics API."""

from drinkr.api.app import create_app
from drinkr.containers import build_container

app = create_app(build_container())
