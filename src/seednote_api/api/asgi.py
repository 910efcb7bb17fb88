"""ASGI entrypoint for the SeedNote API."""

from seednote_api.api.app import create_app
from seednote_api.containers import build_container

app = create_app(build_container())
