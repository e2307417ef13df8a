"""ASGI entrypoint for the GigFlow API."""

from gigflow.api.app import create_app
from gigflow.containers import build_container

app = create_app(build_container())
