"""ASGI entrypoint for the diet plan API."""

from dosha_diet.api.app import create_app
from dosha_diet.containers import build_container

app = create_app(build_container())
