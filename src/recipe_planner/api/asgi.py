"""ASGI entrypoint for the recipe planner API."""

from recipe_planner.api.app import create_app
from recipe_planner.containers import build_container

app = create_app(build_container())
