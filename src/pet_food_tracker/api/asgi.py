"""ASGI entrypoint for the pet food tracker API."""

from pet_food_tracker.api.app import create_app
from pet_food_tracker.containers import build_container

app = create_app(build_container())
