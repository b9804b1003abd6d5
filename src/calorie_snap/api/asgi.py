"""ASGI entrypoint for the CalorieSnap API."""

from calorie_snap.api.app import create_app
from calorie_snap.containers import build_container

app = create_app(build_container())
