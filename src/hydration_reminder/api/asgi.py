"""ASGI entrypoint for the hydration reminder API."""

from hydration_reminder.api.app import create_app
from hydration_reminder.containers import build_container

app = create_app(build_container())
