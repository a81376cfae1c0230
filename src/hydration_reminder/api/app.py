"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hydration_reminder.api.models import DrinkPayload, SettingsPayload
from hydration_reminder.app_logging import configure_logging
from hydration_reminder.containers import AppContainer
from hydration_reminder.domain.errors import InvalidConfigurationError
from hydration_reminder.domain.intake import ProgressSnapshot
from hydration_reminder.services.reminders import ReminderClock
from hydration_reminder.services.settings import normalize_settings


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(InvalidConfigurationError)
    async def invalid_configuration(
        request: Request, exc: InvalidConfigurationError
    ) -> JSONResponse:
        logger.info("Rejected settings: %s", exc)
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/schedule")
    async def schedule(request: Request) -> dict[str, object]:
        """Return today's slots, progress and notification state."""
        reminders = _reminders(request)
        summary = reminders.summary()
        return {
            "slots": [asdict(slot) for slot in summary.slots],
            "progress": asdict(summary.progress),
            "suggested_per_slot": summary.suggested_per_slot,
            "free_slots": summary.free_slots,
            "quick_amounts": summary.quick_amounts,
            "notifications": reminders.permission.value,
        }

    @app.put("/settings")
    async def update_settings(
        payload: SettingsPayload, request: Request
    ) -> dict[str, object]:
        """Replace the session settings."""
        reminders = _reminders(request)
        reminders.update_settings(normalize_settings(payload.to_input()))
        return {"status": "ok", "suggested_per_slot": reminders.suggested_per_slot()}

    @app.post("/intake/drink")
    async def add_drink(payload: DrinkPayload, request: Request) -> dict[str, int]:
        """Add or subtract an amount."""
        return _progress(_reminders(request).add_drink(payload.ml))

    @app.post("/intake/slot")
    async def drink_for_slot(request: Request) -> dict[str, int]:
        """Record one reminder's suggested amount."""
        return _progress(_reminders(request).drink_for_slot())

    @app.post("/intake/reset")
    async def reset(request: Request) -> dict[str, int]:
        """Clear today's intake."""
        return _progress(_reminders(request).reset())

    @app.post("/notifications/enable")
    async def enable_notifications(request: Request) -> dict[str, object]:
        """Request permission and start reminders when granted."""
        reminders = _reminders(request)
        state = await reminders.enable_notifications()
        return {"notifications": state.value, "running": reminders.running}

    @app.post("/notifications/disable")
    async def disable_notifications(request: Request) -> dict[str, object]:
        """Stop the reminder loop."""
        reminders = _reminders(request)
        reminders.stop()
        return {"notifications": reminders.permission.value, "running": False}

    return app


def _reminders(request: Request) -> ReminderClock:
    container: AppContainer = request.app.state.container
    return container.reminder_clock


def _progress(snapshot: ProgressSnapshot) -> dict[str, int]:
    return asdict(snapshot)
