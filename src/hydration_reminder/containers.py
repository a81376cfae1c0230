"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from hydration_reminder.adapters.clock import AsyncioClock, Clock
from hydration_reminder.adapters.notifier import HttpxPushNotifier, Notifier
from hydration_reminder.config import Settings
from hydration_reminder.services.reminders import ReminderClock
from hydration_reminder.services.settings import normalize_settings


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    notifier: Notifier | None
    reminder_clock: ReminderClock
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Without a configured ``notify_url`` the host has no notification
    capability and enabling reminders ends in the denied state.
    """
    resolved_settings = settings or Settings()
    clock = AsyncioClock()
    notifier: HttpxPushNotifier | None = None
    if resolved_settings.notify_url:
        notifier = HttpxPushNotifier.create(
            resolved_settings.notify_url,
            timeout_seconds=resolved_settings.notify_timeout_seconds,
        )
    reminder_clock = ReminderClock(
        settings=normalize_settings(resolved_settings.reminder_input()),
        clock=clock,
        notifier=notifier,
    )

    async def close_resources() -> None:
        reminder_clock.stop()
        if notifier is not None:
            await notifier.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        notifier=notifier,
        reminder_clock=reminder_clock,
        close_resources=close_resources,
    )
