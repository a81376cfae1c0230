"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

import pytest

from hydration_reminder.adapters.clock import Clock
from hydration_reminder.adapters.notifier import Notifier
from hydration_reminder.config import Settings
from hydration_reminder.containers import AppContainer
from hydration_reminder.domain.errors import CapabilityUnavailableError
from hydration_reminder.domain.reminders import PermissionResult
from hydration_reminder.services.reminders import ReminderClock
from hydration_reminder.services.settings import normalize_settings


@dataclass
class FakeTimer:
    """Timer registered with the fake clock."""

    delay_ms: int
    callback: Callable[[], None]
    repeating: bool
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeClock(Clock):
    """Clock with a settable time that records scheduled timers."""

    current: datetime = field(default_factory=lambda: datetime(2024, 5, 14, 9, 15, 20))
    timers: list[FakeTimer] = field(default_factory=list)

    def now(self) -> datetime:
        return self.current

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay_ms=delay_ms, callback=callback, repeating=False)
        self.timers.append(timer)
        return timer

    def schedule_every(self, interval_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay_ms=interval_ms, callback=callback, repeating=True)
        self.timers.append(timer)
        return timer

    def set(self, value: str) -> None:
        """Move to ``YYYY-MM-DD HH:MM`` on the wall clock."""
        self.current = datetime.strptime(value, "%Y-%m-%d %H:%M")

    def advance(self, minutes: int) -> None:
        self.current += timedelta(minutes=minutes)

    def active(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]


@dataclass
class FakeNotifier(Notifier):
    """Notifier that records notifications instead of showing them."""

    permission: PermissionResult = PermissionResult.GRANTED
    unavailable: bool = False
    fail_on_notify: bool = False
    sent: list[tuple[str, str]] = field(default_factory=list)
    permission_requests: int = 0

    async def request_permission(self) -> PermissionResult:
        self.permission_requests += 1
        if self.unavailable:
            raise CapabilityUnavailableError("no notifications here")
        return self.permission

    def notify(self, title: str, body: str) -> None:
        if self.fail_on_notify:
            raise CapabilityUnavailableError("notifications went away")
        self.sent.append((title, body))


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def reminder_clock(
    settings: Settings, fake_clock: FakeClock, notifier: FakeNotifier
) -> ReminderClock:
    return ReminderClock(
        settings=normalize_settings(settings.reminder_input()),
        clock=fake_clock,
        notifier=notifier,
    )


@pytest.fixture
def container(
    settings: Settings,
    fake_clock: FakeClock,
    notifier: FakeNotifier,
    reminder_clock: ReminderClock,
) -> AppContainer:
    async def close_resources() -> None:
        reminder_clock.stop()

    return AppContainer(
        settings=settings,
        clock=fake_clock,
        notifier=notifier,
        reminder_clock=reminder_clock,
        close_resources=close_resources,
    )
