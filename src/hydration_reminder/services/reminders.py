"""Reminder evaluation loop."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from hydration_reminder.adapters.clock import Clock, TimerHandle
from hydration_reminder.adapters.notifier import Notifier
from hydration_reminder.domain.errors import CapabilityUnavailableError
from hydration_reminder.domain.intake import ProgressSnapshot
from hydration_reminder.domain.reminders import (
    PermissionResult,
    PermissionState,
    ReminderSettings,
    SlotKey,
)
from hydration_reminder.domain.schedule import RenderedSlot, ScheduleSlot
from hydration_reminder.services.intake import (
    IntakeTracker,
    quick_amounts,
    suggested_per_slot,
)
from hydration_reminder.services.meals import annotate, windows_for_days
from hydration_reminder.services.schedule import build_schedule

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 60_000
NOTIFICATION_TITLE = "Time to drink water"


@dataclass(frozen=True)
class DaySummary:
    """Everything a client needs to draw today's view."""

    slots: list[RenderedSlot]
    progress: ProgressSnapshot
    suggested_per_slot: int
    free_slots: int
    quick_amounts: list[int]


@dataclass
class ReminderClock:
    """Owns one reminder session: schedule, intake and notification memory.

    All methods are expected to run on a single event loop, so settings
    changes never interleave with a tick.
    """

    settings: ReminderSettings
    clock: Clock
    notifier: Notifier | None
    permission: PermissionState = PermissionState.UNREQUESTED
    intake: IntakeTracker = field(init=False)
    last_key: SlotKey | None = field(default=None, init=False)
    _start_timer: TimerHandle | None = field(default=None, init=False, repr=False)
    _tick_timer: TimerHandle | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.intake = IntakeTracker(goal_ml=self.settings.goal.goal_ml)

    def update_settings(self, settings: ReminderSettings) -> None:
        """Replace the settings record once it has produced a schedule.

        Raises ``InvalidConfigurationError`` and keeps the previous record
        when the new one cannot be laid out.
        """
        build_slots(settings, self.clock.now().date())
        self.settings = settings
        self.intake.set_goal(settings.goal.goal_ml)
        logger.info(
            "Settings updated: %s-%s every %s min",
            settings.day.wake.strftime("%H:%M"),
            settings.day.sleep.strftime("%H:%M"),
            settings.day.interval_minutes,
        )

    def schedule(self) -> list[ScheduleSlot]:
        """Build today's slots from the current settings."""
        return build_slots(self.settings, self.clock.now().date())

    def suggested_per_slot(self) -> int:
        free = sum(1 for slot in self.schedule() if not slot.blocked)
        return suggested_per_slot(self.intake.goal_ml, free)

    def summary(self) -> DaySummary:
        """Render the schedule with per-slot guidance and current progress."""
        slots = self.schedule()
        free = sum(1 for slot in slots if not slot.blocked)
        suggested = suggested_per_slot(self.intake.goal_ml, free)
        return DaySummary(
            slots=[self._render(slot, suggested) for slot in slots],
            progress=self.intake.snapshot(),
            suggested_per_slot=suggested,
            free_slots=free,
            quick_amounts=quick_amounts(self.settings.goal.cup_size_ml),
        )

    def add_drink(self, ml: int) -> ProgressSnapshot:
        self.intake.add_drink(ml)
        return self.intake.snapshot()

    def drink_for_slot(self) -> ProgressSnapshot:
        """Record one reminder's worth, falling back to the cup size."""
        amount = self.suggested_per_slot() or self.settings.goal.cup_size_ml
        return self.add_drink(amount)

    def reset(self) -> ProgressSnapshot:
        self.intake.reset()
        return self.intake.snapshot()

    async def enable_notifications(self) -> PermissionState:
        """Request permission and start the loop when it is granted."""
        if self.notifier is None:
            logger.warning("Notifications are not available on this host")
            self._deny()
            return self.permission

        self.permission = PermissionState.REQUESTED
        try:
            result = await self.notifier.request_permission()
        except CapabilityUnavailableError:
            logger.warning("Notification capability unavailable", exc_info=True)
            self._deny()
            return self.permission

        if result is PermissionResult.GRANTED:
            self.permission = PermissionState.GRANTED
            logger.info("Notification permission granted")
            self.start()
        else:
            logger.info("Notification permission denied")
            self._deny()
        return self.permission

    def start(self) -> None:
        """Align the first tick to the next minute, then tick every minute."""
        if self.permission is not PermissionState.GRANTED:
            return
        self.stop()
        self._start_timer = self.clock.schedule_after(
            ms_to_next_minute(self.clock.now()), self._first_tick
        )

    def stop(self) -> None:
        """Cancel the pending start and the repeating tick, if any."""
        if self._start_timer is not None:
            self._start_timer.cancel()
            self._start_timer = None
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None
            logger.info("Reminder loop stopped")

    @property
    def running(self) -> bool:
        return self._start_timer is not None or self._tick_timer is not None

    def tick(self) -> ScheduleSlot | None:
        """Evaluate the current minute; return the slot that was notified."""
        if self.permission is not PermissionState.GRANTED:
            return None
        now = self.clock.now()
        label_now = now.strftime("%H:%M")
        slots = self.schedule()
        candidate = next(
            (slot for slot in slots if not slot.blocked and slot.label == label_now),
            None,
        )
        if candidate is None:
            self.last_key = SlotKey(day=now.date(), label=label_now, matched=False)
            return None

        key = SlotKey(day=now.date(), label=candidate.label)
        if key == self.last_key:
            return None
        free = sum(1 for slot in slots if not slot.blocked)
        if not self._send(suggested_per_slot(self.intake.goal_ml, free)):
            return None
        self.last_key = key
        return candidate

    def _first_tick(self) -> None:
        self._start_timer = None
        self._tick_timer = self.clock.schedule_every(TICK_INTERVAL_MS, self.tick)
        logger.info("Reminder loop started")
        self.tick()

    def _send(self, suggested_ml: int) -> bool:
        if self.notifier is None:
            self._deny()
            return False
        goal_ml = self.intake.goal_ml
        body = (
            f"Time for about {suggested_ml} ml. "
            f"Today's goal: {goal_ml / 1000:g} L ({goal_ml} ml)."
        )
        try:
            self.notifier.notify(NOTIFICATION_TITLE, body)
        except CapabilityUnavailableError:
            logger.warning("Notification capability disappeared", exc_info=True)
            self._deny()
            return False
        logger.info("Hydration reminder sent: %s", body)
        return True

    def _deny(self) -> None:
        self.permission = PermissionState.DENIED
        self.stop()

    def _render(self, slot: ScheduleSlot, suggested: int) -> RenderedSlot:
        if slot.blocked:
            guidance = (
                "During meal: small sips only"
                if self.settings.allow_tiny_sips
                else "Skip: close to a main meal"
            )
            return RenderedSlot(
                label=slot.label, blocked=True, suggested_ml=0, guidance=guidance
            )
        return RenderedSlot(
            label=slot.label,
            blocked=False,
            suggested_ml=suggested,
            guidance=f"Suggested: ~{suggested} ml",
        )


def ms_to_next_minute(now: datetime) -> int:
    """Milliseconds until the next wall-clock minute boundary."""
    next_minute = now.replace(second=0, microsecond=0) + timedelta(minutes=1)
    return max(1, round((next_minute - now).total_seconds() * 1000))


def build_slots(settings: ReminderSettings, day: date) -> list[ScheduleSlot]:
    """Lay out the slots for a day and mark the ones near meals."""
    times = build_schedule(
        settings.day.wake,
        settings.day.sleep,
        settings.day.interval_minutes,
        day,
    )
    windows = windows_for_days(
        settings.meals.meal_times,
        settings.meals.buffer_minutes,
        (moment.date() for moment in times),
    )
    return annotate(times, windows)
