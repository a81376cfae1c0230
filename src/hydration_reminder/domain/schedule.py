"""Domain models for the reminder schedule."""

from dataclasses import dataclass
from datetime import datetime, time


@dataclass(frozen=True)
class DaySettings:
    """Waking window and reminder spacing."""

    wake: time
    sleep: time
    interval_minutes: int


@dataclass(frozen=True)
class MealSettings:
    """Main meal times and the quiet buffer around each of them."""

    meal_times: tuple[time, ...]
    buffer_minutes: int


@dataclass(frozen=True)
class ExclusionWindow:
    """Closed interval around a meal during which reminders are suppressed."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        """Return True when the moment falls inside the window, bounds included."""
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class ScheduleSlot:
    """One reminder candidate."""

    time: datetime
    blocked: bool

    @property
    def label(self) -> str:
        return self.time.strftime("%H:%M")


@dataclass(frozen=True)
class RenderedSlot:
    """Slot data prepared for display."""

    label: str
    blocked: bool
    suggested_ml: int
    guidance: str
