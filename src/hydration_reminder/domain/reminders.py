"""Domain models for reminder delivery."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from hydration_reminder.domain.intake import GoalSettings
from hydration_reminder.domain.schedule import DaySettings, MealSettings


class PermissionState(Enum):
    """Lifecycle of the notification permission."""

    UNREQUESTED = "unrequested"
    REQUESTED = "requested"
    GRANTED = "granted"
    DENIED = "denied"


class PermissionResult(Enum):
    """Answer returned by the host when permission is requested."""

    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class SlotKey:
    """Identifies the last evaluated slot of a day.

    ``matched`` is False for the sentinel recorded when a tick found no
    eligible slot.
    """

    day: date
    label: str
    matched: bool = True


@dataclass(frozen=True)
class ReminderSettings:
    """Complete, validated settings for one reminder session."""

    day: DaySettings
    meals: MealSettings
    goal: GoalSettings
    allow_tiny_sips: bool = False
