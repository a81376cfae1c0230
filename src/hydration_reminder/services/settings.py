"""Validation and normalization of reminder settings input."""

import math
import re
from dataclasses import dataclass
from datetime import time

from hydration_reminder.domain.errors import InvalidConfigurationError
from hydration_reminder.domain.intake import GoalSettings
from hydration_reminder.domain.reminders import ReminderSettings
from hydration_reminder.domain.schedule import DaySettings, MealSettings
from hydration_reminder.services.intake import liters_to_ml

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
MAX_INTERVAL_MINUTES = 24 * 60
MAX_MEAL_BUFFER_MINUTES = 12 * 60


def parse_time_of_day(raw: str) -> time:
    """Parse an ``HH:MM`` string into a time value."""
    match = _TIME_PATTERN.match(raw.strip())
    if match is None:
        raise InvalidConfigurationError(f"Expected HH:MM, got {raw!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:  # noqa: PLR2004
        raise InvalidConfigurationError(f"Time of day out of range: {raw!r}")
    return time(hour=hour, minute=minute)


@dataclass(frozen=True)
class SettingsInput:
    """Raw settings as collected by a form or environment."""

    wake_time: str
    sleep_time: str
    interval_minutes: int
    goal_liters: float
    cup_size_ml: int
    breakfast_time: str
    lunch_time: str
    dinner_time: str
    meal_buffer_minutes: int
    allow_tiny_sips: bool = False


def normalize_settings(raw: SettingsInput) -> ReminderSettings:
    """Validate raw input and build an immutable settings record."""
    if not 1 <= raw.interval_minutes <= MAX_INTERVAL_MINUTES:
        raise InvalidConfigurationError(
            f"Reminder interval must be between 1 and {MAX_INTERVAL_MINUTES} "
            f"minutes, got {raw.interval_minutes}"
        )
    if not 0 <= raw.meal_buffer_minutes <= MAX_MEAL_BUFFER_MINUTES:
        raise InvalidConfigurationError(
            f"Meal buffer must be between 0 and {MAX_MEAL_BUFFER_MINUTES} "
            f"minutes, got {raw.meal_buffer_minutes}"
        )
    if not math.isfinite(raw.goal_liters) or raw.goal_liters < 0:
        raise InvalidConfigurationError(
            f"Daily goal must be a non-negative number, got {raw.goal_liters}"
        )
    if raw.cup_size_ml < 0:
        raise InvalidConfigurationError(
            f"Cup size cannot be negative, got {raw.cup_size_ml}"
        )
    return ReminderSettings(
        day=DaySettings(
            wake=parse_time_of_day(raw.wake_time),
            sleep=parse_time_of_day(raw.sleep_time),
            interval_minutes=raw.interval_minutes,
        ),
        meals=MealSettings(
            meal_times=(
                parse_time_of_day(raw.breakfast_time),
                parse_time_of_day(raw.lunch_time),
                parse_time_of_day(raw.dinner_time),
            ),
            buffer_minutes=raw.meal_buffer_minutes,
        ),
        goal=GoalSettings(
            goal_ml=liters_to_ml(raw.goal_liters),
            cup_size_ml=raw.cup_size_ml,
        ),
        allow_tiny_sips=raw.allow_tiny_sips,
    )
