"""Meal exclusion windows."""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta

from hydration_reminder.domain.errors import InvalidConfigurationError
from hydration_reminder.domain.schedule import ExclusionWindow, ScheduleSlot


def exclusion_windows(
    meal_times: Iterable[time], buffer_minutes: int, day: date
) -> list[ExclusionWindow]:
    """Return one closed window per meal, anchored to the given day."""
    if buffer_minutes < 0:
        raise InvalidConfigurationError(
            f"Meal buffer cannot be negative, got {buffer_minutes}"
        )
    windows = []
    try:
        buffer = timedelta(minutes=buffer_minutes)
        for meal in meal_times:
            at = datetime.combine(day, meal)
            windows.append(ExclusionWindow(start=at - buffer, end=at + buffer))
    except OverflowError as exc:
        raise InvalidConfigurationError(
            f"Meal buffer is too large: {buffer_minutes}"
        ) from exc
    return windows


def windows_for_days(
    meal_times: Sequence[time], buffer_minutes: int, days: Iterable[date]
) -> list[ExclusionWindow]:
    """Return meal windows for every day a schedule touches.

    Neighbouring days are included so windows that cross midnight still
    cover the first and last slots.
    """
    touched = set(days)
    if not touched:
        return []
    first, last = min(touched), max(touched)
    windows: list[ExclusionWindow] = []
    for offset in range(-1, (last - first).days + 2):
        day = first + timedelta(days=offset)
        windows.extend(exclusion_windows(meal_times, buffer_minutes, day))
    return windows


def is_blocked(moment: datetime, windows: Iterable[ExclusionWindow]) -> bool:
    """Return True when the moment falls inside any window."""
    return any(window.contains(moment) for window in windows)


def annotate(
    times: Iterable[datetime], windows: Sequence[ExclusionWindow]
) -> list[ScheduleSlot]:
    """Mark each time as blocked or free. Blocked slots are kept."""
    slots = []
    for moment in times:
        truncated = moment.replace(second=0, microsecond=0)
        slots.append(ScheduleSlot(time=moment, blocked=is_blocked(truncated, windows)))
    return slots
