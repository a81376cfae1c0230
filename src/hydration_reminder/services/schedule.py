"""Reminder schedule generation."""

from datetime import date, datetime, time, timedelta

from hydration_reminder.domain.errors import InvalidConfigurationError


def build_schedule(
    wake: time, sleep: time, interval_minutes: int, day: date
) -> list[datetime]:
    """Return reminder times from wake to sleep on the given day.

    When sleep is not after wake the window runs past midnight into the
    next day. The end point is included when it lands on the interval.
    """
    if interval_minutes < 1:
        raise InvalidConfigurationError(
            f"Reminder interval must be at least 1 minute, got {interval_minutes}"
        )
    start = datetime.combine(day, wake)
    end = datetime.combine(day, sleep)
    if end <= start:
        end += timedelta(days=1)

    try:
        step = timedelta(minutes=interval_minutes)
    except OverflowError as exc:
        raise InvalidConfigurationError(
            f"Reminder interval is too large: {interval_minutes}"
        ) from exc
    times: list[datetime] = []
    current = start
    while current <= end:
        times.append(current)
        if end - current < step:
            break
        current += step
    return times
