"""Tests for schedule generation."""

from datetime import date, datetime, time, timedelta

import pytest

from hydration_reminder.domain.errors import InvalidConfigurationError
from hydration_reminder.services.schedule import build_schedule

DAY = date(2024, 5, 14)


def test_daytime_window_includes_both_ends() -> None:
    times = build_schedule(time(7, 30), time(22, 30), 60, DAY)

    assert len(times) == 16
    assert times[0] == datetime(2024, 5, 14, 7, 30)
    assert times[-1] == datetime(2024, 5, 14, 22, 30)
    assert [t.strftime("%H:%M") for t in times[:3]] == ["07:30", "08:30", "09:30"]


def test_spacing_is_uniform_and_within_window() -> None:
    times = build_schedule(time(6, 0), time(21, 10), 45, DAY)

    start = datetime(2024, 5, 14, 6, 0)
    end = datetime(2024, 5, 14, 21, 10)
    assert all(start <= t <= end for t in times)
    gaps = {later - earlier for earlier, later in zip(times, times[1:])}
    assert gaps == {timedelta(minutes=45)}
    assert times[-1] + timedelta(minutes=45) > end


def test_overnight_window_ends_next_day() -> None:
    times = build_schedule(time(22, 0), time(2, 0), 60, DAY)

    assert times[0] == datetime(2024, 5, 14, 22, 0)
    assert times[-1] == datetime(2024, 5, 15, 2, 0)
    assert len(times) == 5
    gaps = {later - earlier for earlier, later in zip(times, times[1:])}
    assert gaps == {timedelta(hours=1)}


def test_equal_wake_and_sleep_spans_a_full_day() -> None:
    times = build_schedule(time(8, 0), time(8, 0), 360, DAY)

    assert times[0] == datetime(2024, 5, 14, 8, 0)
    assert times[-1] == datetime(2024, 5, 15, 8, 0)
    assert len(times) == 5


@pytest.mark.parametrize("interval", [0, -15])
def test_non_positive_interval_is_rejected(interval: int) -> None:
    with pytest.raises(InvalidConfigurationError):
        build_schedule(time(7, 30), time(22, 30), interval, DAY)


def test_same_inputs_give_same_schedule() -> None:
    first = build_schedule(time(7, 0), time(23, 0), 50, DAY)
    second = build_schedule(time(7, 0), time(23, 0), 50, DAY)

    assert first == second


def test_interval_beyond_timedelta_range_is_rejected() -> None:
    with pytest.raises(InvalidConfigurationError):
        build_schedule(time(7, 30), time(22, 30), 10**13, DAY)


def test_interval_longer_than_window_gives_single_slot() -> None:
    times = build_schedule(time(7, 30), time(22, 30), 10**10, DAY)

    assert times == [datetime(2024, 5, 14, 7, 30)]
