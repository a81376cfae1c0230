"""Domain models for intake progress."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GoalSettings:
    """Daily goal and the default cup size, both in millilitres."""

    goal_ml: int
    cup_size_ml: int


@dataclass(frozen=True)
class ProgressSnapshot:
    """Current intake against the daily goal."""

    consumed_ml: int
    goal_ml: int
    progress_percent: int
