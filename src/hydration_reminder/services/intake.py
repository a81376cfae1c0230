"""Intake tracking against the daily goal."""

import math
from dataclasses import dataclass

from hydration_reminder.domain.intake import ProgressSnapshot


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def liters_to_ml(liters: float) -> int:
    """Convert a goal in liters to whole millilitres."""
    return round_half_up(liters * 1000)


def suggested_per_slot(goal_ml: int, free_slots: int) -> int:
    """Split the goal evenly over the free slots, or 0 if there are none."""
    if free_slots <= 0:
        return 0
    return round_half_up(goal_ml / free_slots)


def quick_amounts(cup_size_ml: int) -> list[int]:
    """Return the one-tap amounts offered next to the progress bar."""
    return [cup_size_ml, round_half_up(cup_size_ml / 2), 100, -cup_size_ml]


@dataclass
class IntakeTracker:
    """Holds today's consumed amount, clamped to ``[0, goal_ml]``."""

    goal_ml: int
    consumed_ml: int = 0

    def add_drink(self, ml: int) -> int:
        """Add (or subtract, for corrections) an amount and return the new total."""
        self.consumed_ml = _clamp(self.consumed_ml + ml, self.goal_ml)
        return self.consumed_ml

    def reset(self) -> None:
        self.consumed_ml = 0

    def set_goal(self, goal_ml: int) -> None:
        """Replace the goal, pulling the consumed amount back inside it."""
        self.goal_ml = max(0, goal_ml)
        self.consumed_ml = _clamp(self.consumed_ml, self.goal_ml)

    @property
    def progress_percent(self) -> int:
        if self.goal_ml <= 0:
            return 0
        return min(100, round_half_up(self.consumed_ml / self.goal_ml * 100))

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            consumed_ml=self.consumed_ml,
            goal_ml=self.goal_ml,
            progress_percent=self.progress_percent,
        )


def _clamp(value: int, upper: int) -> int:
    return max(0, min(upper, value))
