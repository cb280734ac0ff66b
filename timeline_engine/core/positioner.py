"""
Task Position Calculator.

Maps task dates and durations onto a 0-100 horizontal percentage space.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from timeline_engine.core.dates import days_between, parse_date
from timeline_engine.models.schemas import TaskSchedule

DEFAULT_MIN_WIDTH_PCT = 2.0


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class TaskPosition:
    """Horizontal placement of a task bar, in percent of the timeline."""

    left_pct: float
    width_pct: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"left_pct": self.left_pct, "width_pct": self.width_pct}


UNPLACED = TaskPosition(left_pct=0.0, width_pct=0.0)


class TaskPositionCalculator:
    """Positions task bars relative to the project window."""

    def __init__(self, min_width_pct: float = DEFAULT_MIN_WIDTH_PCT):
        """
        Initialize the calculator.

        Args:
            min_width_pct: Display floor for bar width so short tasks stay visible
        """
        self.min_width_pct = clamp(min_width_pct, 0.0, 100.0)

    def position(
        self,
        task: TaskSchedule,
        start_date: datetime,
        total_days: int,
    ) -> TaskPosition:
        """
        Compute a task's bar position.

        Tasks without a readable start date sit at the left edge with zero
        width. Everything else is clamped to [0, 100] for left and
        [min_width_pct, 100] for width.
        """
        task_start = parse_date(task.start_date)
        if task_start is None:
            return UNPLACED

        span = max(1, total_days)
        days_from_start = max(0.0, days_between(start_date, task_start))
        left_pct = days_from_start / span * 100
        width_pct = task.duration_days / span * 100

        return TaskPosition(
            left_pct=clamp(left_pct, 0.0, 100.0),
            width_pct=clamp(width_pct, self.min_width_pct, 100.0),
        )

    def offset_pct(
        self,
        moment: Optional[datetime],
        start_date: datetime,
        total_days: int,
    ) -> Optional[float]:
        """Position of a single instant, e.g. a milestone marker."""
        if moment is None:
            return None
        span = max(1, total_days)
        return clamp(days_between(start_date, moment) / span * 100, 0.0, 100.0)
