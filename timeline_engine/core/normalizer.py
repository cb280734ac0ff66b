"""
Date-Range Normalizer.

Resolves the window a Gantt chart spans from timeline fields that may be
missing, malformed or contradictory.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from timeline_engine.core.clock import Clock, SystemClock
from timeline_engine.core.dates import add_days, days_between, parse_date
from timeline_engine.models.schemas import ProjectTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """Resolved project window. total_days is never below 1."""

    start_date: datetime
    end_date: datetime
    total_days: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "start_date": self.start_date,
            "end_date": self.end_date,
            "total_days": self.total_days,
        }


class DateRangeNormalizer:
    """Derives a canonical start, end and day span for a project."""

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize the normalizer.

        Args:
            clock: Time source used when the start date is unusable
        """
        self.clock = clock or SystemClock()

    def normalize(self, timeline: ProjectTimeline) -> DateRange:
        """
        Resolve the project window.

        The start falls back to the current instant and the end falls back to
        start + total_duration_days. An end earlier than the start is treated
        as unusable. Never raises.

        Args:
            timeline: Validated project timeline

        Returns:
            Resolved date range
        """
        start_date = parse_date(timeline.project_start_date)
        if start_date is None:
            if timeline.project_start_date:
                logger.debug(
                    f"Unusable project_start_date {timeline.project_start_date!r}, using clock"
                )
            start_date = self.clock.now()

        end_date = parse_date(timeline.project_end_date)
        if end_date is not None and end_date < start_date:
            logger.debug(
                f"project_end_date {timeline.project_end_date!r} precedes start, "
                "falling back to total_duration_days"
            )
            end_date = None
        if end_date is None:
            end_date = add_days(start_date, timeline.total_duration_days or 0.0)

        total_days = max(1, math.ceil(days_between(start_date, end_date)))

        return DateRange(
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
        )
