"""
Timeline Layout Engine - Gantt layout for simulation project timelines.

This module provides:
1. Resolution of the project window
2. Per-task bar positions
3. Per-task status and criticality classification
4. Milestone markers and header labels

Every operation is a pure function of the timeline record and the clock.
Malformed fields degrade to safe defaults; the only signal surfaced to the
caller is "no data" when the timeline has no tasks.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from timeline_engine.config import get_settings
from timeline_engine.core.classifier import StatusClassifier, TaskClassification
from timeline_engine.core.clock import Clock, SystemClock
from timeline_engine.core.dates import format_date, parse_date
from timeline_engine.core.normalizer import DateRange, DateRangeNormalizer
from timeline_engine.core.positioner import TaskPosition, TaskPositionCalculator
from timeline_engine.models.schemas import ProjectTimeline, TaskSchedule

logger = logging.getLogger(__name__)

PROGRESS_BAR_OPACITY = 0.7

TimelineInput = Union[ProjectTimeline, Mapping[str, Any]]


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class TaskLayout:
    """Rendering record for a single task."""

    task_id: str
    position: TaskPosition
    classification: TaskClassification
    task_name: str
    assigned_agent: Optional[str]
    status_label: str
    duration_days: float
    duration_label: Optional[str] = None
    slack_label: Optional[str] = None

    @property
    def left_pct(self) -> float:
        return self.position.left_pct

    @property
    def width_pct(self) -> float:
        return self.position.width_pct

    @property
    def is_critical(self) -> bool:
        return self.classification.is_critical

    @property
    def completion_pct(self) -> float:
        return self.classification.completion_pct

    @property
    def bar_opacity(self) -> float:
        return PROGRESS_BAR_OPACITY if self.completion_pct > 0 else 1.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {"task_id": self.task_id}
        result.update(self.position.to_dict())
        result.update(self.classification.to_dict())
        result.update({
            "task_name": self.task_name,
            "assigned_agent": self.assigned_agent,
            "status_label": self.status_label,
            "duration_days": self.duration_days,
            "duration_label": self.duration_label,
            "slack_label": self.slack_label,
            "bar_opacity": self.bar_opacity,
        })
        return result


@dataclass(frozen=True)
class MilestoneMarker:
    """Milestone placed on the timeline."""

    name: str
    date: Optional[datetime]
    date_label: str
    task_count: int
    position_pct: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "date": self.date,
            "date_label": self.date_label,
            "task_count": self.task_count,
            "position_pct": self.position_pct,
        }


@dataclass(frozen=True)
class TimelineLayout:
    """Complete Gantt layout."""

    date_range: DateRange
    tasks: List[TaskLayout]
    header_label: str
    start_label: str
    end_label: str
    critical_path_count: int = 0
    milestones: List[MilestoneMarker] = field(default_factory=list)

    @property
    def total_days(self) -> int:
        return self.date_range.total_days

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date_range": self.date_range.to_dict(),
            "tasks": [task.to_dict() for task in self.tasks],
            "milestones": [marker.to_dict() for marker in self.milestones],
            "critical_path_count": self.critical_path_count,
            "header_label": self.header_label,
            "start_label": self.start_label,
            "end_label": self.end_label,
        }


# =============================================================================
# Layout Engine
# =============================================================================

class TimelineLayoutEngine:
    """
    Computes Gantt layouts for project timelines.

    Holds no per-timeline state, so one instance can be shared freely.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        min_bar_width_pct: Optional[float] = None,
        date_label_format: Optional[str] = None,
    ):
        """
        Initialize the layout engine.

        Args:
            clock: Time source for defaulted dates
            min_bar_width_pct: Display floor for bar widths (settings default)
            date_label_format: strftime format for date labels (settings default)
        """
        layout_settings = get_settings().layout

        if min_bar_width_pct is None:
            min_bar_width_pct = layout_settings.min_bar_width_pct

        self.clock = clock or SystemClock()
        self.date_label_format = date_label_format or layout_settings.date_label_format
        self.normalizer = DateRangeNormalizer(clock=self.clock)
        self.positioner = TaskPositionCalculator(min_width_pct=min_bar_width_pct)
        self.classifier = StatusClassifier()

    @staticmethod
    def coerce(timeline: TimelineInput) -> ProjectTimeline:
        """Validate a raw mapping into a ProjectTimeline."""
        if isinstance(timeline, ProjectTimeline):
            return timeline
        return ProjectTimeline.model_validate(timeline)

    def layout(self, timeline: Optional[TimelineInput]) -> Optional[TimelineLayout]:
        """
        Compute the full Gantt layout.

        Args:
            timeline: Timeline record or raw mapping

        Returns:
            The layout, or None when there are no tasks to render
        """
        if timeline is None:
            return None

        timeline = self.coerce(timeline)
        if not timeline.has_tasks:
            logger.debug("Timeline has no tasks, nothing to lay out")
            return None

        date_range = self.normalizer.normalize(timeline)
        tasks = self.layout_tasks(timeline, date_range)

        logger.debug(
            f"Laid out {len(tasks)} tasks over {date_range.total_days} days"
        )

        return TimelineLayout(
            date_range=date_range,
            tasks=tasks,
            milestones=self.layout_milestones(timeline, date_range),
            critical_path_count=len(timeline.critical_path),
            header_label=self.header_label(timeline, date_range),
            start_label=format_date(date_range.start_date, self.date_label_format),
            end_label=format_date(date_range.end_date, self.date_label_format),
        )

    def layout_tasks(
        self,
        timeline: TimelineInput,
        date_range: Optional[DateRange] = None,
    ) -> List[TaskLayout]:
        """
        Lay out every task, in input order.

        Args:
            timeline: Timeline record or raw mapping
            date_range: Pre-resolved window (resolved from the timeline if omitted)

        Returns:
            One TaskLayout per task; empty when there are no tasks
        """
        timeline = self.coerce(timeline)
        if date_range is None:
            date_range = self.normalizer.normalize(timeline)

        return [
            self.layout_task(task, timeline, date_range)
            for task in timeline.tasks
        ]

    def layout_task(
        self,
        task: TaskSchedule,
        timeline: ProjectTimeline,
        date_range: DateRange,
    ) -> TaskLayout:
        """Lay out a single task against a resolved window."""
        position = self.positioner.position(
            task, date_range.start_date, date_range.total_days
        )
        classification = self.classifier.classify(
            task, timeline.critical_path, timeline.slack_days
        )

        duration_label = None
        if task.start_date and task.end_date:
            duration_label = f"{task.duration_days:.1f}d"

        slack_label = None
        if classification.slack_days > 0:
            slack_label = f"{classification.slack_days:.1f}d slack"

        return TaskLayout(
            task_id=task.task_id,
            position=position,
            classification=classification,
            task_name=task.task_name,
            assigned_agent=task.assigned_agent,
            status_label=task.status_label,
            duration_days=task.duration_days,
            duration_label=duration_label,
            slack_label=slack_label,
        )

    def layout_milestones(
        self,
        timeline: ProjectTimeline,
        date_range: DateRange,
    ) -> List[MilestoneMarker]:
        """Place milestone markers; unreadable dates get no position."""
        markers = []
        for milestone in timeline.milestones:
            moment = parse_date(milestone.date)
            markers.append(MilestoneMarker(
                name=milestone.name,
                date=moment,
                date_label=format_date(moment, self.date_label_format),
                task_count=len(milestone.tasks),
                position_pct=self.positioner.offset_pct(
                    moment, date_range.start_date, date_range.total_days
                ),
            ))
        return markers

    @staticmethod
    def header_label(timeline: ProjectTimeline, date_range: DateRange) -> str:
        """Summary such as "10 days • 4 tasks"."""
        if timeline.total_duration_days is not None:
            # Round half up
            days = str(int(math.floor(timeline.total_duration_days + 0.5)))
        else:
            days = str(date_range.total_days)
        return f"{days} days • {len(timeline.tasks)} tasks"


def create_engine(
    clock: Optional[Clock] = None,
    **kwargs,
) -> TimelineLayoutEngine:
    """Create and configure a layout engine."""
    return TimelineLayoutEngine(clock=clock, **kwargs)


def layout_timeline(
    timeline: Optional[TimelineInput],
    clock: Optional[Clock] = None,
) -> Optional[TimelineLayout]:
    """Lay out a timeline with a default-configured engine."""
    return create_engine(clock=clock).layout(timeline)
