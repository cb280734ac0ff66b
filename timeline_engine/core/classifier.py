"""
Status/Criticality Classifier.
"""

from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Mapping

from timeline_engine.core.positioner import clamp
from timeline_engine.models.schemas import ColorCategory, TaskSchedule, TaskStatus

STATUS_COLORS = {
    TaskStatus.COMPLETED: ColorCategory.COMPLETE,
    TaskStatus.IN_PROGRESS: ColorCategory.ACTIVE,
    TaskStatus.BLOCKED: ColorCategory.BLOCKED,
    TaskStatus.PENDING: ColorCategory.NEUTRAL,
}


@dataclass(frozen=True)
class TaskClassification:
    """Visual classification of a task."""

    color_category: ColorCategory
    is_critical: bool
    slack_days: float
    completion_pct: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "color_category": self.color_category.value,
            "is_critical": self.is_critical,
            "slack_days": self.slack_days,
            "completion_pct": self.completion_pct,
        }


class StatusClassifier:
    """Assigns color category, criticality and slack to tasks."""

    def color_for(self, status: TaskStatus) -> ColorCategory:
        return STATUS_COLORS.get(status, ColorCategory.NEUTRAL)

    def classify(
        self,
        task: TaskSchedule,
        critical_path: AbstractSet[str],
        slack_days: Mapping[str, float],
    ) -> TaskClassification:
        """
        Classify a task.

        Task ids missing from critical_path or slack_days are simply not
        critical and have zero slack.

        Args:
            task: Task to classify
            critical_path: Ids of tasks on the critical path
            slack_days: Slack per task id

        Returns:
            Task classification
        """
        return TaskClassification(
            color_category=self.color_for(task.status),
            is_critical=task.task_id in critical_path,
            slack_days=slack_days.get(task.task_id, 0.0),
            completion_pct=clamp(task.completion_percentage, 0.0, 100.0),
        )
