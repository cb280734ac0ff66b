"""
Unit tests for the Status/Criticality Classifier.
"""

import pytest

from timeline_engine.core import StatusClassifier
from timeline_engine.models import ColorCategory, TaskSchedule


@pytest.fixture
def classifier():
    return StatusClassifier()


def _task(**fields) -> TaskSchedule:
    fields.setdefault("task_id", "T1")
    return TaskSchedule.model_validate(fields)


class TestStatusClassifier:
    """Tests for StatusClassifier."""

    @pytest.mark.parametrize(
        "status, category",
        [
            ("completed", ColorCategory.COMPLETE),
            ("Completed", ColorCategory.COMPLETE),
            ("in_progress", ColorCategory.ACTIVE),
            ("IN_PROGRESS", ColorCategory.ACTIVE),
            ("blocked", ColorCategory.BLOCKED),
            ("planned", ColorCategory.NEUTRAL),
            ("on fire", ColorCategory.NEUTRAL),
            (None, ColorCategory.NEUTRAL),
        ],
    )
    def test_color_category(self, classifier, status, category):
        """Test status to color mapping."""
        result = classifier.classify(_task(status=status), frozenset(), {})

        assert result.color_category is category

    def test_critical_and_slack(self, classifier):
        """Test lookups for a task present in both collections."""
        result = classifier.classify(
            _task(task_id="T1"), frozenset({"T1"}), {"T1": 1.5}
        )

        assert result.is_critical is True
        assert result.slack_days == 1.5

    def test_absent_task_defaults(self, classifier):
        """Test that unknown ids are not critical and have no slack."""
        result = classifier.classify(
            _task(task_id="T9"), frozenset({"T1", "T2"}), {"T1": 3.0}
        )

        assert result.is_critical is False
        assert result.slack_days == 0

    @pytest.mark.parametrize(
        "completion, expected",
        [(50, 50.0), (0, 0.0), (100, 100.0), (140, 100.0), (-10, 0.0)],
    )
    def test_completion_clamped(self, classifier, completion, expected):
        """Test completion clamping to the task's own bar."""
        result = classifier.classify(
            _task(completion_percentage=completion), frozenset(), {}
        )

        assert result.completion_pct == expected

    def test_to_dict(self, classifier):
        """Test converting a classification to a dictionary."""
        result = classifier.classify(_task(status="blocked"), frozenset({"T1"}), {})

        assert result.to_dict() == {
            "color_category": "blocked",
            "is_critical": True,
            "slack_days": 0.0,
            "completion_pct": 0.0,
        }
