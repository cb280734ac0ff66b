"""
Unit tests for the Task Position Calculator.
"""

from datetime import datetime, timezone

import pytest

from timeline_engine.core import TaskPositionCalculator
from timeline_engine.models import TaskSchedule

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def calculator():
    return TaskPositionCalculator(min_width_pct=2.0)


def _task(**fields) -> TaskSchedule:
    fields.setdefault("task_id", "T1")
    return TaskSchedule.model_validate(fields)


class TestTaskPositionCalculator:
    """Tests for TaskPositionCalculator."""

    def test_basic_position(self, calculator):
        """Test a task fully inside the window."""
        position = calculator.position(
            _task(start_date="2024-01-03", duration_days=2), START, 10
        )

        assert position.left_pct == pytest.approx(20.0)
        assert position.width_pct == pytest.approx(20.0)

    def test_fractional_offset(self, calculator):
        """Test that offsets are not rounded to whole days."""
        position = calculator.position(
            _task(start_date="2024-01-01T12:00:00", duration_days=5), START, 10
        )

        assert position.left_pct == pytest.approx(5.0)
        assert position.width_pct == pytest.approx(50.0)

    @pytest.mark.parametrize("start_date", [None, "", "whenever"])
    def test_missing_start_is_unplaced(self, calculator, start_date):
        """Test that tasks without a usable start sit at the left edge with no width."""
        position = calculator.position(
            _task(start_date=start_date, duration_days=1), START, 1
        )

        assert position.left_pct == 0.0
        assert position.width_pct == 0.0

    def test_start_before_window_clamps_to_zero(self, calculator):
        """Test that early tasks are pinned to the left edge."""
        position = calculator.position(
            _task(start_date="2023-12-01", duration_days=3), START, 10
        )

        assert position.left_pct == 0.0
        assert position.width_pct == pytest.approx(30.0)

    def test_start_after_window_clamps_to_hundred(self, calculator):
        """Test that late tasks are pinned to the right edge."""
        position = calculator.position(
            _task(start_date="2024-03-01", duration_days=1), START, 10
        )

        assert position.left_pct == 100.0

    def test_long_task_width_clamps_to_hundred(self, calculator):
        """Test that widths never exceed the timeline."""
        position = calculator.position(
            _task(start_date="2024-01-01", duration_days=45), START, 10
        )

        assert position.width_pct == 100.0

    @pytest.mark.parametrize("duration", [0, 0.05, -1])
    def test_short_task_gets_width_floor(self, calculator, duration):
        """Test the minimum visible width."""
        position = calculator.position(
            _task(start_date="2024-01-02", duration_days=duration), START, 10
        )

        assert position.width_pct == 2.0

    def test_custom_width_floor(self):
        """Test that the width floor is tunable."""
        calculator = TaskPositionCalculator(min_width_pct=5.0)
        position = calculator.position(
            _task(start_date="2024-01-02", duration_days=0), START, 10
        )

        assert position.width_pct == 5.0

    def test_zero_total_days_is_guarded(self, calculator):
        """Test that a degenerate span never divides by zero."""
        position = calculator.position(
            _task(start_date="2024-01-01", duration_days=1), START, 0
        )

        assert 0.0 <= position.left_pct <= 100.0
        assert 2.0 <= position.width_pct <= 100.0

    def test_order_independent(self, calculator):
        """Test that positioning one task does not affect another."""
        first = _task(task_id="A", start_date="2024-01-02", duration_days=1)
        second = _task(task_id="B", start_date="2024-01-05", duration_days=4)

        forward = [calculator.position(t, START, 10) for t in (first, second)]
        backward = [calculator.position(t, START, 10) for t in (second, first)]

        assert forward == list(reversed(backward))

    @pytest.mark.parametrize(
        "start_date, expected_left",
        [("0001-01-01T00:00:00+05:00", 0.0), ("9999-12-31T23:00:00-05:00", 100.0)],
    )
    def test_start_at_calendar_edge(self, calculator, start_date, expected_left):
        """Test that offsets at either end of the calendar clamp instead of raising."""
        position = calculator.position(
            _task(start_date=start_date, duration_days=3), START, 10
        )

        assert position.left_pct == expected_left
        assert 0.0 <= position.width_pct <= 100.0


class TestOffsetPct:
    """Tests for instant placement."""

    def test_inside_window(self, calculator):
        """Test an instant inside the window."""
        moment = datetime(2024, 1, 6, tzinfo=timezone.utc)

        assert calculator.offset_pct(moment, START, 10) == pytest.approx(50.0)

    def test_clamped(self, calculator):
        """Test instants outside the window."""
        before = datetime(2023, 1, 1, tzinfo=timezone.utc)
        after = datetime(2025, 1, 1, tzinfo=timezone.utc)

        assert calculator.offset_pct(before, START, 10) == 0.0
        assert calculator.offset_pct(after, START, 10) == 100.0

    def test_missing(self, calculator):
        """Test that a missing instant has no position."""
        assert calculator.offset_pct(None, START, 10) is None
