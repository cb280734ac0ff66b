"""
Shared fixtures for timeline layout tests.
"""

from datetime import datetime, timezone

import pytest

from timeline_engine.core import FixedClock, TimelineLayoutEngine


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """The pinned current instant."""
    return NOW


@pytest.fixture
def fixed_clock(now):
    """Clock pinned to a known instant."""
    return FixedClock(now)


@pytest.fixture
def engine(fixed_clock):
    """Layout engine with a pinned clock and the default 2% width floor."""
    return TimelineLayoutEngine(clock=fixed_clock, min_bar_width_pct=2.0)


@pytest.fixture
def sample_timeline():
    """Timeline shaped like the project scheduler's output."""
    return {
        "project_start_date": "2024-01-01T00:00:00",
        "project_end_date": "2024-01-11T00:00:00",
        "total_duration_days": 10.0,
        "milestones": [
            {
                "name": "Milestone: 2 tasks completed",
                "date": "2024-01-06T00:00:00",
                "tasks": ["T1", "T2"],
            },
        ],
        "tasks": [
            {
                "task_id": "T1",
                "task_name": "Design",
                "start_date": "2024-01-01T00:00:00",
                "end_date": "2024-01-06T00:00:00",
                "duration_days": 5.0,
                "assigned_agent": "designer",
                "status": "completed",
                "dependencies": [],
                "effort_hours": 40.0,
                "completion_percentage": 100.0,
            },
            {
                "task_id": "T2",
                "task_name": "Backend API",
                "start_date": "2024-01-01T00:00:00",
                "end_date": "2024-01-04T00:00:00",
                "duration_days": 3.0,
                "assigned_agent": "engineering_lead",
                "status": "in_progress",
                "dependencies": [],
                "effort_hours": 24.0,
                "completion_percentage": 40.0,
            },
            {
                "task_id": "T3",
                "task_name": "Launch",
                "start_date": "2024-01-06T00:00:00",
                "end_date": "2024-01-11T00:00:00",
                "duration_days": 5.0,
                "assigned_agent": "pm",
                "status": "planned",
                "dependencies": ["T1", "T2"],
                "effort_hours": 40.0,
                "completion_percentage": 0.0,
            },
        ],
        "critical_path": ["T1", "T3"],
        "slack_days": {"T1": 0.0, "T2": 2.0, "T3": 0.0},
    }
