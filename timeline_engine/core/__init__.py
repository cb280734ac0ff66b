"""
Core layout package.

Contains the date-range normalizer, task position calculator, status
classifier and the engine that composes them.
"""

from timeline_engine.core.clock import Clock, FixedClock, SystemClock
from timeline_engine.core.classifier import StatusClassifier, TaskClassification
from timeline_engine.core.normalizer import DateRange, DateRangeNormalizer
from timeline_engine.core.positioner import TaskPosition, TaskPositionCalculator
from timeline_engine.core.engine import (
    MilestoneMarker,
    TaskLayout,
    TimelineLayout,
    TimelineLayoutEngine,
    create_engine,
    layout_timeline,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "StatusClassifier",
    "TaskClassification",
    "DateRange",
    "DateRangeNormalizer",
    "TaskPosition",
    "TaskPositionCalculator",
    "MilestoneMarker",
    "TaskLayout",
    "TimelineLayout",
    "TimelineLayoutEngine",
    "create_engine",
    "layout_timeline",
]
