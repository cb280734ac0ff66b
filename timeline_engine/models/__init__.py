"""
Data models package.

Contains timeline records and layout response schemas.
"""

from timeline_engine.models.schemas import (
    TaskStatus,
    ColorCategory,
    TaskSchedule,
    Milestone,
    ProjectTimeline,
    DateRangeResponse,
    TaskLayoutResponse,
    MilestoneMarkerResponse,
    TimelineLayoutResponse,
    LayoutResponse,
    RenderResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Enums
    "TaskStatus",
    "ColorCategory",
    # Timeline Records
    "TaskSchedule",
    "Milestone",
    "ProjectTimeline",
    # Response Schemas
    "DateRangeResponse",
    "TaskLayoutResponse",
    "MilestoneMarkerResponse",
    "TimelineLayoutResponse",
    "LayoutResponse",
    "RenderResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]
