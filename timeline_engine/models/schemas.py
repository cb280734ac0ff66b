"""
Pydantic schemas for timeline records and layout responses.

Timeline records arrive from the simulation API already deserialized. They are
validated leniently: malformed values are replaced with safe defaults so a
layout can always be produced.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Enums
# =============================================================================

class TaskStatus(str, Enum):
    """Task status as understood by the layout engine."""
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    PENDING = "pending"

    @classmethod
    def from_raw(cls, value: Any) -> "TaskStatus":
        """Map a raw status string case-insensitively; unknown values are pending."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.PENDING


class ColorCategory(str, Enum):
    """Visual category of a task bar."""
    COMPLETE = "complete"
    ACTIVE = "active"
    BLOCKED = "blocked"
    NEUTRAL = "neutral"


# =============================================================================
# Sanitizers
# =============================================================================

def _finite_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _non_negative(value: Any, default: float = 0.0) -> float:
    number = _finite_float(value)
    if number is None:
        return default
    return max(0.0, number)


def _date_text(value: Any) -> Optional[str]:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return None


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return []
    return [str(item) for item in value if item is not None]


def _optional_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or None
    return None


# =============================================================================
# Base Schemas
# =============================================================================

class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RecordSchema(BaseSchema):
    """Immutable input record received from the simulation API."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        extra="ignore",
    )


# =============================================================================
# Timeline Records
# =============================================================================

class TaskSchedule(RecordSchema):
    """Scheduled task as produced by the project scheduler."""

    task_id: str = ""
    task_name: str = "Unnamed Task"
    assigned_agent: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    status_label: str = Field(default="pending", description="Raw status text for display")
    duration_days: float = 0.0
    completion_percentage: float = 0.0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    effort_hours: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def split_status(cls, data: Any) -> Any:
        if isinstance(data, dict) and "status_label" not in data:
            data = dict(data)
            raw = data.get("status")
            if isinstance(raw, TaskStatus):
                data["status_label"] = raw.value
            elif isinstance(raw, str) and raw.strip():
                data["status_label"] = raw
        return data

    @field_validator("task_id", mode="before")
    @classmethod
    def coerce_task_id(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("task_name", mode="before")
    @classmethod
    def coerce_task_name(cls, v: Any) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "Unnamed Task"
        return str(v)

    @field_validator("assigned_agent", mode="before")
    @classmethod
    def coerce_agent(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> TaskStatus:
        return TaskStatus.from_raw(v)

    @field_validator("duration_days", "effort_hours", "completion_percentage", mode="before")
    @classmethod
    def sanitize_amount(cls, v: Any) -> float:
        return _non_negative(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def keep_date_text(cls, v: Any) -> Optional[str]:
        return _date_text(v)

    @field_validator("dependencies", mode="before")
    @classmethod
    def coerce_dependencies(cls, v: Any) -> List[str]:
        return _string_list(v)


class Milestone(RecordSchema):
    """Named point on the timeline grouping completed tasks."""

    name: str = "Milestone"
    date: Optional[str] = None
    tasks: List[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return _optional_text(v) or "Milestone"

    @field_validator("date", mode="before")
    @classmethod
    def keep_date_text(cls, v: Any) -> Optional[str]:
        return _date_text(v)

    @field_validator("tasks", mode="before")
    @classmethod
    def coerce_tasks(cls, v: Any) -> List[str]:
        return _string_list(v)


class ProjectTimeline(RecordSchema):
    """Project timeline with Gantt chart data."""

    project_start_date: Optional[str] = None
    project_end_date: Optional[str] = None
    total_duration_days: Optional[float] = None
    milestones: List[Milestone] = Field(default_factory=list)
    tasks: List[TaskSchedule] = Field(default_factory=list)
    critical_path: FrozenSet[str] = Field(default_factory=frozenset)
    slack_days: Dict[str, float] = Field(default_factory=dict)

    @field_validator("project_start_date", "project_end_date", mode="before")
    @classmethod
    def keep_date_text(cls, v: Any) -> Optional[str]:
        return _date_text(v)

    @field_validator("total_duration_days", mode="before")
    @classmethod
    def sanitize_duration(cls, v: Any) -> Optional[float]:
        number = _finite_float(v)
        if number is None or number < 0:
            return None
        return number

    @field_validator("milestones", "tasks", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("critical_path", mode="before")
    @classmethod
    def coerce_critical_path(cls, v: Any) -> FrozenSet[str]:
        return frozenset(_string_list(v))

    @field_validator("slack_days", mode="before")
    @classmethod
    def sanitize_slack(cls, v: Any) -> Dict[str, float]:
        if not isinstance(v, dict):
            return {}
        slack = {}
        for task_id, days in v.items():
            number = _finite_float(days)
            if number is not None:
                slack[str(task_id)] = max(0.0, number)
        return slack

    @property
    def has_tasks(self) -> bool:
        return bool(self.tasks)


# =============================================================================
# Layout Responses
# =============================================================================

class DateRangeResponse(BaseSchema):
    """Resolved project window."""

    start_date: datetime
    end_date: datetime
    total_days: int = Field(ge=1)


class TaskLayoutResponse(BaseSchema):
    """Rendering record for a single task."""

    task_id: str
    left_pct: float = Field(ge=0.0, le=100.0)
    width_pct: float = Field(ge=0.0, le=100.0)
    color_category: ColorCategory
    is_critical: bool
    slack_days: float = Field(ge=0.0)
    completion_pct: float = Field(ge=0.0, le=100.0)
    task_name: str
    assigned_agent: Optional[str] = None
    status_label: str
    duration_days: float
    duration_label: Optional[str] = None
    slack_label: Optional[str] = None
    bar_opacity: float = Field(ge=0.0, le=1.0)


class MilestoneMarkerResponse(BaseSchema):
    """Milestone marker placed on the timeline."""

    name: str
    date: Optional[datetime] = None
    date_label: str
    task_count: int = Field(ge=0)
    position_pct: Optional[float] = Field(None, ge=0.0, le=100.0)


class TimelineLayoutResponse(BaseSchema):
    """Complete Gantt layout for a timeline."""

    date_range: DateRangeResponse
    tasks: List[TaskLayoutResponse]
    milestones: List[MilestoneMarkerResponse] = Field(default_factory=list)
    critical_path_count: int = Field(ge=0)
    header_label: str
    start_label: str
    end_label: str


class LayoutResponse(BaseSchema):
    """Response for the layout endpoint."""

    has_data: bool
    layout: Optional[TimelineLayoutResponse] = None


class RenderResponse(BaseSchema):
    """Response for the text rendering endpoint."""

    has_data: bool
    text: str


# =============================================================================
# Error Schemas
# =============================================================================

class ErrorDetail(BaseSchema):
    """Error detail information."""

    field: Optional[str] = None
    message: str
    code: Optional[str] = None


class ErrorResponse(BaseSchema):
    """Standard error response."""

    error: str
    message: str
    details: List[ErrorDetail] = Field(default_factory=list)
    request_id: Optional[str] = None


# =============================================================================
# Health Check Schemas
# =============================================================================

class HealthResponse(BaseSchema):
    """Health check response."""

    status: str
    version: str
    environment: str
    min_bar_width_pct: float
