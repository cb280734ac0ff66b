"""
Timeline Layout API.

Implements the layout endpoints:
- /timeline/layout
- /timeline/render
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from prometheus_client import Counter

from timeline_engine.config import Settings, get_config
from timeline_engine.core import FixedClock, TimelineLayoutEngine, create_engine
from timeline_engine.models.schemas import (
    ErrorResponse,
    LayoutResponse,
    ProjectTimeline,
    RenderResponse,
    TimelineLayoutResponse,
)
from timeline_engine.render import TextGanttRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timeline", tags=["timeline"])

LAYOUT_COUNT = Counter(
    "timeline_layouts_total",
    "Timelines laid out, by whether they had any tasks",
    ["outcome"]
)


# =============================================================================
# Dependencies
# =============================================================================

def get_layout_engine(
    now: Optional[datetime] = Query(
        None,
        description="Pin the current instant used for defaulted dates (ISO-8601)",
    ),
) -> TimelineLayoutEngine:
    """Dependency to get a layout engine, optionally with a pinned clock."""
    clock = FixedClock(now) if now is not None else None
    return create_engine(clock=clock)


def get_renderer(settings: Settings = Depends(get_config)) -> TextGanttRenderer:
    """Dependency to get the text renderer."""
    return TextGanttRenderer(width=settings.layout.render_width)


# =============================================================================
# Layout Endpoints
# =============================================================================

@router.post(
    "/layout",
    response_model=LayoutResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed timeline record"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
)
async def layout_timeline(
    timeline: ProjectTimeline,
    engine: TimelineLayoutEngine = Depends(get_layout_engine),
) -> LayoutResponse:
    """
    Compute the Gantt layout for a project timeline.

    Returns `has_data: false` when the timeline has no tasks.

    **Example Request:**
    ```json
    {
        "project_start_date": "2024-01-01",
        "total_duration_days": 10,
        "tasks": [
            {
                "task_id": "T1",
                "task_name": "Design",
                "start_date": "2024-01-03",
                "duration_days": 2,
                "status": "in_progress",
                "completion_percentage": 50
            }
        ],
        "critical_path": ["T1"]
    }
    ```
    """
    logger.debug(f"Laying out timeline with {len(timeline.tasks)} tasks")
    layout = engine.layout(timeline)
    LAYOUT_COUNT.labels(outcome="no_data" if layout is None else "laid_out").inc()

    if layout is None:
        return LayoutResponse(has_data=False)

    return LayoutResponse(
        has_data=True,
        layout=TimelineLayoutResponse(**layout.to_dict()),
    )


@router.post(
    "/render",
    response_model=RenderResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed timeline record"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
)
async def render_timeline(
    timeline: ProjectTimeline,
    engine: TimelineLayoutEngine = Depends(get_layout_engine),
    renderer: TextGanttRenderer = Depends(get_renderer),
) -> RenderResponse:
    """
    Render a project timeline as a plain-text Gantt chart.
    """
    layout = engine.layout(timeline)
    text = renderer.render(layout)

    return RenderResponse(has_data=layout is not None, text=text)
