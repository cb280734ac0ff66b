"""
Plain-text Gantt renderer for terminals and logs.
"""

from typing import Optional

from timeline_engine.core.engine import TaskLayout, TimelineLayout

NO_DATA_TEXT = "No timeline data"

DONE_CHAR = "█"
REMAINING_CHAR = "▓"
CRITICAL_REMAINING_CHAR = "▒"
EMPTY_CHAR = "░"
MARKER_CHAR = "|"


class TextGanttRenderer:
    """Draws a TimelineLayout as fixed-width text rows."""

    def __init__(self, width: int = 60, name_width: int = 24):
        self.width = max(10, width)
        self.name_width = max(4, name_width)

    def render(self, layout: Optional[TimelineLayout]) -> str:
        if layout is None:
            return NO_DATA_TEXT

        lines = [
            layout.header_label,
            f"{layout.start_label} -> {layout.end_label}",
        ]
        lines.extend(self.render_row(task) for task in layout.tasks)

        for marker in layout.milestones:
            lines.append(f"* {marker.name} ({marker.date_label}, {marker.task_count} tasks)")

        return "\n".join(lines)

    def render_row(self, task: TaskLayout) -> str:
        name = task.task_name[: self.name_width].ljust(self.name_width)
        flag = "!" if task.is_critical else " "
        return f"{flag} {name} {self.render_bar(task)} {task.completion_pct:.0f}%"

    def render_bar(self, task: TaskLayout) -> str:
        """Bar of exactly `width` cells."""
        cells = [EMPTY_CHAR] * self.width

        start = min(self.width - 1, int(round(task.left_pct / 100 * self.width)))
        if task.width_pct <= 0:
            cells[start] = MARKER_CHAR
            return "".join(cells)

        length = max(1, int(round(task.width_pct / 100 * self.width)))
        end = min(self.width, start + length)
        done = int(round((end - start) * task.completion_pct / 100))

        remaining = CRITICAL_REMAINING_CHAR if task.is_critical else REMAINING_CHAR
        for index in range(start, end):
            cells[index] = DONE_CHAR if index - start < done else remaining

        return "".join(cells)
