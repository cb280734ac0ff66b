"""
Unit tests for the text Gantt renderer.
"""

from timeline_engine.render import NO_DATA_TEXT, TextGanttRenderer
from timeline_engine.render.text import DONE_CHAR, EMPTY_CHAR, MARKER_CHAR


class TestTextGanttRenderer:
    """Tests for TextGanttRenderer."""

    def test_no_data(self):
        """Test the empty-state text."""
        assert TextGanttRenderer().render(None) == NO_DATA_TEXT

    def test_rows(self, engine, sample_timeline):
        """Test one row per task beneath the header."""
        text = TextGanttRenderer(width=20).render(engine.layout(sample_timeline))
        lines = text.splitlines()

        assert lines[0] == "10 days • 3 tasks"
        assert lines[1] == "Jan 01, 2024 -> Jan 11, 2024"
        assert lines[2].startswith("! Design")
        assert lines[3].startswith("  Backend API")
        assert lines[-1].startswith("* Milestone: 2 tasks completed")

    def test_bar_width_is_fixed(self, engine, sample_timeline):
        """Test that every bar has exactly the configured width."""
        renderer = TextGanttRenderer(width=30)
        layout = engine.layout(sample_timeline)

        for task in layout.tasks:
            assert len(renderer.render_bar(task)) == 30

    def test_completed_task_is_filled(self, engine, sample_timeline):
        """Test that a finished task is drawn fully done."""
        renderer = TextGanttRenderer(width=20)
        design = engine.layout(sample_timeline).tasks[0]

        assert renderer.render_bar(design) == DONE_CHAR * 10 + EMPTY_CHAR * 10

    def test_unplaced_task_marker(self, engine):
        """Test that zero-width tasks are drawn as a marker at the left edge."""
        layout = engine.layout({"tasks": [{"task_id": "T2", "task_name": "Blocked"}]})
        bar = TextGanttRenderer(width=10).render_bar(layout.tasks[0])

        assert bar == MARKER_CHAR + EMPTY_CHAR * 9
