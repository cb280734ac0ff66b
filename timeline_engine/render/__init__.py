"""
Renderers package.
"""

from timeline_engine.render.text import NO_DATA_TEXT, TextGanttRenderer

__all__ = [
    "NO_DATA_TEXT",
    "TextGanttRenderer",
]
