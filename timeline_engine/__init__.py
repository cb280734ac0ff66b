"""
Timeline Layout Engine

Turns the project timeline produced by each simulation turn into Gantt chart
coordinates and task classifications that any renderer can draw.
"""

__version__ = "1.0.0"
__author__ = "Synthetic Workforce Team"
