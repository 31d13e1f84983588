"""
DataGrid - headless data grid engine.

A UI-independent engine for tabular data: multi-key sorting, per-column
filtering, global search, pagination, row selection, column management,
viewport windowing, swipe/drag/resize gestures and preference persistence.
"""

__version__ = "0.1.0"
