"""Gesture recognizers: swipe, drag-reorder and column resize."""
from datagrid.grid.gestures.swipe import SwipeDetector, SwipeDirection, SwipeResult, classify_swipe
from datagrid.grid.gestures.drag_reorder import DragReorderTracker
from datagrid.grid.gestures.resize import ColumnResizeTracker

__all__ = [
    "SwipeDetector",
    "SwipeDirection",
    "SwipeResult",
    "classify_swipe",
    "DragReorderTracker",
    "ColumnResizeTracker",
]
