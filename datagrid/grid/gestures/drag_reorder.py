"""
Drag-reorder tracking for column headers.
"""
from typing import Callable, Optional

from loguru import logger


class DragReorderTracker:
    """
    Tracks a press-and-drag reorder gesture.

    ``drop`` reports (from, to) through a callback when the item actually
    moved. Both ``drop`` and ``end`` return the tracker to idle, so an
    aborted drag can never leave it stuck.

    Example:
        tracker = DragReorderTracker()
        tracker.start(2)
        tracker.over(4)
        tracker.drop(4, lambda src, dst: store.dispatch(ReorderColumns(src, dst)))
    """

    IDLE_INDEX = -1

    def __init__(self):
        self.dragging = False
        self.dragged_index = self.IDLE_INDEX
        self.drop_target_index: Optional[int] = None

    def start(self, index: int):
        self.dragging = True
        self.dragged_index = index
        self.drop_target_index = None

    def over(self, index: int):
        """Update the hovered drop target (fires repeatedly while dragging)."""
        if self.dragging:
            self.drop_target_index = index

    def drop(self, target_index: int, on_reorder: Callable[[int, int], None]) -> bool:
        """
        Complete the drag on ``target_index``.

        Returns:
            True if ``on_reorder`` was invoked
        """
        source = self.dragged_index
        moved = self.dragging and source != self.IDLE_INDEX and source != target_index
        try:
            if moved:
                logger.debug(f"Reorder column {source} → {target_index}")
                on_reorder(source, target_index)
        finally:
            self.end()
        return moved

    def end(self):
        """Abort or finish the drag and reset to idle."""
        self.dragging = False
        self.dragged_index = self.IDLE_INDEX
        self.drop_target_index = None
