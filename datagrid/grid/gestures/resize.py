"""
Column resize tracking (mouse-drag on a header edge).

Widths produced here are floored at the minimum column width; the store
itself stores whatever width it is given.
"""
from typing import Optional, Tuple

from datagrid.core.config import GridSettings


class ColumnResizeTracker:
    """
    Converts horizontal drag movement into column widths.

    Example:
        tracker = ColumnResizeTracker()
        tracker.begin("email", start_x=300, start_width=200)
        column_id, width = tracker.move(250)   # ("email", 150)
        tracker.end()
    """

    def __init__(self, min_width: Optional[int] = None, settings: Optional[GridSettings] = None):
        settings = settings or GridSettings()
        self.min_width = settings.min_column_width if min_width is None else min_width
        self._default_width = settings.default_column_width
        self.column_id: Optional[str] = None
        self._start_x = 0.0
        self._start_width = 0

    @property
    def resizing(self) -> bool:
        return self.column_id is not None

    def begin(self, column_id: str, start_x: float, start_width: Optional[int] = None):
        self.column_id = column_id
        self._start_x = start_x
        self._start_width = self._default_width if start_width is None else start_width

    def move(self, x: float) -> Optional[Tuple[str, int]]:
        """
        Width for the current pointer position.

        Returns:
            (column_id, width) while resizing, None otherwise
        """
        if self.column_id is None:
            return None
        width = max(self.min_width, int(round(self._start_width + (x - self._start_x))))
        return self.column_id, width

    def end(self):
        self.column_id = None
