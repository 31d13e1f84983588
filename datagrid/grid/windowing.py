"""
Viewport windowing - which rows of a long list must be materialized.

Given a scroll offset and a fixed per-row height, ``compute_window`` returns
the contiguous index range covering the viewport plus an overscan margin on
each side. The computation is O(1); it never scans the row collection.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from loguru import logger

from datagrid.core.config import GridSettings
from datagrid.grid.models.specs import Density


T = TypeVar("T")


@dataclass(frozen=True)
class Window:
    """
    Index range to render (both ends inclusive).

    ``end_index < start_index`` means there is nothing to render.
    """
    start_index: int
    end_index: int
    total_height: float
    render_offset: float

    @property
    def is_empty(self) -> bool:
        return self.end_index < self.start_index

    @property
    def size(self) -> int:
        return max(0, self.end_index - self.start_index + 1)

    @property
    def indices(self) -> range:
        return range(self.start_index, self.end_index + 1)

    def contains(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index

    def slice(self, items: Sequence[T]) -> List[T]:
        """Items of ``items`` that fall inside the window."""
        if self.is_empty:
            return []
        return list(items[self.start_index:self.end_index + 1])


EMPTY_WINDOW = Window(start_index=0, end_index=-1, total_height=0, render_offset=0)


def compute_window(
    item_count: int,
    item_height: float,
    container_height: float,
    overscan: int,
    scroll_offset: float,
) -> Window:
    """
    Compute the visible index range for a scroll position.

    Args:
        item_count: Number of rows in the scrolled list
        item_height: Fixed height of one row
        container_height: Height of the viewport
        overscan: Extra rows rendered above and below the viewport
        scroll_offset: Current scroll position from the top

    Returns:
        Window with inclusive start/end, total scroll extent and the
        offset at which the first rendered row is drawn
    """
    if item_count <= 0 or item_height <= 0:
        return Window(0, -1, max(0, item_count) * max(0, item_height), 0)

    start = max(0, math.floor(scroll_offset / item_height) - overscan)
    end = min(item_count - 1, math.ceil((scroll_offset + container_height) / item_height) + overscan)
    return Window(
        start_index=start,
        end_index=end,
        total_height=item_count * item_height,
        render_offset=start * item_height,
    )


# --- Sizing ---

def item_height_for(density: Density, touch: bool = False, settings: Optional[GridSettings] = None) -> int:
    """Row height for a density in a touch or pointer context."""
    settings = settings or GridSettings()
    heights = settings.item_heights[Density(density).value]
    return heights.touch if touch else heights.pointer


def overscan_for(touch: bool = False, settings: Optional[GridSettings] = None) -> int:
    settings = settings or GridSettings()
    return settings.overscan_touch if touch else settings.overscan_pointer


def container_height_for(touch: bool = False, settings: Optional[GridSettings] = None) -> int:
    settings = settings or GridSettings()
    return settings.container_height_touch if touch else settings.container_height_pointer


class VirtualScroller:
    """
    Tracks scroll state and memoizes the current window.

    The window is recomputed only when the scroll offset, item height,
    container height, overscan or item count changes. Changing the item
    height (a density switch) keeps the scroll offset as is.

    Example:
        scroller = VirtualScroller(item_height=44, container_height=500, overscan=3)
        window = scroller.on_scroll(880, item_count=1000)
        rows_to_draw = window.slice(rows)
    """

    def __init__(self, item_height: float, container_height: float, overscan: int = 3):
        self._item_height = item_height
        self._container_height = container_height
        self._overscan = overscan
        self._scroll_offset: float = 0
        self._item_count = 0
        self._cache_key: Optional[tuple] = None
        self._window: Window = EMPTY_WINDOW

    @classmethod
    def for_density(
        cls,
        density: Density,
        touch: bool = False,
        settings: Optional[GridSettings] = None,
    ) -> "VirtualScroller":
        return cls(
            item_height=item_height_for(density, touch, settings),
            container_height=container_height_for(touch, settings),
            overscan=overscan_for(touch, settings),
        )

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @property
    def item_height(self) -> float:
        return self._item_height

    @property
    def container_height(self) -> float:
        return self._container_height

    @property
    def overscan(self) -> int:
        return self._overscan

    def configure(
        self,
        item_height: Optional[float] = None,
        container_height: Optional[float] = None,
        overscan: Optional[int] = None,
    ):
        if item_height is not None:
            self._item_height = item_height
        if container_height is not None:
            self._container_height = container_height
        if overscan is not None:
            self._overscan = overscan

    def on_scroll(self, offset: float, item_count: Optional[int] = None) -> Window:
        """Record a new scroll position and return the window for it."""
        self._scroll_offset = offset
        return self.window(item_count)

    def window(self, item_count: Optional[int] = None) -> Window:
        if item_count is not None:
            self._item_count = item_count
        key = (
            self._scroll_offset,
            self._item_height,
            self._container_height,
            self._item_count,
            self._overscan,
        )
        if key != self._cache_key:
            self._window = compute_window(
                self._item_count,
                self._item_height,
                self._container_height,
                self._overscan,
                self._scroll_offset,
            )
            self._cache_key = key
            logger.trace(f"Window: {self._window.start_index}-{self._window.end_index}")
        return self._window
