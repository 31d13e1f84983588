"""
Swipe detection for touch pagination.

A gesture is classified only when the pointer is released: it is a swipe
when it travelled far enough, fast enough. Move events just track the
pointer and never navigate on their own.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from datagrid.core.clock import monotonic_ms
from datagrid.core.config import GridSettings


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class SwipeResult:
    direction: SwipeDirection
    distance: float
    elapsed_ms: float


def classify_swipe(
    dx: float,
    dy: float,
    elapsed_ms: float,
    min_distance: float = 50,
    max_duration_ms: float = 300,
) -> Optional[SwipeDirection]:
    """
    Classify a completed pointer movement.

    Args:
        dx: Horizontal travel (positive to the right)
        dy: Vertical travel (positive downwards)
        elapsed_ms: Time between press and release
        min_distance: Travel must exceed this
        max_duration_ms: Gesture must finish faster than this

    Returns:
        Direction of the dominant axis, or None if this was not a swipe
    """
    distance = math.hypot(dx, dy)
    if not (distance > min_distance and elapsed_ms < max_duration_ms):
        return None
    if abs(dx) > abs(dy):
        return SwipeDirection.RIGHT if dx > 0 else SwipeDirection.LEFT
    return SwipeDirection.DOWN if dy > 0 else SwipeDirection.UP


class SwipeDetector:
    """
    Press/move/release tracker producing a swipe classification on release.

    The clock returns milliseconds and is injectable for tests.

    Example:
        detector = SwipeDetector()
        detector.press(200, 100)
        detector.move(120, 104)
        result = detector.release()   # SwipeResult(LEFT, ...) if fast enough
    """

    def __init__(
        self,
        clock: Callable[[], float] = monotonic_ms,
        settings: Optional[GridSettings] = None,
    ):
        settings = settings or GridSettings()
        self._clock = clock
        self._min_distance = settings.swipe_min_distance
        self._max_duration_ms = settings.swipe_max_duration_ms
        self.start_x = 0.0
        self.start_y = 0.0
        self.current_x = 0.0
        self.current_y = 0.0
        self.active = False
        self._started_at = 0.0
        self.last_result: Optional[SwipeResult] = None

    @property
    def delta(self) -> tuple[float, float]:
        return self.current_x - self.start_x, self.current_y - self.start_y

    def press(self, x: float, y: float):
        """Start tracking at (x, y) and reset any previous classification."""
        self.start_x = self.current_x = x
        self.start_y = self.current_y = y
        self._started_at = self._clock()
        self.active = True
        self.last_result = None

    def move(self, x: float, y: float):
        if not self.active:
            return
        self.current_x = x
        self.current_y = y

    def release(self) -> Optional[SwipeResult]:
        """
        Finish the gesture and classify it.

        Returns:
            SwipeResult for a swipe, None otherwise (including a release
            without a preceding press)
        """
        if not self.active:
            return None
        self.active = False

        dx, dy = self.delta
        elapsed = self._clock() - self._started_at
        direction = classify_swipe(dx, dy, elapsed, self._min_distance, self._max_duration_ms)
        if direction is None:
            return None

        self.last_result = SwipeResult(direction, math.hypot(dx, dy), elapsed)
        logger.debug(f"Swipe {direction.value}: {self.last_result.distance:.0f}px in {elapsed:.0f}ms")
        return self.last_result
