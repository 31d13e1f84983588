"""
Tests for swipe classification, drag-reorder and column resize tracking.
"""
from unittest.mock import MagicMock

import pytest

from datagrid.core.config import GridSettings
from datagrid.grid.gestures import (
    ColumnResizeTracker,
    DragReorderTracker,
    SwipeDetector,
    SwipeDirection,
    classify_swipe,
)


class TestClassifySwipe:
    def test_fast_left_swipe(self):
        assert classify_swipe(-80, 0, 200) == SwipeDirection.LEFT

    @pytest.mark.parametrize("dx,dy,expected", [
        (80, 10, SwipeDirection.RIGHT),
        (10, 80, SwipeDirection.DOWN),
        (-10, -80, SwipeDirection.UP),
    ])
    def test_dominant_axis(self, dx, dy, expected):
        assert classify_swipe(dx, dy, 100) == expected

    def test_too_short(self):
        assert classify_swipe(-50, 0, 100) is None
        assert classify_swipe(-30, -30, 100) is None

    def test_too_slow(self):
        assert classify_swipe(-200, 0, 300) is None
        assert classify_swipe(-200, 0, 299) == SwipeDirection.LEFT

    def test_diagonal_distance_counts(self):
        # 40/40 travels ~56.6 in total
        assert classify_swipe(-40, 40, 100) is not None


class TestSwipeDetector:
    def test_left_swipe(self, clock):
        detector = SwipeDetector(clock)

        detector.press(300, 100)
        clock.advance(120)
        detector.move(250, 102)
        clock.advance(80)
        detector.move(220, 104)
        result = detector.release()

        assert result.direction == SwipeDirection.LEFT
        assert result.distance == pytest.approx((80 ** 2 + 4 ** 2) ** 0.5)
        assert result.elapsed_ms == 200
        assert detector.last_result is result
        assert not detector.active

    def test_slow_drag_is_not_a_swipe(self, clock):
        detector = SwipeDetector(clock)

        detector.press(300, 100)
        detector.move(100, 100)
        clock.advance(500)

        assert detector.release() is None

    def test_move_never_classifies(self, clock):
        detector = SwipeDetector(clock)

        detector.press(300, 100)
        detector.move(100, 100)

        assert detector.last_result is None
        assert detector.active

    def test_release_without_press(self, clock):
        detector = SwipeDetector(clock)

        assert detector.release() is None

    def test_move_without_press_is_ignored(self, clock):
        detector = SwipeDetector(clock)

        detector.move(500, 500)

        assert detector.delta == (0, 0)

    def test_custom_thresholds(self, clock):
        settings = GridSettings(swipe_min_distance=100, swipe_max_duration_ms=1000)
        detector = SwipeDetector(clock, settings)

        detector.press(300, 0)
        detector.move(220, 0)
        clock.advance(500)
        assert detector.release() is None

        detector.press(300, 0)
        detector.move(150, 0)
        clock.advance(500)
        assert detector.release().direction == SwipeDirection.LEFT


class TestDragReorderTracker:
    def test_drop_reorders(self):
        tracker = DragReorderTracker()
        on_reorder = MagicMock()

        tracker.start(2)
        tracker.over(3)
        tracker.over(4)
        assert tracker.drop_target_index == 4

        assert tracker.drop(4, on_reorder)
        on_reorder.assert_called_once_with(2, 4)
        assert not tracker.dragging
        assert tracker.dragged_index == DragReorderTracker.IDLE_INDEX

    def test_drop_on_self_does_nothing(self):
        tracker = DragReorderTracker()
        on_reorder = MagicMock()

        tracker.start(2)

        assert not tracker.drop(2, on_reorder)
        on_reorder.assert_not_called()

    def test_drop_without_start_does_nothing(self):
        tracker = DragReorderTracker()
        on_reorder = MagicMock()

        assert not tracker.drop(1, on_reorder)
        on_reorder.assert_not_called()

    def test_over_without_drag_is_ignored(self):
        tracker = DragReorderTracker()

        tracker.over(3)

        assert tracker.drop_target_index is None

    def test_end_resets(self):
        tracker = DragReorderTracker()
        tracker.start(1)
        tracker.over(2)

        tracker.end()

        assert not tracker.dragging
        assert tracker.drop_target_index is None

    def test_failing_callback_still_resets(self):
        tracker = DragReorderTracker()
        tracker.start(0)

        with pytest.raises(RuntimeError):
            tracker.drop(3, MagicMock(side_effect=RuntimeError("boom")))

        assert not tracker.dragging


class TestColumnResizeTracker:
    def test_resize(self):
        tracker = ColumnResizeTracker()

        tracker.begin("email", start_x=300, start_width=200)

        assert tracker.resizing
        assert tracker.move(340) == ("email", 240)
        assert tracker.move(250) == ("email", 150)

    def test_floor(self):
        tracker = ColumnResizeTracker()
        tracker.begin("email", start_x=300, start_width=200)

        assert tracker.move(0) == ("email", 50)

    def test_default_start_width(self):
        tracker = ColumnResizeTracker()
        tracker.begin("name", start_x=0)

        assert tracker.move(10) == ("name", 160)

    def test_custom_floor(self):
        tracker = ColumnResizeTracker(min_width=80)
        tracker.begin("name", start_x=0, start_width=100)

        assert tracker.move(-100) == ("name", 80)

    def test_end(self):
        tracker = ColumnResizeTracker()
        tracker.begin("name", start_x=0)

        tracker.end()

        assert not tracker.resizing
        assert tracker.move(50) is None
