"""
Unit tests for the click-to-place point picker.
"""

import numpy as np
import pytest

from src.common.types import Point
from src.editor.point_picker import PointPicker
from src.editor.types import PointLimitReached


class TestPointPicker:
    """Tests for PointPicker class."""

    def test_click_rounds_to_pixels(self):
        picker = PointPicker()

        point = picker.click(10.4, 20.6)

        assert point == Point(x=10, y=21)

    def test_fifth_click_rejected(self):
        picker = PointPicker()
        for x, y in [(0, 0), (10, 0), (10, 10), (0, 10)]:
            picker.click(x, y)

        with pytest.raises(PointLimitReached):
            picker.click(5, 5)
        assert len(picker.points) == 4

    def test_confirm_requires_all_points(self):
        picker = PointPicker()
        picker.click(1, 1)

        with pytest.raises(ValueError, match="Select 4 points, got 1"):
            picker.confirm()

    def test_confirm_returns_pairs_in_click_order(self):
        picker = PointPicker()
        for x, y in [(0, 0), (10, 0), (10, 10), (0, 10)]:
            picker.click(x, y)

        assert picker.is_complete
        assert picker.confirm() == [[0, 0], [10, 0], [10, 10], [0, 10]]

    def test_undo_and_reset(self):
        picker = PointPicker()
        picker.click(1, 1)
        picker.click(2, 2)

        picker.undo()
        assert picker.points == [Point(x=1, y=1)]

        picker.reset()
        assert picker.points == []
        picker.undo()

    def test_render_markers(self):
        picker = PointPicker()
        picker.click(20, 20)
        frame = np.zeros((50, 50, 3), dtype=np.uint8)

        canvas = picker.render(frame)

        assert canvas[20, 20].any()
        assert not frame.any()
