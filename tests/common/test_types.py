"""
Unit tests for common type definitions.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from src.common.types import (
    Point,
    Rect,
    Size,
    points_from_pairs,
    points_to_numpy,
    points_to_pairs,
    validate_quadrilateral,
)


class TestPoint:
    """Tests for Point model."""

    def test_converts_to_float(self):
        """Integer and numpy coordinates are stored as floats."""
        point = Point(x=3, y=np.int32(4))

        assert isinstance(point.x, float)
        assert isinstance(point.y, float)
        assert point.to_list() == [3.0, 4.0]

    def test_rejects_non_numeric(self):
        with pytest.raises(ValidationError):
            Point(x="a", y=1)

    def test_is_immutable(self):
        point = Point(x=1, y=2)

        with pytest.raises(ValidationError):
            point.x = 5

    def test_from_list_wrong_length(self):
        with pytest.raises(ValueError, match="Expected list with 2 elements"):
            Point.from_list([1, 2, 3])

    def test_from_numpy(self):
        point = Point.from_numpy(np.array([1.5, 2.5]))

        assert point.to_tuple() == (1.5, 2.5)

    def test_distance(self):
        assert Point(x=0, y=0).distance_to(Point(x=3, y=4)) == pytest.approx(5.0)

    def test_to_int_tuple_rounds(self):
        assert Point(x=1.6, y=2.4).to_int_tuple() == (2, 2)


class TestRect:
    """Tests for Rect model."""

    def test_edges(self):
        rect = Rect(x=10, y=20, width=30, height=40)

        assert rect.right == 40
        assert rect.bottom == 60

    def test_contains_edges(self):
        rect = Rect(x=0, y=0, width=10, height=10)

        assert rect.contains(0, 0)
        assert rect.contains(10, 10)
        assert not rect.contains(10.1, 5)

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            Rect(x=0, y=0, width=-1, height=10)

    def test_corners_canonical_order(self):
        corners = Rect(x=0, y=0, width=4, height=2).corners()

        assert points_to_pairs(corners) == [[0, 0], [4, 0], [4, 2], [0, 2]]


class TestConversions:
    """Tests for point list conversion helpers."""

    def test_from_pairs_accepts_mixed_inputs(self):
        points = points_from_pairs([[1, 2], {"x": 3, "y": 4}, Point(x=5, y=6)])

        assert points_to_pairs(points) == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]

    def test_to_numpy_shape(self):
        arr = points_to_numpy([Point(x=1, y=2), Point(x=3, y=4)])

        assert arr.shape == (2, 2)
        assert arr.dtype == np.float32

    def test_size_to_dict(self):
        assert Size(width=800, height=600).to_dict() == {"width": 800, "height": 600}

    def test_validate_quadrilateral(self, square_points):
        validate_quadrilateral(square_points)

        with pytest.raises(ValueError, match="Expected exactly 4 points, got 3"):
            validate_quadrilateral(square_points[:3])
