"""
Unit tests for quadrilateral ordering and measurement functions.
"""

from itertools import permutations

import numpy as np
import pytest

from src.common.types import Point, points_from_pairs, points_to_pairs
from src.geometry.quadrilateral import (
    calculate_edge_lengths,
    contour_to_pairs,
    copy_quadrilateral,
    default_quadrilateral,
    is_convex,
    order_points,
    predicted_dimensions,
    signed_area,
)


class TestOrderPoints:
    """Tests for order_points function."""

    def test_tilted_document(self):
        """Unordered contour vertices of a slightly tilted page."""
        ordered = order_points([[10, 50], [60, 5], [70, 55], [15, 10]])

        assert points_to_pairs(ordered) == [[15, 10], [60, 5], [70, 55], [10, 50]]

    def test_rectangle_every_permutation(self):
        """Any input order of a rectangle gives the same canonical winding."""
        corners = [[0, 0], [100, 0], [100, 60], [0, 60]]

        for perm in permutations(corners):
            ordered = order_points(list(perm))

            assert points_to_pairs(ordered) == corners

    def test_trapezoid_permutations_clockwise(self):
        """Canonical order walks clockwise in image coordinates."""
        corners = [[20, 0], [80, 5], [100, 90], [0, 100]]

        for perm in permutations(corners):
            ordered = order_points(list(perm))

            assert signed_area(ordered) > 0
            assert is_convex(ordered)

    def test_accepts_points(self):
        ordered = order_points(points_from_pairs([[1, 1], [0, 0], [1, 0], [0, 1]]))

        assert points_to_pairs(ordered) == [[0, 0], [1, 0], [1, 1], [0, 1]]

    def test_input_not_modified(self):
        raw = [[10, 50], [60, 5], [70, 55], [15, 10]]
        snapshot = [list(p) for p in raw]

        order_points(raw)

        assert raw == snapshot

    def test_wrong_count(self):
        with pytest.raises(ValueError, match="Expected exactly 4 points, got 3"):
            order_points([[0, 0], [1, 0], [1, 1]])


class TestConvexity:
    """Tests for signed_area and is_convex."""

    def test_clockwise_square_positive(self, square_points):
        assert signed_area(square_points) == pytest.approx(10000.0)

    def test_counter_clockwise_negative(self, square_points):
        assert signed_area(list(reversed(square_points))) == pytest.approx(-10000.0)

    def test_bowtie_not_convex(self):
        bowtie = points_from_pairs([[0, 0], [100, 100], [100, 0], [0, 100]])

        assert not is_convex(bowtie)

    def test_collinear_not_convex(self):
        flat = points_from_pairs([[0, 0], [50, 0], [100, 0], [0, 100]])

        assert not is_convex(flat)


class TestDimensions:
    """Tests for edge lengths and predicted rectified dimensions."""

    def test_edge_lengths(self):
        quad = points_from_pairs([[0, 0], [400, 0], [400, 100], [0, 100]])

        top, right, bottom, left = calculate_edge_lengths(quad)

        assert top == pytest.approx(400.0)
        assert right == pytest.approx(100.0)
        assert bottom == pytest.approx(400.0)
        assert left == pytest.approx(100.0)

    def test_takes_longer_parallel_side(self):
        quad = points_from_pairs([[50, 0], [450, 0], [500, 120], [0, 120]])

        width, height = predicted_dimensions(quad)

        assert width == pytest.approx(500.0)
        assert height == pytest.approx(130.0)


class TestDefaultQuadrilateral:
    """Tests for default_quadrilateral function."""

    def test_centered_half(self):
        quad = default_quadrilateral(800, 600)

        assert points_to_pairs(quad) == [
            [200, 150],
            [600, 150],
            [600, 450],
            [200, 450],
        ]

    def test_invalid_fraction(self):
        with pytest.raises(ValueError, match="Fraction must be in"):
            default_quadrilateral(800, 600, 0)


class TestHelpers:
    """Tests for copy_quadrilateral and contour_to_pairs."""

    def test_copy_is_new_list(self, square_points):
        copied = copy_quadrilateral(square_points)

        assert copied == square_points
        assert copied is not square_points
        assert all(a is not b for a, b in zip(copied, square_points))

    def test_contour_to_pairs(self):
        contour = np.array([[[1, 2]], [[3, 4]]], dtype=np.int32)

        assert contour_to_pairs(contour) == [[1.0, 2.0], [3.0, 4.0]]
