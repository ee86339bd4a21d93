"""
Unit tests for the closed-form affine solve.
"""

import random

import numpy as np
import pytest

from src.common.types import Point, points_from_pairs
from src.rectification.affine import solve_affine, triangle_determinant
from src.rectification.types import AffineTransform


class TestTriangleDeterminant:
    """Tests for triangle_determinant function."""

    def test_unit_triangle(self):
        tri = points_from_pairs([[0, 0], [1, 0], [0, 1]])

        assert triangle_determinant(tri) == pytest.approx(1.0)

    def test_collinear_is_zero(self):
        tri = points_from_pairs([[0, 0], [5, 5], [10, 10]])

        assert triangle_determinant(tri) == 0


class TestSolveAffine:
    """Tests for solve_affine function."""

    def test_identity(self):
        tri = points_from_pairs([[0, 0], [10, 0], [0, 10]])

        transform = solve_affine(tri, tri)

        np.testing.assert_allclose(
            transform.as_matrix(), [[1, 0, 0], [0, 1, 0]], atol=1e-12
        )

    def test_scale_and_translate(self):
        src = points_from_pairs([[0, 0], [1, 0], [0, 1]])
        dst = points_from_pairs([[5, 7], [7, 7], [5, 10]])

        transform = solve_affine(src, dst)

        assert transform == AffineTransform(a=2, b=0, c=5, d=0, e=3, f=7)

    def test_maps_vertices_exactly(self):
        """The solved transform maps each source vertex onto its destination."""
        rng = random.Random(3)
        for _ in range(25):
            src = [
                Point(x=rng.uniform(-500, 500), y=rng.uniform(-500, 500))
                for _ in range(3)
            ]
            dst = [
                Point(x=rng.uniform(0, 800), y=rng.uniform(0, 800)) for _ in range(3)
            ]
            if abs(triangle_determinant(src)) < 1000.0:
                continue

            transform = solve_affine(src, dst)

            for s, d in zip(src, dst):
                u, v = transform.apply(s.x, s.y)
                assert u == pytest.approx(d.x, abs=1e-6)
                assert v == pytest.approx(d.y, abs=1e-6)

    def test_degenerate_source_returns_none(self):
        src = points_from_pairs([[0, 0], [50, 0], [100, 0]])
        dst = points_from_pairs([[0, 0], [100, 0], [0, 100]])

        assert solve_affine(src, dst) is None

    def test_coincident_source_returns_none(self):
        src = points_from_pairs([[3, 3], [3, 3], [10, 20]])
        dst = points_from_pairs([[0, 0], [100, 0], [0, 100]])

        assert solve_affine(src, dst) is None

    def test_wrong_point_count(self):
        src = points_from_pairs([[0, 0], [1, 0]])
        dst = points_from_pairs([[0, 0], [1, 0], [0, 1]])

        with pytest.raises(ValueError, match="Expected two triangles"):
            solve_affine(src, dst)
