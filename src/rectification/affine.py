"""
Closed-form affine solve between two triangles.
"""

import logging
from typing import Optional, Sequence

from src.common.types import Point
from src.rectification.types import AffineTransform

logger = logging.getLogger(__name__)

DETERMINANT_EPSILON = 1e-9


def triangle_determinant(tri: Sequence[Point]) -> float:
    """Twice the signed area of the triangle; zero for collinear vertices."""
    (x0, y0), (x1, y1), (x2, y2) = (p.to_tuple() for p in tri)
    return x0 * (y1 - y2) + x1 * (y2 - y0) + x2 * (y0 - y1)


def solve_affine(
    src: Sequence[Point], dst: Sequence[Point]
) -> Optional[AffineTransform]:
    """
    Solve the affine transform mapping the 3 ``src`` vertices onto ``dst``.

    The source vertex matrix is inverted with the determinant formula.
    Collinear or coincident source vertices give a zero determinant; the
    transform is then undefined and None is returned instead of dividing
    by zero.

    Args:
        src: Source triangle, 3 points.
        dst: Destination triangle, 3 points.

    Returns:
        AffineTransform, or None for a degenerate source triangle.

    Raises:
        ValueError: If either triangle does not have 3 points.

    Example:
        >>> t = solve_affine(
        ...     [Point(x=0, y=0), Point(x=1, y=0), Point(x=0, y=1)],
        ...     [Point(x=0, y=0), Point(x=2, y=0), Point(x=0, y=2)],
        ... )
        >>> t.apply(1, 1)
        (2.0, 2.0)
    """
    if len(src) != 3 or len(dst) != 3:
        raise ValueError(
            f"Expected two triangles of 3 points, got {len(src)} and {len(dst)}"
        )

    det = triangle_determinant(src)
    if abs(det) < DETERMINANT_EPSILON:
        logger.debug(f"Degenerate source triangle (det={det}), skipping")
        return None

    (x0, y0), (x1, y1), (x2, y2) = (p.to_tuple() for p in src)
    (u0, v0), (u1, v1), (u2, v2) = (p.to_tuple() for p in dst)

    a = (u0 * (y1 - y2) + u1 * (y2 - y0) + u2 * (y0 - y1)) / det
    b = (u0 * (x2 - x1) + u1 * (x0 - x2) + u2 * (x1 - x0)) / det
    c = (
        u0 * (x1 * y2 - x2 * y1)
        + u1 * (x2 * y0 - x0 * y2)
        + u2 * (x0 * y1 - x1 * y0)
    ) / det
    d = (v0 * (y1 - y2) + v1 * (y2 - y0) + v2 * (y0 - y1)) / det
    e = (v0 * (x2 - x1) + v1 * (x0 - x2) + v2 * (x1 - x0)) / det
    f = (
        v0 * (x1 * y2 - x2 * y1)
        + v1 * (x2 * y0 - x0 * y2)
        + v2 * (x0 * y1 - x1 * y0)
    ) / det

    return AffineTransform(a=a, b=b, c=c, d=d, e=e, f=f)
