"""
Quadrilateral functions for the Geometry module.

Canonical corner ordering, edge lengths and rectified dimensions, polygon
area and convexity, and the default quadrilateral used when no detector
result is available.

All functions treat their input as read-only and return new values.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from src.common.types import NUM_CORNERS, Point, Quadrilateral, validate_quadrilateral

logger = logging.getLogger(__name__)


def order_points(raw_points: Sequence[Sequence[float]]) -> Quadrilateral:
    """
    Order 4 raw contour vertices as [Top-Left, Top-Right, Bottom-Right, Bottom-Left].

    Algorithm:
    - Sort by Y ascending.
    - The first two are the top pair: sorted by X they give (tl, tr).
    - The last two are the bottom pair: sorted by X they give (bl, br),
      emitted reversed at positions 2 and 3.

    This split by raw Y is a heuristic: it does not recover the visual top
    of a strongly rotated document.

    Args:
        raw_points: 4 points as ``[x, y]`` pairs or Points, in any order.
                    The input is not modified.

    Returns:
        New list of 4 Points in canonical order.

    Raises:
        ValueError: If input does not contain exactly 4 points.

    Example:
        >>> order_points([[10, 50], [60, 5], [70, 55], [15, 10]])
        [Point(x=15.0, y=10.0), Point(x=60.0, y=5.0), Point(x=70.0, y=55.0), Point(x=10.0, y=50.0)]
    """
    points = [p if isinstance(p, Point) else Point.from_list(list(p)) for p in raw_points]
    if len(points) != NUM_CORNERS:
        raise ValueError(f"Expected exactly 4 points, got {len(points)}")

    by_y = sorted(points, key=lambda p: p.y)
    top = sorted(by_y[:2], key=lambda p: p.x)
    bottom = sorted(by_y[2:], key=lambda p: p.x)

    ordered = [top[0], top[1], bottom[1], bottom[0]]
    logger.debug(
        f"Ordered points: TL={ordered[0]}, TR={ordered[1]}, "
        f"BR={ordered[2]}, BL={ordered[3]}"
    )
    return ordered


def signed_area(quad: Sequence[Point]) -> float:
    """
    Signed polygon area (shoelace formula) walking the points in order.

    Positive for clockwise order in image coordinates (y pointing down),
    negative for counter-clockwise.
    """
    area = 0.0
    n = len(quad)
    for i in range(n):
        p1, p2 = quad[i], quad[(i + 1) % n]
        area += p1.x * p2.y - p2.x * p1.y
    return area / 2.0


def is_convex(quad: Sequence[Point], eps: float = 1e-6) -> bool:
    """
    Check if 4 ordered points form a convex, non-self-intersecting quadrilateral.

    For each consecutive edge pair (P1->P2, P2->P3) the 2D cross product
    is computed. The quadrilateral is convex when all 4 cross products share
    the same sign. A "bowtie" ordering yields mixed signs.
    """
    validate_quadrilateral(quad)

    cross_products = []
    for i in range(NUM_CORNERS):
        p1, p2, p3 = quad[i], quad[(i + 1) % NUM_CORNERS], quad[(i + 2) % NUM_CORNERS]
        v1x, v1y = p2.x - p1.x, p2.y - p1.y
        v2x, v2y = p3.x - p2.x, p3.y - p2.y
        cross_products.append(v1x * v2y - v1y * v2x)

    convex = all(cp > eps for cp in cross_products) or all(
        cp < -eps for cp in cross_products
    )
    if not convex:
        logger.debug(f"Non-convex quadrilateral, cross products: {cross_products}")
    return convex


def calculate_edge_lengths(quad: Sequence[Point]) -> Tuple[float, float, float, float]:
    """
    Length of all 4 edges of a quadrilateral.

    Args:
        quad: 4 corner points in order [TL, TR, BR, BL].

    Returns:
        Tuple of (top_edge, right_edge, bottom_edge, left_edge) lengths.

    Example:
        >>> quad = [Point(x=100, y=100), Point(x=400, y=100), Point(x=400, y=200), Point(x=100, y=200)]
        >>> calculate_edge_lengths(quad)
        (300.0, 100.0, 300.0, 100.0)
    """
    validate_quadrilateral(quad)
    tl, tr, br, bl = quad
    return (
        tr.distance_to(tl),
        br.distance_to(tr),
        br.distance_to(bl),
        bl.distance_to(tl),
    )


def predicted_dimensions(quad: Sequence[Point]) -> Tuple[float, float]:
    """
    Width and height of the rectified image for ``quad``.

    Takes the larger of the two parallel-side estimates on each axis so a
    non-rectangular quadrilateral is never under-cropped:
    ``width = max(|tr-tl|, |br-bl|)``, ``height = max(|bl-tl|, |br-tr|)``.
    """
    top, right, bottom, left = calculate_edge_lengths(quad)
    width = max(top, bottom)
    height = max(left, right)
    logger.debug(f"Predicted dimensions: {width:.1f} x {height:.1f}")
    return width, height


def default_quadrilateral(
    display_width: float, display_height: float, fraction: float = 0.5
) -> Quadrilateral:
    """
    Centered rectangle covering ``fraction`` of the display on each axis.

    Used when no initial points were supplied for an image.

    Example:
        >>> default_quadrilateral(800, 600)
        [Point(x=200.0, y=150.0), Point(x=600.0, y=150.0), Point(x=600.0, y=450.0), Point(x=200.0, y=450.0)]
    """
    if not 0 < fraction <= 1:
        raise ValueError(f"Fraction must be in (0, 1], got {fraction}")

    width = display_width * fraction
    height = display_height * fraction
    left = (display_width - width) / 2
    top = (display_height - height) / 2

    return [
        Point(x=left, y=top),
        Point(x=left + width, y=top),
        Point(x=left + width, y=top + height),
        Point(x=left, y=top + height),
    ]


def copy_quadrilateral(quad: Sequence[Point]) -> List[Point]:
    """New list holding new Point instances equal to ``quad``."""
    return [Point(x=p.x, y=p.y) for p in quad]


def contour_to_pairs(contour: np.ndarray) -> List[List[float]]:
    """Flatten an OpenCV contour of shape (N, 1, 2) into ``[[x, y], ...]``."""
    return np.asarray(contour).reshape(-1, 2).astype(float).tolist()
