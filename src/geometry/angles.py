"""
Corner-angle functions for the Geometry module.

Scores how close a quadrilateral is to a rectangle, to give the user a
low-noise, colour-coded signal while dragging the corner handles.
"""

import logging
import math
from typing import List, Optional, Sequence

from src.common.types import NUM_CORNERS, Point
from src.geometry.types import QualityThresholds, QualityTier

logger = logging.getLogger(__name__)


def angle_at(vertex_prev: Point, vertex: Point, vertex_next: Point) -> float:
    """
    Angle in degrees (0-180) at ``vertex`` between the vectors to its neighbours.

    Uses ``acos(dot / (|v1| * |v2|))``. Returns NaN when either vector has
    zero magnitude (coincident points), which is expected while two handles
    momentarily overlap mid-drag.

    Example:
        >>> angle_at(Point(x=0, y=10), Point(x=0, y=0), Point(x=10, y=0))
        90.0
    """
    v1x, v1y = vertex_prev.x - vertex.x, vertex_prev.y - vertex.y
    v2x, v2y = vertex_next.x - vertex.x, vertex_next.y - vertex.y

    magnitude = math.hypot(v1x, v1y) * math.hypot(v2x, v2y)
    if magnitude == 0:
        return math.nan

    cosine = (v1x * v2x + v1y * v2y) / magnitude
    # Clamp floating point overshoot, acos is undefined outside [-1, 1]
    cosine = max(-1.0, min(1.0, cosine))
    return math.degrees(math.acos(cosine))


def corner_angles(quad: Sequence[Point]) -> List[float]:
    """
    Interior angles at tl, tr, br, bl, each measured against its wrap-around
    neighbours.

    Raises:
        ValueError: If ``quad`` does not contain 4 points.
    """
    if len(quad) != NUM_CORNERS:
        raise ValueError(f"Expected 4 points, got {len(quad)}")

    return [
        angle_at(quad[(i - 1) % NUM_CORNERS], quad[i], quad[(i + 1) % NUM_CORNERS])
        for i in range(NUM_CORNERS)
    ]


def average_angle_deviation(quad: Sequence[Point]) -> float:
    """Mean of ``|90 - angle|`` over the 4 corners. NaN if any corner is degenerate."""
    angles = corner_angles(quad)
    return sum(abs(90.0 - a) for a in angles) / NUM_CORNERS


def quality_score(
    quad: Sequence[Point], thresholds: Optional[QualityThresholds] = None
) -> QualityTier:
    """
    Map a quadrilateral to a 3-level quality tier.

    - fewer than 4 points, or a degenerate corner: NEUTRAL
    - average deviation < 5: GOOD
    - average deviation < 15: FAIR
    - otherwise: POOR

    Boundary values fall into the better tier only below the threshold,
    i.e. exactly 5.0 is FAIR.

    Example:
        >>> square = [Point(x=0, y=0), Point(x=10, y=0), Point(x=10, y=10), Point(x=0, y=10)]
        >>> quality_score(square)
        <QualityTier.GOOD: 'good'>
    """
    thresholds = thresholds or QualityThresholds()

    if len(quad) < NUM_CORNERS:
        return QualityTier.NEUTRAL

    deviation = average_angle_deviation(quad[:NUM_CORNERS])
    if math.isnan(deviation):
        logger.debug("Degenerate corner in quadrilateral, quality not evaluable")
        return QualityTier.NEUTRAL

    if deviation < thresholds.good_below:
        tier = QualityTier.GOOD
    elif deviation < thresholds.fair_below:
        tier = QualityTier.FAIR
    else:
        tier = QualityTier.POOR

    logger.debug(f"Average angle deviation {deviation:.2f} -> {tier.value}")
    return tier
