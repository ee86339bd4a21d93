"""
Geometry Utilities

Pure functions over 4-point quadrilaterals:
1. Corner angles and the colour-coded quality tier
2. Display-space / source-space scaling
3. Canonical [tl, tr, br, bl] ordering, area and convexity
4. Rectified dimensions and the default centered quadrilateral
"""

from src.geometry.angles import (
    angle_at,
    average_angle_deviation,
    corner_angles,
    quality_score,
)
from src.geometry.quadrilateral import (
    calculate_edge_lengths,
    default_quadrilateral,
    is_convex,
    order_points,
    predicted_dimensions,
    signed_area,
)
from src.geometry.scaling import (
    compute_display_scale,
    scale_to_display,
    scale_to_source,
)
from src.geometry.types import DEFAULT_TIER_COLORS, QualityThresholds, QualityTier

__all__ = [
    "angle_at",
    "average_angle_deviation",
    "corner_angles",
    "quality_score",
    "calculate_edge_lengths",
    "default_quadrilateral",
    "is_convex",
    "order_points",
    "predicted_dimensions",
    "signed_area",
    "compute_display_scale",
    "scale_to_display",
    "scale_to_source",
    "DEFAULT_TIER_COLORS",
    "QualityThresholds",
    "QualityTier",
]
