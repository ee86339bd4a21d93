"""
Common types shared across all modules.

Standardized point, size and rectangle types for the geometry utilities,
the point editor, the rectifier and the live contour detector.
"""

from src.common.types import (
    CORNER_LABELS,
    Point,
    Quadrilateral,
    Rect,
    Size,
    points_from_pairs,
    points_to_numpy,
    points_to_pairs,
)

__all__ = [
    "CORNER_LABELS",
    "Point",
    "Quadrilateral",
    "Rect",
    "Size",
    "points_from_pairs",
    "points_to_numpy",
    "points_to_pairs",
]
