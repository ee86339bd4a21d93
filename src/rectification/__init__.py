"""
Perspective Rectifier

Produces a rectified, axis-aligned preview of a corrected quadrilateral
with a two-triangle piecewise-affine warp:
1. Output size from the longer of each pair of parallel sides
2. Closed-form affine solve per triangle (degenerate triangles skipped)
3. Per-triangle clip masks composited into one image
"""

from src.rectification.affine import solve_affine, triangle_determinant
from src.rectification.types import AffineTransform, RectificationResult
from src.rectification.warp import PerspectiveRectifier, rectify_quadrilateral

__all__ = [
    "AffineTransform",
    "PerspectiveRectifier",
    "RectificationResult",
    "rectify_quadrilateral",
    "solve_affine",
    "triangle_determinant",
]
