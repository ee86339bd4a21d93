"""
Two-triangle (piecewise-affine) perspective rectifier.

Unwarps a photographed quadrilateral into an axis-aligned rectangle without
a full homography: the quadrilateral is split along its tr-bl diagonal and
each triangle is mapped onto the matching half of the destination rectangle
with its own affine transform, clipped to that half.
"""

import logging
from typing import Optional, Sequence

import cv2
import numpy as np

from src.common.types import Point, validate_quadrilateral
from src.geometry.quadrilateral import predicted_dimensions
from src.rectification.affine import solve_affine
from src.rectification.types import RectificationResult

logger = logging.getLogger(__name__)

INTERPOLATION_FLAGS = {
    "linear": cv2.INTER_LINEAR,
    "cubic": cv2.INTER_CUBIC,
    "nearest": cv2.INTER_NEAREST,
    "area": cv2.INTER_AREA,
    "lanczos": cv2.INTER_LANCZOS4,
}


class PerspectiveRectifier:
    """
    Rectify a [tl, tr, br, bl] quadrilateral of an image.

    The rectifier holds no state between calls: every call recomputes the
    whole warp from the current points.

    Example:
        >>> rectifier = PerspectiveRectifier()
        >>> image = cv2.imread("form.jpg")
        >>> quad = [Point(x=12, y=8), Point(x=410, y=20), Point(x=400, y=560), Point(x=5, y=540)]
        >>> result = rectifier.rectify(image, quad, scale=0.5)
        >>> preview = result.to_data_url()
    """

    def __init__(self, interpolation: str = "linear"):
        if interpolation not in INTERPOLATION_FLAGS:
            raise ValueError(
                f"Invalid interpolation: {interpolation}. "
                f"Must be one of {list(INTERPOLATION_FLAGS)}"
            )
        self.interpolation = interpolation

    def rectify(
        self, image: np.ndarray, quad: Sequence[Point], scale: float = 1.0
    ) -> RectificationResult:
        """
        Warp the region of ``image`` bounded by ``quad`` into a rectangle.

        Args:
            image: Source image (H, W) or (H, W, C) at full resolution.
            quad: 4 corner points in display space, order [TL, TR, BR, BL].
                  Not modified.
            scale: Display-to-source ratio. The source image is shrunk by it
                   so that it lines up with the display-space points.

        Returns:
            RectificationResult. Triangles whose source vertices are collinear
            are skipped and counted rather than raising.

        Raises:
            ValueError: If the image is empty or ``quad`` does not hold 4 points.
        """
        if image is None or image.size == 0:
            raise ValueError("Invalid input image: image is None or empty")
        validate_quadrilateral(quad)

        tl, tr, br, bl = quad
        width_f, height_f = predicted_dimensions(quad)
        width, height = int(round(width_f)), int(round(height_f))

        if width < 1 or height < 1:
            logger.warning(
                f"Quadrilateral collapses to {width}x{height}, nothing to rectify"
            )
            return RectificationResult(
                image=None, width=width, height=height, skipped_triangles=2
            )

        source = self._scaled_source(image, scale)
        flags = INTERPOLATION_FLAGS[self.interpolation]

        output = np.zeros((height, width) + source.shape[2:], dtype=source.dtype)
        painted = np.zeros((height, width), dtype=bool)
        skipped = 0

        top_left = Point(x=0, y=0)
        top_right = Point(x=width, y=0)
        bottom_right = Point(x=width, y=height)
        bottom_left = Point(x=0, y=height)

        triangle_pairs = (
            ((tl, tr, bl), (top_left, top_right, bottom_left)),
            ((tr, br, bl), (top_right, bottom_right, bottom_left)),
        )

        for src_tri, dst_tri in triangle_pairs:
            transform = solve_affine(src_tri, dst_tri)
            if transform is None:
                skipped += 1
                continue

            warped = cv2.warpAffine(
                source,
                transform.as_matrix(),
                (width, height),
                flags=flags,
                borderMode=cv2.BORDER_CONSTANT,
                borderValue=0,
            )

            # Clip to the destination triangle, excluding the pixels the first
            # triangle already painted along the shared diagonal
            clip = np.zeros((height, width), dtype=np.uint8)
            polygon = np.array([p.to_int_tuple() for p in dst_tri], dtype=np.int32)
            cv2.fillConvexPoly(clip, polygon, 255)
            region = (clip > 0) & ~painted

            output[region] = warped[region]
            painted |= region

        if skipped:
            logger.warning(f"Skipped {skipped} degenerate triangle(s) during warp")

        logger.debug(f"Rectified quadrilateral to {width}x{height}")
        return RectificationResult(
            image=output, width=width, height=height, skipped_triangles=skipped
        )

    @staticmethod
    def _scaled_source(image: np.ndarray, scale: float) -> np.ndarray:
        if not 0 < scale <= 1:
            raise ValueError(f"Scale must be in (0, 1], got {scale}")
        if scale == 1:
            return image

        h, w = image.shape[:2]
        size = (max(1, int(w * scale)), max(1, int(h * scale)))
        return cv2.resize(image, size, interpolation=cv2.INTER_AREA)


def rectify_quadrilateral(
    image: np.ndarray,
    quad: Sequence[Point],
    scale: float = 1.0,
    interpolation: Optional[str] = None,
) -> RectificationResult:
    """
    Convenience function for one-shot rectification.

    Example:
        >>> result = rectify_quadrilateral(image, quad)
        >>> print(result.width, result.height)
    """
    rectifier = PerspectiveRectifier(interpolation or "linear")
    return rectifier.rectify(image, quad, scale)
