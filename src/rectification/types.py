"""
Data types for the Rectification module.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from src.utils.io import encode_data_url


@dataclass(frozen=True)
class AffineTransform:
    """
    2D affine transform mapping ``(x, y)`` to ``(u, v)``:

        u = a * x + b * y + c
        v = d * x + e * y + f
    """

    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    def as_matrix(self) -> np.ndarray:
        """2x3 matrix in the layout expected by ``cv2.warpAffine``."""
        return np.array(
            [[self.a, self.b, self.c], [self.d, self.e, self.f]], dtype=np.float64
        )

    def apply(self, x: float, y: float) -> tuple:
        """Map a single point."""
        return (
            self.a * x + self.b * y + self.c,
            self.d * x + self.e * y + self.f,
        )


@dataclass
class RectificationResult:
    """
    Output of the two-triangle rectifier.

    Attributes:
        image: Rectified BGR image of shape (height, width, C), or None when
               the quadrilateral collapses to an empty rectangle.
        width: Output width in pixels.
        height: Output height in pixels.
        skipped_triangles: Number of triangles (0-2) with a degenerate,
                           zero-determinant source and therefore not painted.
    """

    image: Optional[np.ndarray]
    width: int
    height: int
    skipped_triangles: int = 0

    @property
    def is_empty(self) -> bool:
        return self.image is None

    def to_data_url(self) -> Optional[str]:
        """PNG data URL of the rectified image, for direct display."""
        if self.image is None:
            return None
        return encode_data_url(self.image, ".png")
