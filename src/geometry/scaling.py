"""
Display-space / source-space coordinate scaling.

The editor shows the source image shrunk to a maximum display width, never
enlarged. A single ``scale`` is computed once per image load and applied
symmetrically: points are multiplied by it on their way into the UI and
divided by it on their way out (to the rectifier or the OCR service).
"""

import logging
from typing import List, Sequence

from src.common.types import Point

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISPLAY_WIDTH = 800


def compute_display_scale(
    source_width: float, max_display_width: float = DEFAULT_MAX_DISPLAY_WIDTH
) -> float:
    """
    Compute ``min(max_display_width / source_width, 1)``.

    Raises:
        ValueError: If either width is not positive.

    Example:
        >>> compute_display_scale(1600)
        0.5
        >>> compute_display_scale(640)
        1.0
    """
    if source_width <= 0:
        raise ValueError(f"Source width must be positive, got {source_width}")
    if max_display_width <= 0:
        raise ValueError(
            f"Max display width must be positive, got {max_display_width}"
        )

    scale = min(max_display_width / source_width, 1.0)
    logger.debug(
        f"Display scale {scale:.4f} for source width {source_width} "
        f"(max display width {max_display_width})"
    )
    return scale


def _check_scale(scale: float) -> None:
    if not 0 < scale <= 1:
        raise ValueError(f"Scale must be in (0, 1], got {scale}")


def scale_to_display(points: Sequence[Point], scale: float) -> List[Point]:
    """Map source-space points into display space (multiply by ``scale``)."""
    _check_scale(scale)
    return [p.scaled(scale) for p in points]


def scale_to_source(points: Sequence[Point], scale: float) -> List[Point]:
    """Map display-space points back into source space (divide by ``scale``)."""
    _check_scale(scale)
    return [Point(x=p.x / scale, y=p.y / scale) for p in points]


def display_size(source_width: int, source_height: int, scale: float) -> tuple:
    """Integer canvas size of a source image shown at ``scale``."""
    _check_scale(scale)
    return int(source_width * scale), int(source_height * scale)
