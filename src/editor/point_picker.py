"""
Click-to-place point picker.

Legacy cropper: the user clicks the corners one by one in
top-left, top-right, bottom-right, bottom-left order. No dragging.
"""

import logging
from typing import List

import numpy as np

from src.common.types import NUM_CORNERS, Point
from src.editor.overlay import draw_markers
from src.editor.types import PointLimitReached

logger = logging.getLogger(__name__)


class PointPicker:
    """Collects up to 4 clicked points in canvas pixels."""

    def __init__(self, max_points: int = NUM_CORNERS):
        self.max_points = max_points
        self._points: List[Point] = []

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    @property
    def is_complete(self) -> bool:
        return len(self._points) == self.max_points

    def click(self, x: float, y: float) -> Point:
        """
        Place the next point, rounded to whole pixels.

        Raises:
            PointLimitReached: If all points were already placed.
        """
        if self.is_complete:
            raise PointLimitReached(f"Already selected {self.max_points} points")

        point = Point(x=round(x), y=round(y))
        self._points.append(point)
        logger.debug(f"Picked point {len(self._points)}/{self.max_points}: {point}")
        return point

    def undo(self) -> None:
        """Remove the last placed point."""
        if self._points:
            self._points.pop()

    def reset(self) -> None:
        self._points = []

    def confirm(self) -> List[List[float]]:
        """
        Return the picked points as ``[[x, y], ...]``.

        Raises:
            ValueError: Unless exactly ``max_points`` points were placed.
        """
        if not self.is_complete:
            raise ValueError(
                f"Select {self.max_points} points, got {len(self._points)}"
            )
        return [p.to_list() for p in self._points]

    def render(self, frame: np.ndarray) -> np.ndarray:
        return draw_markers(frame, self._points)
