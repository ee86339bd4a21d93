"""
Drawing helpers for the editor canvases.

All functions draw onto a copy and return it; the input frame is untouched.
"""

from typing import Optional, Sequence

import cv2
import numpy as np

from src.common.types import Point, Rect
from src.geometry.types import hex_to_bgr

HANDLE_RADIUS = 8
ACTIVE_HANDLE_RADIUS = 4
HANDLE_COLOR = (0, 255, 0)
ACTIVE_HANDLE_COLOR = (0, 0, 255)
BORDER_COLOR = (0, 0, 0)
# Matches a "22" alpha suffix on the outline colour
FILL_ALPHA = 0x22 / 255


def draw_quadrilateral(
    frame: np.ndarray,
    points: Sequence[Point],
    color: str,
    dragging_index: Optional[int] = None,
) -> np.ndarray:
    """
    Draw the closed quadrilateral outline, a translucent fill and the corner handles.

    Args:
        frame: Display-sized BGR image.
        points: Corners in display space.
        color: Outline colour as ``#rrggbb``.
        dragging_index: Handle currently grabbed, drawn smaller and red.
    """
    canvas = frame.copy()
    if not points:
        return canvas

    bgr = hex_to_bgr(color)
    polygon = np.array([p.to_int_tuple() for p in points], dtype=np.int32)

    if len(points) >= 3:
        fill = canvas.copy()
        cv2.fillPoly(fill, [polygon], bgr)
        canvas = cv2.addWeighted(fill, FILL_ALPHA, canvas, 1 - FILL_ALPHA, 0)
    cv2.polylines(canvas, [polygon], isClosed=True, color=bgr, thickness=2)

    for i, point in enumerate(points):
        active = i == dragging_index
        radius = ACTIVE_HANDLE_RADIUS if active else HANDLE_RADIUS
        cv2.circle(
            canvas,
            point.to_int_tuple(),
            radius,
            ACTIVE_HANDLE_COLOR if active else HANDLE_COLOR,
            -1,
        )
        cv2.circle(canvas, point.to_int_tuple(), radius, BORDER_COLOR, 2)

    return canvas


def draw_rect(
    frame: np.ndarray,
    rect: Rect,
    handles: Sequence[tuple],
    color: tuple = (0, 255, 255),
) -> np.ndarray:
    """Draw the crop rectangle and its resize handles."""
    canvas = frame.copy()
    top_left = (int(round(rect.x)), int(round(rect.y)))
    bottom_right = (int(round(rect.right)), int(round(rect.bottom)))
    cv2.rectangle(canvas, top_left, bottom_right, color, 2)
    for x, y in handles:
        cv2.rectangle(
            canvas,
            (int(x) - 4, int(y) - 4),
            (int(x) + 4, int(y) + 4),
            color,
            -1,
        )
    return canvas


def draw_markers(frame: np.ndarray, points: Sequence[Point]) -> np.ndarray:
    """Draw picked points as filled red dots."""
    canvas = frame.copy()
    for point in points:
        cv2.circle(canvas, point.to_int_tuple(), 6, (0, 0, 255), -1)
    return canvas
