"""
Per-frame document contour search.

Finds the largest 4-sided contour in a frame as the candidate document
boundary. Each call is independent: nothing is smoothed or tracked across
frames, so a frame without a candidate always yields None.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from src.geometry.quadrilateral import contour_to_pairs, order_points
from src.live_detection.config_loader import load_config
from src.live_detection.types import ContourCandidate, DetectionConfig

logger = logging.getLogger(__name__)

RETRIEVAL_MODES = {
    "external": cv2.RETR_EXTERNAL,
    "list": cv2.RETR_LIST,
}


def to_grayscale(frame: np.ndarray) -> np.ndarray:
    """Convert a grayscale, BGR or BGRA frame to single-channel grayscale."""
    if frame.ndim == 2:
        return frame
    channels = frame.shape[2]
    if channels == 1:
        return frame[:, :, 0]
    if channels == 4:
        return cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)


def detect_edges(frame: np.ndarray, config: DetectionConfig) -> np.ndarray:
    """Grayscale -> Gaussian blur -> Canny edge map."""
    gray = to_grayscale(frame)
    kernel = config.preprocessing.blur_kernel
    blurred = cv2.GaussianBlur(gray, (kernel, kernel), 0)
    return cv2.Canny(
        blurred, config.preprocessing.canny_low, config.preprocessing.canny_high
    )


def find_document_contour(
    frame: np.ndarray, config: Optional[DetectionConfig] = None
) -> Optional[ContourCandidate]:
    """
    Search a frame for the largest quadrilateral contour.

    Steps:
    1. Grayscale, Gaussian blur (5x5), Canny (75, 200).
    2. Extract contours; for each one enclosing more than ``min_area``,
       approximate it within ``approx_epsilon`` of its perimeter and keep
       approximations with exactly 4 vertices.
    3. Keep the candidate with the largest area (not the first match).
    4. Order its vertices as [tl, tr, br, bl].

    Args:
        frame: Video frame (grayscale, BGR or BGRA).
        config: Detection configuration. If None, loads the default file.

    Returns:
        ContourCandidate, or None when no 4-vertex contour of sufficient
        area exists in this frame.

    Raises:
        ValueError: If the frame is empty.
    """
    if frame is None or frame.size == 0:
        raise ValueError("Invalid frame: frame is None or empty")

    config = config if config is not None else load_config()
    edges = detect_edges(frame, config)

    contours, _ = cv2.findContours(
        edges,
        RETRIEVAL_MODES[config.contours.retrieval_mode],
        cv2.CHAIN_APPROX_SIMPLE,
    )

    best_contour = None
    max_area = 0.0

    for contour in contours:
        area = cv2.contourArea(contour)
        if area <= config.contours.min_area:
            continue

        perimeter = cv2.arcLength(contour, True)
        approx = cv2.approxPolyDP(
            contour, config.contours.approx_epsilon * perimeter, True
        )

        if len(approx) == 4 and area > max_area:
            max_area = area
            best_contour = approx

    if best_contour is None:
        logger.debug(f"No quadrilateral among {len(contours)} contours")
        return None

    points = order_points(contour_to_pairs(best_contour))
    logger.debug(f"Best quadrilateral area {max_area:.0f}px^2: {points}")
    return ContourCandidate(points=points, contour=best_contour, area=float(max_area))


def draw_detection(
    frame: np.ndarray, candidate: ContourCandidate, config: DetectionConfig
) -> np.ndarray:
    """Copy of ``frame`` with the candidate outlined in the overlay colour."""
    overlay = frame.copy()
    color = config.overlay.color
    if overlay.ndim == 3 and overlay.shape[2] == 4:
        color = tuple(color) + (255,)
    cv2.drawContours(
        overlay, [candidate.contour], 0, color, config.overlay.thickness
    )
    return overlay
