"""
Data types and structures for the Live Detection module.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from src.common.types import Point


class DetectorState(Enum):
    """Lifecycle of the live contour detector."""

    WAITING_FOR_VISION_LIBRARY = "WAITING_FOR_VISION_LIBRARY"
    WAITING_FOR_MEDIA = "WAITING_FOR_MEDIA"
    DETECTING = "DETECTING"
    ERROR = "ERROR"  # Terminal: media acquisition failed
    STOPPED = "STOPPED"


class DetectorStatus(Enum):
    """Fixed user-facing status messages."""

    LOADING = "Loading computer vision..."
    LIBRARY_UNAVAILABLE = "Error: computer vision library not loaded."
    WAITING_FOR_CAMERA = "Loaded. Waiting for camera permission..."
    CAMERA_READY = "Camera ready. Point at the document..."
    SEARCHING = "Searching for document..."
    DETECTED = "Document detected. Ready to capture!"
    PROCESSING_ERROR = "Processing error."
    CAMERA_ERROR = (
        "ERROR: camera access is blocked by the browser or environment. "
        "Open the scanner in a new window to allow camera access, "
        "or upload a photo of the document instead."
    )


class MediaAcquisitionError(RuntimeError):
    """The camera could not be opened or stopped delivering frames."""


class VisionLibraryUnavailable(RuntimeError):
    """The computer-vision functions required for detection are missing."""


class NoDetectionError(RuntimeError):
    """Capture was requested while no document is detected."""


@dataclass
class PreprocessingConfig:
    """Configuration for grayscale / blur / edge detection."""

    blur_kernel: int
    canny_low: float
    canny_high: float


@dataclass
class ContourConfig:
    """Configuration for contour extraction and polygon approximation."""

    retrieval_mode: str  # "external" or "list"
    min_area: float  # Contours must enclose strictly more than this (px^2)
    approx_epsilon: float  # Fraction of the perimeter used as tolerance


@dataclass
class OverlayConfig:
    color: Tuple[int, int, int]  # BGR
    thickness: int


@dataclass
class CameraConfig:
    index: int
    width: int
    height: int
    frame_delay_ms: int
    max_failed_reads: int


@dataclass
class DetectionConfig:
    """Complete live detection module configuration."""

    preprocessing: PreprocessingConfig
    contours: ContourConfig
    overlay: OverlayConfig
    camera: CameraConfig
    jpeg_quality: int


@dataclass
class ContourCandidate:
    """
    Best 4-vertex contour found in a frame.

    Attributes:
        points: Vertices in canonical [TL, TR, BR, BL] order.
        contour: Approximated polygon as returned by OpenCV, shape (4, 1, 2).
        area: Area of the original (unapproximated) contour in px^2.
    """

    points: List[Point]
    contour: np.ndarray
    area: float


@dataclass
class CapturedFrame:
    """
    Frozen overlay frame plus the detection it shows.

    Attributes:
        image: BGR frame with the green contour drawn on it.
        points: Ordered detection, frame pixels (source space).
        data_url: JPEG data URL of ``image``.
    """

    image: np.ndarray
    points: List[Point]
    data_url: Optional[str] = None
