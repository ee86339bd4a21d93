"""
Live Contour Detector

Searches a live video stream frame by frame for the document boundary:
1. Grayscale, Gaussian blur and Canny edges
2. Largest 4-vertex contour above the minimum area
3. Canonical [tl, tr, br, bl] ordering and green overlay
4. Capture of the overlay frame plus points for the point editor
"""

from src.live_detection.config_loader import load_config
from src.live_detection.contour_search import draw_detection, find_document_contour
from src.live_detection.detector import LiveContourDetector, probe_vision_library
from src.live_detection.scheduler import FrameScheduler, HighGuiFrameScheduler
from src.live_detection.types import (
    CapturedFrame,
    ContourCandidate,
    DetectionConfig,
    DetectorState,
    DetectorStatus,
    MediaAcquisitionError,
    NoDetectionError,
    VisionLibraryUnavailable,
)
from src.live_detection.video_source import VideoSource

__all__ = [
    "LiveContourDetector",
    "FrameScheduler",
    "HighGuiFrameScheduler",
    "VideoSource",
    "find_document_contour",
    "draw_detection",
    "probe_vision_library",
    "load_config",
    "CapturedFrame",
    "ContourCandidate",
    "DetectionConfig",
    "DetectorState",
    "DetectorStatus",
    "MediaAcquisitionError",
    "NoDetectionError",
    "VisionLibraryUnavailable",
]
