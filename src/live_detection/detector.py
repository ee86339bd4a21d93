"""
Live document contour detector.

Runs a cooperative per-frame loop over a video source: every frame is
searched for the largest quadrilateral, the candidate is drawn in green on
the frame for feedback, and the loop reschedules itself for the next frame.

States::

    WAITING_FOR_VISION_LIBRARY -> WAITING_FOR_MEDIA -> DETECTING (repeats)
                                                    \\-> ERROR (media failure, terminal)

A missing vision library blocks in WAITING_FOR_VISION_LIBRARY. A media
failure cancels the frame loop and is not retried; the caller should offer
a static image upload into the point editor instead.
"""

import logging
from types import ModuleType
from typing import Callable, Optional

import cv2
import numpy as np

from src.geometry.quadrilateral import copy_quadrilateral
from src.live_detection.config_loader import load_config
from src.live_detection.contour_search import draw_detection, find_document_contour
from src.live_detection.scheduler import FrameScheduler
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
from src.utils.io import encode_data_url

logger = logging.getLogger(__name__)

REQUIRED_VISION_FUNCTIONS = (
    "cvtColor",
    "GaussianBlur",
    "Canny",
    "findContours",
    "contourArea",
    "arcLength",
    "approxPolyDP",
    "drawContours",
)


def probe_vision_library(module: ModuleType = cv2) -> str:
    """
    Check that the vision library exposes every function the detector uses.

    Returns:
        The library version string.

    Raises:
        VisionLibraryUnavailable: If any required function is missing.
    """
    missing = [name for name in REQUIRED_VISION_FUNCTIONS if not hasattr(module, name)]
    if missing:
        raise VisionLibraryUnavailable(
            f"Vision library is missing required functions: {missing}"
        )
    return getattr(module, "__version__", "unknown")


class LiveContourDetector:
    """
    Frame-by-frame document detector with capture.

    Example:
        >>> scheduler = HighGuiFrameScheduler()
        >>> detector = LiveContourDetector(scheduler, VideoSource(0))
        >>> detector.start()
        >>> while detector.state == DetectorState.DETECTING:
        ...     key = scheduler.wait()
        ...     cv2.imshow("scanner", detector.frame)
        ...     if key == ord("c") and detector.can_capture:
        ...         captured = detector.capture()
        ...         break
        >>> detector.stop()
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        source: VideoSource,
        config: Optional[DetectionConfig] = None,
        on_status: Optional[Callable[[DetectorStatus], None]] = None,
        vision_probe: Callable[[], str] = probe_vision_library,
    ):
        self.scheduler = scheduler
        self.source = source
        self.config = config if config is not None else load_config()
        self.on_status = on_status
        self._vision_probe = vision_probe

        self.state = DetectorState.WAITING_FOR_VISION_LIBRARY
        self.status = DetectorStatus.LOADING
        self.detection: Optional[ContourCandidate] = None
        self.frame: Optional[np.ndarray] = None
        self.frames_processed = 0
        self._handle: Optional[int] = None

    @property
    def can_capture(self) -> bool:
        """Capture is only enabled while a valid 4-point detection exists."""
        return (
            self.state == DetectorState.DETECTING
            and self.detection is not None
            and self.frame is not None
        )

    @property
    def is_scheduled(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Probe the vision library, acquire the camera and start the frame loop."""
        self._set_status(DetectorStatus.LOADING)

        try:
            version = self._vision_probe()
        except VisionLibraryUnavailable as e:
            logger.error(f"Vision library unavailable: {e}")
            self._set_status(DetectorStatus.LIBRARY_UNAVAILABLE)
            return
        logger.info(f"Vision library ready (OpenCV {version})")

        self.state = DetectorState.WAITING_FOR_MEDIA
        self._set_status(DetectorStatus.WAITING_FOR_CAMERA)

        try:
            self.source.open()
        except MediaAcquisitionError as e:
            self._fail_media(e)
            return

        self.state = DetectorState.DETECTING
        self._set_status(DetectorStatus.CAMERA_READY)
        self._schedule()

    def stop(self) -> None:
        """Cancel the frame loop and release the camera."""
        self._cancel()
        self.source.release()
        if self.state != DetectorState.ERROR:
            self.state = DetectorState.STOPPED
        logger.info("Live detector stopped")

    def capture(self) -> CapturedFrame:
        """
        Freeze the current overlay frame together with the detected points.

        Raises:
            NoDetectionError: If no document is currently detected.
        """
        if not self.can_capture:
            raise NoDetectionError("No document detected, nothing to capture")

        image = self.frame.copy()
        captured = CapturedFrame(
            image=image,
            points=copy_quadrilateral(self.detection.points),
            data_url=encode_data_url(image, ".jpg", self.config.jpeg_quality),
        )
        logger.info(f"Captured frame {image.shape[1]}x{image.shape[0]}")
        return captured

    def process_frame(self) -> None:
        """One iteration of the frame loop; reschedules itself while detecting."""
        self._handle = None
        if self.state != DetectorState.DETECTING:
            return

        try:
            frame = self.source.read()
        except MediaAcquisitionError as e:
            self._fail_media(e)
            return

        if frame is None or frame.shape[0] == 0 or frame.shape[1] == 0:
            # Video not ready yet
            self._schedule()
            return

        try:
            candidate = find_document_contour(frame, self.config)
            if candidate is not None:
                self.frame = draw_detection(frame, candidate, self.config)
                self._set_status(DetectorStatus.DETECTED)
            else:
                self.frame = frame
                self._set_status(DetectorStatus.SEARCHING)
            self.detection = candidate
        except cv2.error as e:
            logger.error(f"Frame processing failed: {e}")
            self.detection = None
            self._set_status(DetectorStatus.PROCESSING_ERROR)
        finally:
            self.frames_processed += 1
            if self.state == DetectorState.DETECTING:
                self._schedule()

    def _schedule(self) -> None:
        self._handle = self.scheduler.request_frame(self.process_frame)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def _fail_media(self, error: Exception) -> None:
        logger.error(f"Media acquisition failed: {error}")
        self._cancel()
        self.source.release()
        self.detection = None
        self.state = DetectorState.ERROR
        self._set_status(DetectorStatus.CAMERA_ERROR)

    def _set_status(self, status: DetectorStatus) -> None:
        if status != self.status:
            logger.debug(f"Detector status: {status.name}")
        self.status = status
        if self.on_status is not None:
            self.on_status(status)
