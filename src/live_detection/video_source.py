"""
Camera / video frame source.
"""

import logging
from typing import Callable, Optional, Union

import cv2
import numpy as np

from src.live_detection.types import MediaAcquisitionError

logger = logging.getLogger(__name__)


class VideoSource:
    """
    Wrapper around ``cv2.VideoCapture`` with explicit acquisition and release.

    Args:
        device: Camera index or path/URL of a video stream.
        width: Requested frame width.
        height: Requested frame height.
        capture_factory: Callable creating the capture object.
        max_failed_reads: Consecutive empty reads tolerated before the
            stream is considered lost.
    """

    def __init__(
        self,
        device: Union[int, str] = 0,
        width: int = 1280,
        height: int = 720,
        capture_factory: Callable = cv2.VideoCapture,
        max_failed_reads: int = 150,
    ):
        self.device = device
        self.width = width
        self.height = height
        self._capture_factory = capture_factory
        self.max_failed_reads = max_failed_reads
        self._capture = None
        self._failed_reads = 0

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> None:
        """
        Acquire the camera.

        Raises:
            MediaAcquisitionError: If the device cannot be opened.
        """
        if self._capture is not None:
            return

        capture = self._capture_factory(self.device)
        if not capture.isOpened():
            capture.release()
            raise MediaAcquisitionError(f"Could not open video device {self.device!r}")

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._capture = capture
        self._failed_reads = 0
        logger.info(f"Opened video device {self.device!r}")

    def read(self) -> Optional[np.ndarray]:
        """
        Grab the next frame.

        Returns:
            The frame, or None when no frame is available yet.

        Raises:
            MediaAcquisitionError: If the source was never opened or was
                released, the device closed, or ``max_failed_reads``
                consecutive reads came back empty.
        """
        if self._capture is None:
            raise MediaAcquisitionError("Video source is not open")

        ok, frame = self._capture.read()
        if ok and frame is not None and frame.size > 0:
            self._failed_reads = 0
            return frame

        if not self._capture.isOpened():
            raise MediaAcquisitionError(
                f"Video device {self.device!r} stopped delivering frames"
            )

        self._failed_reads += 1
        if self._failed_reads >= self.max_failed_reads:
            raise MediaAcquisitionError(
                f"No frames from video device {self.device!r} after "
                f"{self._failed_reads} attempts"
            )
        logger.debug(f"Empty read {self._failed_reads}/{self.max_failed_reads}")
        return None

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"Released video device {self.device!r}")
