"""
Unit tests for the video source wrapper.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from src.live_detection.types import MediaAcquisitionError
from src.live_detection.video_source import VideoSource


def make_capture(opened=True, frames=()):
    capture = MagicMock()
    capture.isOpened.return_value = opened
    capture.read.side_effect = list(frames)
    return capture


class TestVideoSource:
    """Tests for VideoSource class."""

    def test_open_and_read(self):
        frame = np.zeros((720, 1280, 3), dtype=np.uint8)
        capture = make_capture(frames=[(True, frame)])
        source = VideoSource(0, capture_factory=lambda device: capture)

        source.open()

        assert source.is_open
        assert source.read() is frame
        assert capture.set.call_count == 2

    def test_open_failure(self):
        capture = make_capture(opened=False)
        source = VideoSource(3, capture_factory=lambda device: capture)

        with pytest.raises(
            MediaAcquisitionError, match="Could not open video device 3"
        ):
            source.open()

        capture.release.assert_called_once()
        assert not source.is_open

    def test_missing_frame_returns_none(self):
        capture = make_capture(frames=[(False, None), (True, np.zeros((0, 0, 3)))])
        source = VideoSource(capture_factory=lambda device: capture)
        source.open()

        assert source.read() is None
        assert source.read() is None

    def test_read_before_open(self):
        with pytest.raises(MediaAcquisitionError, match="not open"):
            VideoSource(capture_factory=MagicMock()).read()

    def test_release(self):
        capture = make_capture()
        source = VideoSource(capture_factory=lambda device: capture)
        source.open()

        source.release()
        source.release()

        capture.release.assert_called_once()
        assert not source.is_open

    def test_device_closed_mid_stream(self):
        frame = np.zeros((720, 1280, 3), dtype=np.uint8)
        capture = make_capture(frames=[(True, frame), (False, None)])
        source = VideoSource(1, capture_factory=lambda device: capture)
        source.open()
        assert source.read() is frame

        capture.isOpened.return_value = False

        with pytest.raises(MediaAcquisitionError, match="stopped delivering frames"):
            source.read()

    def test_too_many_empty_reads(self):
        capture = make_capture(frames=[(False, None)] * 3)
        source = VideoSource(capture_factory=lambda device: capture, max_failed_reads=3)
        source.open()

        assert source.read() is None
        assert source.read() is None
        with pytest.raises(MediaAcquisitionError, match="after 3 attempts"):
            source.read()

    def test_good_frame_resets_failure_count(self):
        frame = np.zeros((4, 4, 3), dtype=np.uint8)
        capture = make_capture(
            frames=[(False, None), (True, frame), (False, None), (False, None)]
        )
        source = VideoSource(capture_factory=lambda device: capture, max_failed_reads=2)
        source.open()

        assert source.read() is None
        assert source.read() is frame
        assert source.read() is None
        with pytest.raises(MediaAcquisitionError):
            source.read()
