"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest


@pytest.fixture
def square_points():
    """Axis-aligned 100x100 square in canonical [tl, tr, br, bl] order."""
    from src.common.types import Point

    return [
        Point(x=0, y=0),
        Point(x=100, y=0),
        Point(x=100, y=100),
        Point(x=0, y=100),
    ]


@pytest.fixture
def gradient_image():
    """100x100 BGR image with a horizontal blue and a vertical green gradient."""
    import numpy as np

    image = np.zeros((100, 100, 3), dtype=np.uint8)
    ramp = np.linspace(0, 255, 100).astype(np.uint8)
    image[:, :, 0] = ramp[np.newaxis, :]
    image[:, :, 1] = ramp[:, np.newaxis]
    return image


@pytest.fixture
def document_frame():
    """Fixture providing a frame with a dark, tilted document on a light table."""
    import cv2
    import numpy as np

    frame = np.full((480, 640, 3), 230, dtype=np.uint8)
    corners = np.array([[150, 100], [480, 80], [500, 380], [130, 400]], dtype=np.int32)
    cv2.fillPoly(frame, [corners], (40, 40, 40))
    return frame, corners


@pytest.fixture
def wide_image():
    """1600x1200 image, shown at display scale 0.5."""
    import numpy as np

    image = np.full((1200, 1600, 3), 128, dtype=np.uint8)
    image[200:1000, 300:1300] = (20, 60, 200)
    return image
