"""
Unit tests for image I/O utilities.
"""

import base64
from unittest.mock import MagicMock, patch

import cv2
import numpy as np
import pytest

from src.utils.io import decode_data_url, encode_data_url, load_image, load_yaml


@pytest.fixture
def small_image():
    image = np.zeros((8, 12, 3), dtype=np.uint8)
    image[:, 6:] = (255, 0, 0)
    return image


class TestDataUrls:
    """Tests for encode_data_url / decode_data_url."""

    def test_png_is_lossless(self, small_image):
        url = encode_data_url(small_image)

        assert url.startswith("data:image/png;base64,")
        np.testing.assert_array_equal(decode_data_url(url), small_image)

    def test_jpeg_mime_type(self, small_image):
        url = encode_data_url(small_image, ".jpg", quality=80)

        assert url.startswith("data:image/jpeg;base64,")
        assert decode_data_url(url).shape == small_image.shape

    def test_unsupported_format(self, small_image):
        with pytest.raises(ValueError, match="Unsupported image format"):
            encode_data_url(small_image, ".gif")

    def test_not_a_data_url(self):
        with pytest.raises(ValueError, match="Not a data URL"):
            decode_data_url("https://example.org/a.png")

    def test_undecodable_payload(self):
        url = "data:image/png;base64," + base64.b64encode(b"not an image").decode()

        with pytest.raises(ValueError, match="Could not decode image"):
            decode_data_url(url)


class TestLoadImage:
    """Tests for load_image function."""

    def test_local_path(self, tmp_path, small_image):
        path = tmp_path / "image.png"
        cv2.imwrite(str(path), small_image)

        np.testing.assert_array_equal(load_image(path), small_image)

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_data_url(self, small_image):
        image = load_image(encode_data_url(small_image))

        assert image.shape == small_image.shape

    def test_http_url(self, small_image):
        ok, buffer = cv2.imencode(".png", small_image)
        response = MagicMock()
        response.content = buffer.tobytes()

        with patch("src.utils.io.requests.get", return_value=response) as get:
            image = load_image("https://example.org/form.png", timeout=3.0)

        get.assert_called_once_with("https://example.org/form.png", timeout=3.0)
        response.raise_for_status.assert_called_once()
        np.testing.assert_array_equal(image, small_image)


class TestLoadYaml:
    """Tests for load_yaml."""

    def test_nested_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("camera:\n  index: 1\n  width: 640\n", encoding="utf-8")

        assert load_yaml(path) == {"camera": {"index": 1, "width": 640}}

    def test_empty_file_is_none(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_yaml(path) is None
