"""
I/O Utilities

YAML loading, image loading from paths, URLs and data URLs, and data URL
encoding for preview and capture images.
"""

import base64
import binascii
import logging
from pathlib import Path
from typing import Any, Dict, Union

import cv2
import numpy as np
import requests
import yaml

logger = logging.getLogger(__name__)

_MIME_TYPES = {".png": "image/png", ".jpg": "image/jpeg", ".jpeg": "image/jpeg"}


def load_yaml(file_path: Path) -> Dict[str, Any]:
    """Load YAML file."""
    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def encode_data_url(image: np.ndarray, fmt: str = ".png", quality: int = 95) -> str:
    """
    Encode a BGR image as a ``data:`` URL.

    Args:
        image: Image array (H, W) or (H, W, C).
        fmt: Encoding extension, ``.png`` or ``.jpg``/``.jpeg``.
        quality: JPEG quality (0-100), ignored for PNG.

    Raises:
        ValueError: If the format is unsupported or encoding fails.

    Example:
        >>> url = encode_data_url(np.zeros((4, 4, 3), dtype=np.uint8))
        >>> url.startswith("data:image/png;base64,")
        True
    """
    fmt = fmt.lower()
    if fmt not in _MIME_TYPES:
        raise ValueError(f"Unsupported image format: {fmt}")
    if image is None or image.size == 0:
        raise ValueError("Invalid input image: image is None or empty")

    params = [cv2.IMWRITE_JPEG_QUALITY, int(quality)] if fmt != ".png" else []
    ok, buffer = cv2.imencode(fmt, image, params)
    if not ok:
        raise ValueError(f"Failed to encode image as {fmt}")

    payload = base64.b64encode(buffer.tobytes()).decode("ascii")
    return f"data:{_MIME_TYPES[fmt]};base64,{payload}"


def decode_data_url(data_url: str) -> np.ndarray:
    """
    Decode a base64 ``data:`` URL into a BGR image.

    Raises:
        ValueError: If the URL is malformed or the image cannot be decoded.
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")

    header, payload = data_url.split(",", 1)
    if ";base64" not in header:
        raise ValueError("Only base64 data URLs are supported")

    try:
        raw = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e

    return _decode_bytes(raw, "data URL")


def _decode_bytes(raw: bytes, origin: str) -> np.ndarray:
    image = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Could not decode image from {origin}")
    return image


def load_image(source: Union[str, Path], timeout: float = 10.0) -> np.ndarray:
    """
    Load a BGR image from a filesystem path, an http(s) URL or a data URL.

    Remote images are downloaded in full so their pixels can be read
    by the rectifier.

    Raises:
        FileNotFoundError: If a local path does not exist.
        ValueError: If the content cannot be decoded as an image.
        requests.RequestException: If a remote download fails.
    """
    text = str(source)

    if text.startswith("data:"):
        return decode_data_url(text)

    if text.startswith(("http://", "https://")):
        logger.info(f"Downloading image from {text}")
        response = requests.get(text, timeout=timeout)
        response.raise_for_status()
        return _decode_bytes(response.content, text)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Could not decode image from {path}")
    logger.debug(f"Loaded image {path} ({image.shape[1]}x{image.shape[0]})")
    return image
