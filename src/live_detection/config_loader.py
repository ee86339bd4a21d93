"""
Configuration loader for the Live Detection module.

Loads and validates configuration from config.yaml file.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from src.live_detection.types import (
    CameraConfig,
    ContourConfig,
    DetectionConfig,
    OverlayConfig,
    PreprocessingConfig,
)
from src.utils.io import load_yaml

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

VALID_RETRIEVAL_MODES = ["external", "list"]


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> DetectionConfig:
    """
    Load live detection configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated DetectionConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading live detection config from {config_path}")

    raw_config = load_yaml(config_path)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded live detection configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> DetectionConfig:
    """Parse raw dictionary into structured config objects."""
    color = raw["overlay"]["color"]
    if len(color) != 3:
        raise ValueError(f"overlay.color must have 3 components, got {color}")

    return DetectionConfig(
        preprocessing=PreprocessingConfig(
            blur_kernel=int(raw["preprocessing"]["blur_kernel"]),
            canny_low=float(raw["preprocessing"]["canny_low"]),
            canny_high=float(raw["preprocessing"]["canny_high"]),
        ),
        contours=ContourConfig(
            retrieval_mode=str(raw["contours"]["retrieval_mode"]),
            min_area=float(raw["contours"]["min_area"]),
            approx_epsilon=float(raw["contours"]["approx_epsilon"]),
        ),
        overlay=OverlayConfig(
            color=tuple(int(c) for c in color),
            thickness=int(raw["overlay"]["thickness"]),
        ),
        camera=CameraConfig(
            index=int(raw["camera"]["index"]),
            width=int(raw["camera"]["width"]),
            height=int(raw["camera"]["height"]),
            frame_delay_ms=int(raw["camera"]["frame_delay_ms"]),
            max_failed_reads=int(raw["camera"]["max_failed_reads"]),
        ),
        jpeg_quality=int(raw["capture"]["jpeg_quality"]),
    )


def _validate_config(config: DetectionConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    kernel = config.preprocessing.blur_kernel
    if kernel < 1 or kernel % 2 == 0:
        raise ValueError(f"blur_kernel must be a positive odd number, got {kernel}")

    if not 0 <= config.preprocessing.canny_low < config.preprocessing.canny_high:
        raise ValueError(
            f"canny_low ({config.preprocessing.canny_low}) must be non-negative "
            f"and less than canny_high ({config.preprocessing.canny_high})"
        )

    if config.contours.retrieval_mode not in VALID_RETRIEVAL_MODES:
        raise ValueError(
            f"Invalid retrieval_mode: {config.contours.retrieval_mode}. "
            f"Must be one of {VALID_RETRIEVAL_MODES}"
        )

    if config.contours.min_area < 0:
        raise ValueError("min_area cannot be negative")

    if not 0 < config.contours.approx_epsilon < 1:
        raise ValueError("approx_epsilon must be in (0, 1)")

    if any(not 0 <= c <= 255 for c in config.overlay.color):
        raise ValueError("overlay.color components must be in [0, 255]")

    if config.overlay.thickness < 1:
        raise ValueError("overlay.thickness must be at least 1")

    if config.camera.width < 1 or config.camera.height < 1:
        raise ValueError("camera width and height must be positive")

    if config.camera.frame_delay_ms < 1:
        raise ValueError("camera.frame_delay_ms must be at least 1")

    if config.camera.max_failed_reads < 1:
        raise ValueError("camera.max_failed_reads must be at least 1")

    if not 0 <= config.jpeg_quality <= 100:
        raise ValueError("capture.jpeg_quality must be in [0, 100]")

    logger.debug("Configuration validation passed")
