"""
Configuration loader for the Editor module.

Loads and validates configuration from config.yaml file.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from src.editor.types import (
    CropperConfig,
    DisplayConfig,
    EditorConfig,
    InteractionConfig,
    PreviewConfig,
    QualityConfig,
)
from src.geometry.types import DEFAULT_TIER_COLORS, QualityTier, hex_to_bgr
from src.rectification.warp import INTERPOLATION_FLAGS
from src.utils.io import load_yaml

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> EditorConfig:
    """
    Load editor configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated EditorConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.interaction.hit_radius)
        12.0
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading editor config from {config_path}")

    raw_config = load_yaml(config_path)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded editor configuration")
        return config
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> EditorConfig:
    """Parse raw dictionary into structured config objects."""
    raw_colors = raw["quality"].get("colors") or {}
    colors = dict(DEFAULT_TIER_COLORS)
    for name, value in raw_colors.items():
        colors[QualityTier(name)] = str(value)

    preview = raw.get("preview", {})

    return EditorConfig(
        display=DisplayConfig(max_width=int(raw["display"]["max_width"])),
        interaction=InteractionConfig(
            hit_radius=float(raw["interaction"]["hit_radius"]),
            handle_radius=float(raw["interaction"]["handle_radius"]),
        ),
        quality=QualityConfig(
            good_below=float(raw["quality"]["good_below"]),
            fair_below=float(raw["quality"]["fair_below"]),
            colors=colors,
        ),
        cropper=CropperConfig(
            min_size=float(raw["cropper"]["min_size"]),
            default_offset=float(raw["cropper"]["default_offset"]),
            default_fraction=float(raw["cropper"]["default_fraction"]),
        ),
        preview=PreviewConfig(
            enabled=bool(preview.get("enabled", True)),
            interpolation=str(preview.get("interpolation", "linear")),
        ),
    )


def _validate_config(config: EditorConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    if config.display.max_width < 1:
        raise ValueError("display.max_width must be at least 1")

    if config.interaction.hit_radius <= 0:
        raise ValueError("interaction.hit_radius must be positive")

    if config.interaction.handle_radius <= 0:
        raise ValueError("interaction.handle_radius must be positive")

    if not 0 <= config.quality.good_below < config.quality.fair_below:
        raise ValueError(
            f"quality.good_below ({config.quality.good_below}) must be "
            f"non-negative and less than fair_below ({config.quality.fair_below})"
        )

    for color in config.quality.colors.values():
        hex_to_bgr(color)

    if config.cropper.min_size < 1:
        raise ValueError("cropper.min_size must be at least 1")

    if config.cropper.default_offset < 0:
        raise ValueError("cropper.default_offset cannot be negative")

    if not 0 < config.cropper.default_fraction <= 1:
        raise ValueError("cropper.default_fraction must be in (0, 1]")

    if config.preview.interpolation not in INTERPOLATION_FLAGS:
        raise ValueError(
            f"Invalid preview.interpolation: {config.preview.interpolation}. "
            f"Must be one of {list(INTERPOLATION_FLAGS)}"
        )

    logger.debug("Configuration validation passed")
