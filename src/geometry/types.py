"""
Data types for the Geometry module.
"""

from dataclasses import dataclass
from enum import Enum


class QualityTier(Enum):
    """Qualitative skew tier of a quadrilateral, derived from its corner angles."""

    NEUTRAL = "neutral"  # Fewer than 4 points, or a degenerate corner
    GOOD = "good"  # Average deviation < good_below
    FAIR = "fair"  # Average deviation < fair_below
    POOR = "poor"


# Default badge colours (hex RGB) per tier
DEFAULT_TIER_COLORS = {
    QualityTier.NEUTRAL: "#00ffff",
    QualityTier.GOOD: "#00ff00",
    QualityTier.FAIR: "#ffff00",
    QualityTier.POOR: "#ff0000",
}


@dataclass(frozen=True)
class QualityThresholds:
    """
    Average-deviation thresholds (degrees) separating the quality tiers.

    ``deviation < good_below`` is GOOD, ``deviation < fair_below`` is FAIR,
    anything else is POOR.
    """

    good_below: float = 5.0
    fair_below: float = 15.0


def hex_to_bgr(color: str) -> tuple:
    """
    Convert ``#rrggbb`` into an OpenCV BGR tuple.

    Example:
        >>> hex_to_bgr("#ff0000")
        (0, 0, 255)
    """
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb colour, got {color!r}")
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)
