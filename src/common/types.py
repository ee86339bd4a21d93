"""
Common type definitions for the document correction pipeline.

This module provides Pydantic-based type definitions for the core data
structures shared by the geometry utilities, the point editor, the
rectifier and the live contour detector: points, sizes and rectangles.

Coordinates are floats. A point lives either in *display* space (scaled to
fit the on-screen canvas) or in *source* space (full-resolution image
pixels); the two are related by a single ``scale`` factor, see
``src.geometry.scaling``.
"""

from typing import List, Sequence, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Canonical winding order of every quadrilateral in the pipeline
CORNER_LABELS = ("Top-Left", "Top-Right", "Bottom-Right", "Bottom-Left")
NUM_CORNERS = 4


class Point(BaseModel):
    """
    Immutable 2D point (x, y).

    Attributes:
        x: X-coordinate (horizontal).
        y: Y-coordinate (vertical).

    Example:
        >>> point = Point(x=100, y=200.5)
        >>> point.to_list()
        [100.0, 200.5]
        >>> Point.from_list([10, 20]).distance_to(Point(x=13, y=24))
        5.0
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v: Union[int, float, np.number]) -> float:
        """Accept ints, floats and numpy scalars."""
        if isinstance(v, (int, float, np.number)) and not isinstance(v, bool):
            return float(v)
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_list(cls, coords: Sequence[float]) -> "Point":
        """
        Create Point from a pair ``[x, y]``.

        Raises:
            ValueError: If the sequence does not contain exactly 2 elements.
        """
        if len(coords) != 2:
            raise ValueError(f"Expected list with 2 elements, got {len(coords)}")
        return cls(x=coords[0], y=coords[1])

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """Create Point from a numpy array of shape (2,)."""
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def to_list(self) -> List[float]:
        """Convert Point to ``[x, y]``."""
        return [self.x, self.y]

    def to_tuple(self) -> Tuple[float, float]:
        """Convert Point to ``(x, y)``."""
        return (self.x, self.y)

    def to_int_tuple(self) -> Tuple[int, int]:
        """Rounded integer pixel position, for drawing."""
        return (int(round(self.x)), int(round(self.y)))

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert Point to numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=dtype)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def scaled(self, factor: float) -> "Point":
        """Return a new point with both coordinates multiplied by ``factor``."""
        return Point(x=self.x * factor, y=self.y * factor)

    def __repr__(self) -> str:
        return f"Point(x={self.x:.1f}, y={self.y:.1f})"


# An ordered [tl, tr, br, bl] sequence of points
Quadrilateral = List[Point]


class Size(BaseModel):
    """Width/height pair, serialized as ``{"width": ..., "height": ...}``."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


class Rect(BaseModel):
    """
    Axis-aligned rectangle ``{x, y, width, height}`` in display space.

    Used by the rectangle cropper. Negative sizes are rejected.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @model_validator(mode="after")
    def _validate_rect(self) -> "Rect":
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rect size must be non-negative, got {self.width}x{self.height}"
            )
        return self

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Check if ``(x, y)`` lies inside the rectangle (edges included)."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def corners(self) -> Quadrilateral:
        """Corners in canonical [tl, tr, br, bl] order."""
        return [
            Point(x=self.x, y=self.y),
            Point(x=self.right, y=self.y),
            Point(x=self.right, y=self.bottom),
            Point(x=self.x, y=self.bottom),
        ]


def points_from_pairs(pairs: Sequence[Sequence[float]]) -> Quadrilateral:
    """
    Convert ``[[x, y], ...]`` pairs (or ``{"x", "y"}`` dicts) into Points.

    Example:
        >>> points_from_pairs([[0, 0], [100, 0]])
        [Point(x=0.0, y=0.0), Point(x=100.0, y=0.0)]
    """
    points = []
    for pair in pairs:
        if isinstance(pair, Point):
            points.append(pair)
        elif isinstance(pair, dict):
            points.append(Point(x=pair["x"], y=pair["y"]))
        else:
            points.append(Point.from_list(list(pair)))
    return points


def points_to_pairs(points: Sequence[Point]) -> List[List[float]]:
    """Convert Points to ``[[x, y], ...]`` pairs."""
    return [p.to_list() for p in points]


def points_to_numpy(points: Sequence[Point], dtype: type = np.float32) -> np.ndarray:
    """Convert Points to an array of shape (N, 2)."""
    return np.array([p.to_list() for p in points], dtype=dtype).reshape(-1, 2)


def validate_quadrilateral(points: Sequence[Point]) -> None:
    """
    Raise ValueError unless exactly 4 points are given.
    """
    if len(points) != NUM_CORNERS:
        raise ValueError(f"Expected exactly 4 points, got {len(points)}")
