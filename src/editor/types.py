"""
Data types and structures for the Editor module.

Provides type-safe containers for configuration, pointer input, drag
sessions and the confirmed correction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from src.common.types import Point, Rect, Size, points_to_pairs
from src.geometry.types import QualityTier


class EditorState(Enum):
    """Interaction state of an editor surface."""

    IDLE = "IDLE"
    DRAGGING = "DRAGGING"


class DragMode(Enum):
    """Whether a drag session moves or resizes its target."""

    MOVE = "move"
    RESIZE = "resize"


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


class PointerSource(Enum):
    MOUSE = "mouse"
    TOUCH = "touch"


class PointLimitReached(Exception):
    """Raised when more points are placed than a picker accepts."""


@dataclass
class PointerEvent:
    """
    Uniform pointer event delivered by mouse and touch front-ends.

    ``x``/``y`` are canvas-relative display coordinates. Touch handlers mark
    drag moves as ``default_prevented`` so the host suppresses page scroll.
    """

    kind: PointerKind
    x: float = 0.0
    y: float = 0.0
    source: PointerSource = PointerSource.MOUSE
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class DragSession:
    """
    Transient state of one drag.

    Attributes:
        mode: MOVE or RESIZE.
        index: Grabbed point index (point editor), else None.
        handle: Grabbed resize handle name (rectangle cropper), else None.
        start: Pointer position when the drag began.
        last: Last known pointer position.
        start_rect: Rectangle snapshot at drag start (rectangle cropper).
    """

    mode: DragMode
    start: Tuple[float, float]
    last: Tuple[float, float]
    index: Optional[int] = None
    handle: Optional[str] = None
    start_rect: Optional[Rect] = None


@dataclass
class DisplayConfig:
    """Configuration for the display canvas."""

    max_width: int


@dataclass
class InteractionConfig:
    """Configuration for pointer hit-testing."""

    hit_radius: float  # Point editor handle radius (display px)
    handle_radius: float  # Rectangle cropper resize-handle radius (display px)


@dataclass
class QualityConfig:
    """Thresholds (degrees of average deviation) and badge colours."""

    good_below: float
    fair_below: float
    colors: Dict[QualityTier, str] = field(default_factory=dict)


@dataclass
class CropperConfig:
    """Configuration for the rectangle cropper."""

    min_size: float
    default_offset: float
    default_fraction: float


@dataclass
class PreviewConfig:
    """Configuration for the live rectified preview."""

    enabled: bool
    interpolation: str


@dataclass
class EditorConfig:
    """Complete editor module configuration."""

    display: DisplayConfig
    interaction: InteractionConfig
    quality: QualityConfig
    cropper: CropperConfig
    preview: PreviewConfig


@dataclass
class CorrectionResult:
    """
    Confirmed correction, ready for the OCR service.

    Attributes:
        image_url: Reference to the original image (URL or data URL).
        points: Corrected corners in source space, order [TL, TR, BR, BL].
        image_size: Natural size of the source image.
        display_size: Size of the canvas the points were edited on.
        quality: Quality tier of the corrected quadrilateral.
        color: Badge colour for ``quality``.
    """

    image_url: str
    points: List[Point]
    image_size: Size
    display_size: Size
    quality: QualityTier
    color: str

    def to_payload(self) -> dict:
        """JSON body expected by the ``/process/`` endpoint."""
        return {
            "image_url": self.image_url,
            "points": points_to_pairs(self.points),
            "imageSize": self.image_size.to_dict(),
            "displaySize": self.display_size.to_dict(),
        }
