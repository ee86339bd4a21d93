"""
Axis-aligned rectangle cropper.

Alternate, coarser cropper for flows that need no perspective correction.
The rectangle can be moved by dragging its interior or resized by one of 8
handles. After every drag tick it is normalised so that it stays at least
``min_size`` wide and tall and fully inside the canvas.
"""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from src.common.types import Quadrilateral, Rect
from src.editor.config_loader import load_config
from src.editor.overlay import draw_rect
from src.editor.types import DragMode, DragSession, EditorConfig, EditorState
from src.geometry.scaling import compute_display_scale, display_size

logger = logging.getLogger(__name__)

HANDLES = ("nw", "n", "ne", "e", "se", "s", "sw", "w")


class RectangleCropper:
    """
    Move/resize editor over a rectangle selection, in display space.

    Example:
        >>> cropper = RectangleCropper(image)
        >>> cropper.pointer_down(cropper.rect.right, cropper.rect.bottom)  # "se" handle
        True
        >>> cropper.pointer_move(700, 500)
        True
        >>> cropper.pointer_up()
        >>> crop = cropper.crop()
    """

    def __init__(
        self,
        image: np.ndarray,
        config: Optional[EditorConfig] = None,
        initial_rect: Optional[Rect] = None,
    ):
        if image is None or image.size == 0:
            raise ValueError("Invalid input image: image is None or empty")

        self.config = config if config is not None else load_config()
        self.image = image
        self.min_size = self.config.cropper.min_size

        height, width = image.shape[:2]
        self.scale = compute_display_scale(width, self.config.display.max_width)
        self.canvas_width, self.canvas_height = display_size(width, height, self.scale)

        if self.canvas_width < self.min_size or self.canvas_height < self.min_size:
            raise ValueError(
                f"Canvas {self.canvas_width}x{self.canvas_height} is smaller than "
                f"the minimum selection {self.min_size:.0f}x{self.min_size:.0f}"
            )

        if initial_rect is None:
            fraction = self.config.cropper.default_fraction
            offset = self.config.cropper.default_offset
            initial_rect = Rect(
                x=offset,
                y=offset,
                width=self.canvas_width * fraction,
                height=self.canvas_height * fraction,
            )

        self._initial_rect = self.constrain(initial_rect)
        self._rect = self._initial_rect
        self._session: Optional[DragSession] = None

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def state(self) -> EditorState:
        return EditorState.IDLE if self._session is None else EditorState.DRAGGING

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    def handle_positions(self) -> Dict[str, Tuple[float, float]]:
        """Centre of each resize handle."""
        r = self._rect
        cx, cy = r.x + r.width / 2, r.y + r.height / 2
        return {
            "nw": (r.x, r.y),
            "n": (cx, r.y),
            "ne": (r.right, r.y),
            "e": (r.right, cy),
            "se": (r.right, r.bottom),
            "s": (cx, r.bottom),
            "sw": (r.x, r.bottom),
            "w": (r.x, cy),
        }

    def hit_test(self, x: float, y: float) -> Tuple[Optional[DragMode], Optional[str]]:
        """Resize handles win over the interior."""
        radius = self.config.interaction.handle_radius
        for name, (hx, hy) in self.handle_positions().items():
            if np.hypot(hx - x, hy - y) < radius:
                return DragMode.RESIZE, name
        if self._rect.contains(x, y):
            return DragMode.MOVE, None
        return None, None

    def pointer_down(self, x: float, y: float) -> bool:
        if self._session is not None:
            return False

        mode, handle = self.hit_test(x, y)
        if mode is None:
            return False

        self._session = DragSession(
            mode=mode, handle=handle, start=(x, y), last=(x, y), start_rect=self._rect
        )
        logger.debug(f"Cropper {mode.value} started (handle={handle})")
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        if self._session is None:
            return False

        session = self._session
        session.last = (x, y)
        dx = x - session.start[0]
        dy = y - session.start[1]

        if session.mode == DragMode.MOVE:
            self._rect = self._moved(session.start_rect, dx, dy)
        else:
            self._rect = self._resized(session.start_rect, session.handle, dx, dy)
        return True

    def pointer_up(self) -> None:
        self._session = None

    def reset(self) -> None:
        self._session = None
        self._rect = self._initial_rect

    def constrain(self, rect: Rect) -> Rect:
        """Clamp a rectangle to the minimum size and the canvas bounds."""
        width = min(max(rect.width, self.min_size), self.canvas_width)
        height = min(max(rect.height, self.min_size), self.canvas_height)
        x = min(max(rect.x, 0), self.canvas_width - width)
        y = min(max(rect.y, 0), self.canvas_height - height)
        return Rect(x=x, y=y, width=width, height=height)

    def _moved(self, start: Rect, dx: float, dy: float) -> Rect:
        return self.constrain(
            Rect(x=start.x + dx, y=start.y + dy, width=start.width, height=start.height)
        )

    def _resized(self, start: Rect, handle: str, dx: float, dy: float) -> Rect:
        left, top, right, bottom = start.x, start.y, start.right, start.bottom

        # The edge opposite the grabbed one stays fixed
        if "w" in handle:
            left = max(min(left + dx, right - self.min_size), 0)
        if "e" in handle:
            right = min(max(right + dx, left + self.min_size), self.canvas_width)
        if "n" in handle:
            top = max(min(top + dy, bottom - self.min_size), 0)
        if "s" in handle:
            bottom = min(max(bottom + dy, top + self.min_size), self.canvas_height)

        return self.constrain(
            Rect(x=left, y=top, width=right - left, height=bottom - top)
        )

    def to_quadrilateral(self) -> Quadrilateral:
        """Selection corners in canonical [tl, tr, br, bl] order, display space."""
        return self._rect.corners()

    def source_rect(self) -> Rect:
        r = self._rect
        return Rect(
            x=r.x / self.scale,
            y=r.y / self.scale,
            width=r.width / self.scale,
            height=r.height / self.scale,
        )

    def crop(self) -> np.ndarray:
        """Crop of the full-resolution source image under the selection."""
        r = self.source_rect()
        h, w = self.image.shape[:2]
        x0, y0 = max(int(round(r.x)), 0), max(int(round(r.y)), 0)
        x1, y1 = min(int(round(r.right)), w), min(int(round(r.bottom)), h)
        return self.image[y0:y1, x0:x1].copy()

    def render(self, frame: np.ndarray) -> np.ndarray:
        """Draw the selection onto a display-sized frame."""
        return draw_rect(frame, self._rect, list(self.handle_positions().values()))
