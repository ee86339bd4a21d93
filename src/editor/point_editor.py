"""
Interactive 4-point editor.

Owns the working quadrilateral of one correction session. Mouse and touch
front-ends feed it pointer events; it hit-tests the corner handles, lets one
corner at a time snap to the pointer, keeps a rectified preview in sync
with every change and, on confirm, converts the corners back to source
space for the OCR service.

State machine::

    IDLE --pointer_down within hit radius of point i--> DRAGGING(i)
    DRAGGING(i) --pointer_move--> DRAGGING(i)   (point i := pointer)
    DRAGGING(i) --pointer_up / pointer_leave--> IDLE
"""

import logging
from typing import Callable, List, Optional, Sequence

import cv2
import numpy as np

from src.common.types import NUM_CORNERS, Point, Size, points_from_pairs
from src.editor.config_loader import load_config
from src.editor.overlay import draw_quadrilateral
from src.editor.types import (
    CorrectionResult,
    DragMode,
    DragSession,
    EditorConfig,
    EditorState,
    PointerEvent,
    PointerKind,
    PointerSource,
)
from src.geometry.angles import quality_score
from src.geometry.quadrilateral import copy_quadrilateral, default_quadrilateral
from src.geometry.scaling import (
    compute_display_scale,
    display_size,
    scale_to_display,
    scale_to_source,
)
from src.geometry.types import QualityThresholds, QualityTier
from src.rectification.types import RectificationResult
from src.rectification.warp import PerspectiveRectifier

logger = logging.getLogger(__name__)


class PointEditor:
    """
    Drag-to-correct editor over the 4 corners of a document photo.

    Example:
        >>> image = cv2.imread("form.jpg")  # 1600px wide, shown at scale 0.5
        >>> editor = PointEditor(image, [[40, 30], [1500, 60], [1480, 2100], [20, 2080]])
        >>> editor.pointer_down(20, 15)
        True
        >>> editor.pointer_move(25, 18)
        True
        >>> editor.pointer_up()
        >>> result = editor.confirm("https://example.org/uploads/form.jpg")
        >>> result.to_payload()["points"][0]
        [50.0, 36.0]
    """

    def __init__(
        self,
        image: np.ndarray,
        initial_points: Optional[Sequence] = None,
        config: Optional[EditorConfig] = None,
        rectifier: Optional[PerspectiveRectifier] = None,
        on_preview: Optional[Callable[[RectificationResult], None]] = None,
        on_confirm: Optional[Callable[[CorrectionResult], None]] = None,
    ):
        """
        Initialize an editing session.

        Args:
            image: Full-resolution source image (BGR).
            initial_points: 4 corners in source space (``[[x, y], ...]``,
                ``{"x", "y"}`` dicts or Points). When absent or empty a
                centered default quadrilateral is used.
            config: Pre-loaded configuration. If None, loads the default file.
            rectifier: Rectifier for the live preview.
            on_preview: Called with every recomputed preview.
            on_confirm: Called with the CorrectionResult on confirm.
        """
        if image is None or image.size == 0:
            raise ValueError("Invalid input image: image is None or empty")

        self.config = config if config is not None else load_config()
        self.image = image
        self.rectifier = rectifier or PerspectiveRectifier(
            self.config.preview.interpolation
        )
        self.on_preview = on_preview
        self.on_confirm = on_confirm
        self.thresholds = QualityThresholds(
            good_below=self.config.quality.good_below,
            fair_below=self.config.quality.fair_below,
        )

        height, width = image.shape[:2]
        self.scale = compute_display_scale(width, self.config.display.max_width)
        self.image_size = Size(width=width, height=height)
        display_w, display_h = display_size(width, height, self.scale)
        self.display_size = Size(width=display_w, height=display_h)
        self._display_image = None

        if initial_points is not None and len(initial_points) > 0:
            source_points = points_from_pairs(initial_points)
            if len(source_points) != NUM_CORNERS:
                raise ValueError(
                    f"Expected exactly 4 initial points, got {len(source_points)}"
                )
            initial = scale_to_display(source_points, self.scale)
        else:
            logger.info("No initial points supplied, using default quadrilateral")
            initial = default_quadrilateral(
                display_w, display_h, self.config.cropper.default_fraction
            )

        self._initial_points: List[Point] = copy_quadrilateral(initial)
        self._points: List[Point] = copy_quadrilateral(initial)
        self._session: Optional[DragSession] = None
        self.preview: Optional[RectificationResult] = None

        logger.info(
            f"Editor ready: source {width}x{height}, display {display_w}x{display_h}, "
            f"scale {self.scale:.4f}"
        )
        self._refresh_preview()

    @classmethod
    def from_capture(cls, captured, **kwargs) -> "PointEditor":
        """
        Start a session from a live-detector capture.

        ``captured`` needs ``image`` and ``points`` attributes; its points
        are in frame pixels, i.e. source space.
        """
        return cls(captured.image, captured.points, **kwargs)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def points(self) -> List[Point]:
        """Copy of the working quadrilateral, display space."""
        return list(self._points)

    @property
    def initial_points(self) -> List[Point]:
        return list(self._initial_points)

    @property
    def state(self) -> EditorState:
        return EditorState.IDLE if self._session is None else EditorState.DRAGGING

    @property
    def dragging_index(self) -> Optional[int]:
        return None if self._session is None else self._session.index

    @property
    def quality(self) -> QualityTier:
        return quality_score(self._points, self.thresholds)

    @property
    def quality_color(self) -> str:
        return self.config.quality.colors[self.quality]

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> Optional[int]:
        """Index of the first corner strictly within the hit radius of (x, y)."""
        pointer = Point(x=x, y=y)
        for i, point in enumerate(self._points):
            if point.distance_to(pointer) < self.config.interaction.hit_radius:
                return i
        return None

    def pointer_down(self, x: float, y: float) -> bool:
        """
        Start dragging the corner under the pointer.

        Ignored while a drag is already in progress.

        Returns:
            True if a corner was grabbed.
        """
        if self._session is not None:
            return False

        index = self.hit_test(x, y)
        if index is None:
            return False

        self._session = DragSession(
            mode=DragMode.MOVE, index=index, start=(x, y), last=(x, y)
        )
        logger.debug(f"Grabbed corner {index} at ({x:.1f}, {y:.1f})")
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Snap the grabbed corner to the pointer.

        Returns:
            True if the quadrilateral changed.
        """
        if self._session is None:
            return False

        self._session.last = (x, y)
        points = list(self._points)
        points[self._session.index] = Point(x=x, y=y)
        self._points = points
        self._refresh_preview()
        return True

    def pointer_up(self) -> None:
        """End the current drag, if any."""
        if self._session is not None:
            logger.debug(f"Released corner {self._session.index}")
        self._session = None

    def pointer_leave(self) -> None:
        """Pointer left the canvas: the drag stops, as on release."""
        self.pointer_up()

    def handle_event(self, event: PointerEvent) -> bool:
        """
        Dispatch a mouse or touch event.

        Touch moves during a drag are marked ``default_prevented`` so the
        host does not scroll the page.

        Returns:
            True if the event grabbed a corner or changed the quadrilateral.
        """
        if event.kind == PointerKind.DOWN:
            return self.pointer_down(event.x, event.y)

        if event.kind == PointerKind.MOVE:
            if event.source == PointerSource.TOUCH:
                event.prevent_default()
            return self.pointer_move(event.x, event.y)

        if event.kind == PointerKind.LEAVE:
            self.pointer_leave()
        else:
            self.pointer_up()
        return False

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def set_points(self, points: Sequence) -> None:
        """Replace the working quadrilateral with display-space points."""
        new_points = points_from_pairs(points)
        if len(new_points) != NUM_CORNERS:
            raise ValueError(f"Expected exactly 4 points, got {len(new_points)}")
        self._points = copy_quadrilateral(new_points)
        self._refresh_preview()

    def reset(self) -> None:
        """Restore the points supplied at session start (not the default quad)."""
        self._session = None
        self._points = copy_quadrilateral(self._initial_points)
        logger.info("Points reset to initial quadrilateral")
        self._refresh_preview()

    def source_points(self) -> List[Point]:
        """Working quadrilateral mapped back to source space."""
        return scale_to_source(self._points, self.scale)

    def confirm(self, image_url: str) -> CorrectionResult:
        """
        Finish the session.

        Args:
            image_url: Reference to the original image, passed through to
                       the OCR service.

        Returns:
            CorrectionResult with source-space points and the quality badge.
            Also handed to ``on_confirm`` when set.
        """
        if len(self._points) != NUM_CORNERS:
            raise ValueError(f"Expected exactly 4 points, got {len(self._points)}")

        tier = self.quality
        result = CorrectionResult(
            image_url=image_url,
            points=self.source_points(),
            image_size=self.image_size,
            display_size=self.display_size,
            quality=tier,
            color=self.config.quality.colors[tier],
        )
        logger.info(f"Correction confirmed with quality '{tier.value}'")

        if self.on_confirm is not None:
            self.on_confirm(result)
        return result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def display_image(self) -> np.ndarray:
        """Source image shrunk to the display canvas (computed once)."""
        if self._display_image is None:
            size = (int(self.display_size.width), int(self.display_size.height))
            if self.scale == 1:
                self._display_image = self.image.copy()
            else:
                self._display_image = cv2.resize(
                    self.image, size, interpolation=cv2.INTER_AREA
                )
        return self._display_image

    def render(self) -> np.ndarray:
        """Display canvas with the quadrilateral, in its quality colour, and handles."""
        return draw_quadrilateral(
            self.display_image(),
            self._points,
            self.quality_color,
            self.dragging_index,
        )

    def _refresh_preview(self) -> None:
        if not self.config.preview.enabled or len(self._points) != NUM_CORNERS:
            return

        self.preview = self.rectifier.rectify(self.image, self._points, self.scale)
        if self.on_preview is not None:
            self.on_preview(self.preview)
