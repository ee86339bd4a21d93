"""
Unit tests for the interactive point editor.
"""

import numpy as np
import pytest

from src.common.types import Point, points_to_pairs
from src.editor.config_loader import load_config
from src.editor.point_editor import PointEditor
from src.editor.types import (
    EditorState,
    PointerEvent,
    PointerKind,
    PointerSource,
)
from src.geometry.types import QualityTier
from src.live_detection.types import CapturedFrame

# Source-space corners of the wide_image fixture document (scale 0.5)
SOURCE_POINTS = [[200, 100], [1400, 100], [1400, 1100], [200, 1100]]


@pytest.fixture
def editor(wide_image):
    return PointEditor(wide_image, SOURCE_POINTS)


class TestInitialization:
    """Tests for editor construction and display scaling."""

    def test_points_scaled_to_display(self, editor):
        assert editor.scale == pytest.approx(0.5)
        assert points_to_pairs(editor.points) == [
            [100, 50],
            [700, 50],
            [700, 550],
            [100, 550],
        ]

    def test_sizes(self, editor):
        assert editor.image_size.to_dict() == {"width": 1600, "height": 1200}
        assert editor.display_size.to_dict() == {"width": 800, "height": 600}

    def test_small_image_not_enlarged(self):
        image = np.zeros((480, 640, 3), dtype=np.uint8)

        editor = PointEditor(image, [[10, 10], [600, 10], [600, 400], [10, 400]])

        assert editor.scale == 1.0
        assert points_to_pairs(editor.points)[1] == [600, 10]

    def test_default_quadrilateral_without_points(self, wide_image):
        editor = PointEditor(wide_image)

        assert points_to_pairs(editor.points) == [
            [200, 150],
            [600, 150],
            [600, 450],
            [200, 450],
        ]

    def test_empty_points_use_default(self, wide_image):
        editor = PointEditor(wide_image, [])

        assert len(editor.points) == 4
        assert editor.points[0] == Point(x=200, y=150)

    def test_wrong_point_count(self, wide_image):
        with pytest.raises(ValueError, match="Expected exactly 4 initial points"):
            PointEditor(wide_image, [[0, 0], [10, 0], [10, 10]])

    def test_empty_image(self):
        with pytest.raises(ValueError, match="Invalid input image"):
            PointEditor(np.zeros((0, 0, 3), dtype=np.uint8))

    def test_caller_points_not_aliased(self, wide_image):
        points = [list(p) for p in SOURCE_POINTS]

        editor = PointEditor(wide_image, points)
        editor.pointer_down(100, 50)
        editor.pointer_move(120, 70)

        assert points == SOURCE_POINTS


class TestDragging:
    """Tests for the IDLE/DRAGGING state machine."""

    def test_grab_within_hit_radius(self, editor):
        assert editor.pointer_down(111, 50)
        assert editor.state == EditorState.DRAGGING
        assert editor.dragging_index == 0

    def test_hit_radius_is_strict(self, editor):
        """Exactly the hit radius away does not grab."""
        assert not editor.pointer_down(112, 50)
        assert editor.state == EditorState.IDLE

    def test_miss(self, editor):
        assert not editor.pointer_down(400, 300)
        assert editor.dragging_index is None

    def test_first_matching_corner_wins(self, wide_image):
        editor = PointEditor(
            wide_image, [[200, 200], [204, 200], [1400, 1100], [200, 1100]]
        )

        editor.pointer_down(101, 100)

        assert editor.dragging_index == 0

    def test_second_pointer_down_ignored(self, editor):
        editor.pointer_down(100, 50)

        assert not editor.pointer_down(700, 50)
        assert editor.dragging_index == 0

    def test_point_snaps_to_pointer(self, editor):
        """The grabbed corner jumps to the pointer, without keeping the grab offset."""
        editor.pointer_down(105, 55)

        editor.pointer_move(150, 80)

        assert editor.points[0] == Point(x=150, y=80)
        assert editor.points[1:] == [
            Point(x=700, y=50),
            Point(x=700, y=550),
            Point(x=100, y=550),
        ]

    def test_move_without_drag_is_noop(self, editor):
        before = editor.points

        assert not editor.pointer_move(300, 300)
        assert editor.points == before

    def test_pointer_up_ends_drag(self, editor):
        editor.pointer_down(100, 50)
        editor.pointer_up()

        editor.pointer_move(300, 300)

        assert editor.state == EditorState.IDLE
        assert editor.points[0] == Point(x=100, y=50)

    def test_leave_ends_drag(self, editor):
        editor.handle_event(PointerEvent(PointerKind.DOWN, 100, 50))

        editor.handle_event(PointerEvent(PointerKind.LEAVE))

        assert editor.state == EditorState.IDLE

    def test_pointer_leave_ends_drag(self, editor):
        editor.pointer_down(100, 50)

        editor.pointer_leave()
        editor.pointer_move(300, 300)

        assert editor.points[0] == Point(x=100, y=50)

    def test_touch_move_prevents_default(self, editor):
        editor.handle_event(
            PointerEvent(PointerKind.DOWN, 700, 50, PointerSource.TOUCH)
        )
        event = PointerEvent(PointerKind.MOVE, 650, 60, PointerSource.TOUCH)

        changed = editor.handle_event(event)

        assert changed
        assert event.default_prevented
        assert editor.points[1] == Point(x=650, y=60)

    def test_mouse_move_not_prevented(self, editor):
        editor.handle_event(PointerEvent(PointerKind.DOWN, 700, 50))
        event = PointerEvent(PointerKind.MOVE, 650, 60)

        editor.handle_event(event)

        assert not event.default_prevented


class TestReset:
    """Tests for reset and set_points."""

    def test_reset_restores_initial_points(self, editor):
        editor.pointer_down(100, 50)
        editor.pointer_move(300, 300)

        editor.reset()

        assert points_to_pairs(editor.points)[0] == [100, 50]
        assert editor.state == EditorState.IDLE

    def test_reset_twice_after_edits(self, editor):
        """Editing after a reset never changes what the next reset restores."""
        editor.reset()
        editor.pointer_down(100, 50)
        editor.pointer_move(10, 10)
        editor.pointer_up()

        editor.reset()

        assert editor.points == editor.initial_points
        assert editor.points[0] == Point(x=100, y=50)

    def test_set_points(self, editor):
        editor.set_points([[0, 0], [10, 0], [10, 10], [0, 10]])

        assert points_to_pairs(editor.points)[2] == [10, 10]

    def test_set_points_wrong_count(self, editor):
        with pytest.raises(ValueError, match="Expected exactly 4 points"):
            editor.set_points([[0, 0]])


class TestQuality:
    """Tests for the quality badge."""

    def test_rectangle_is_good(self, editor):
        assert editor.quality == QualityTier.GOOD
        assert editor.quality_color == "#00ff00"

    def test_skewed_is_poor(self, editor):
        editor.pointer_down(100, 50)
        editor.pointer_move(500, 50)

        assert editor.quality == QualityTier.POOR
        assert editor.quality_color == "#ff0000"

    def test_collapsed_corner_is_neutral(self, editor):
        editor.pointer_down(100, 50)
        editor.pointer_move(700, 50)

        assert editor.quality == QualityTier.NEUTRAL


class TestPreview:
    """Tests for the live rectified preview."""

    def test_preview_on_load(self, editor):
        assert editor.preview is not None
        # Display quad 600x500 display px
        assert (editor.preview.width, editor.preview.height) == (600, 500)
        assert editor.preview.skipped_triangles == 0

    def test_preview_recomputed_on_move(self, wide_image):
        previews = []
        editor = PointEditor(wide_image, SOURCE_POINTS, on_preview=previews.append)

        editor.pointer_down(100, 50)
        editor.pointer_move(120, 60)
        editor.pointer_move(140, 70)

        assert len(previews) == 3
        assert editor.preview is previews[-1]

    def test_preview_disabled(self, wide_image):
        config = load_config()
        config.preview.enabled = False

        editor = PointEditor(wide_image, SOURCE_POINTS, config=config)

        assert editor.preview is None


class TestConfirm:
    """Tests for confirm and the OCR payload."""

    def test_points_returned_in_source_space(self, editor):
        editor.pointer_down(100, 50)
        editor.pointer_move(110, 60)

        result = editor.confirm("https://example.org/form.jpg")

        assert points_to_pairs(result.points) == [
            [220, 120],
            [1400, 100],
            [1400, 1100],
            [200, 1100],
        ]

    def test_payload(self, editor):
        payload = editor.confirm("https://example.org/form.jpg").to_payload()

        assert payload == {
            "image_url": "https://example.org/form.jpg",
            "points": [[200, 100], [1400, 100], [1400, 1100], [200, 1100]],
            "imageSize": {"width": 1600, "height": 1200},
            "displaySize": {"width": 800, "height": 600},
        }

    def test_on_confirm_callback(self, wide_image):
        received = []
        editor = PointEditor(wide_image, SOURCE_POINTS, on_confirm=received.append)

        result = editor.confirm("data:image/jpeg;base64,AAAA")

        assert received == [result]
        assert result.quality == QualityTier.GOOD
        assert result.color == "#00ff00"


class TestRendering:
    """Tests for from_capture and render."""

    def test_from_capture(self, wide_image):
        captured = CapturedFrame(
            image=wide_image, points=[Point(x=x, y=y) for x, y in SOURCE_POINTS]
        )

        editor = PointEditor.from_capture(captured)

        assert editor.points[0] == Point(x=100, y=50)

    def test_render_is_display_sized(self, editor):
        canvas = editor.render()

        assert canvas.shape == (600, 800, 3)

    def test_render_leaves_display_image_untouched(self, editor):
        before = editor.display_image().copy()

        editor.render()

        np.testing.assert_array_equal(editor.display_image(), before)
