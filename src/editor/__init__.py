"""
Interactive Point Editor

Editing surfaces over a document photo:
1. PointEditor: canonical drag-to-correct 4-point editor with live
   rectified preview and colour-coded quality badge
2. RectangleCropper: alternate axis-aligned move/resize cropper
3. PointPicker: legacy click-to-place corner picker
"""

from src.editor.config_loader import load_config
from src.editor.point_editor import PointEditor
from src.editor.point_picker import PointPicker
from src.editor.rectangle_cropper import RectangleCropper
from src.editor.types import (
    CorrectionResult,
    EditorConfig,
    EditorState,
    PointerEvent,
    PointerKind,
    PointerSource,
    PointLimitReached,
)

__all__ = [
    "PointEditor",
    "PointPicker",
    "RectangleCropper",
    "load_config",
    "CorrectionResult",
    "EditorConfig",
    "EditorState",
    "PointerEvent",
    "PointerKind",
    "PointerSource",
    "PointLimitReached",
]
