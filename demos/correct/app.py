"""
Streamlit Correction Page.

Static-upload rendition of the correction flow, for users without camera
access:
1. Upload a document photo
2. Adjust the 4 corners numerically (seeded with the detected contour)
3. Watch the quality badge and the rectified preview update
4. Confirm to post the corrected points to the OCR service
5. Alternate tab: axis-aligned rectangle crop
"""

import json
import logging
import sys
from io import BytesIO
from pathlib import Path

import cv2
import numpy as np
import streamlit as st
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.types import CORNER_LABELS, Point, Rect  # noqa: E402
from src.editor import PointEditor, RectangleCropper  # noqa: E402
from src.editor import load_config as load_editor_config  # noqa: E402
from src.live_detection import find_document_contour  # noqa: E402
from src.live_detection import load_config as load_detection_config  # noqa: E402
from src.ocr_client import OCRClient, OCRClientError  # noqa: E402
from src.ocr_client import load_config as load_client_config  # noqa: E402
from src.utils.io import encode_data_url  # noqa: E402
from src.utils.logging_config import setup_logging  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)


def to_rgb(image: np.ndarray) -> np.ndarray:
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def decode_upload(uploaded_file) -> np.ndarray:
    """Decode an uploaded file into a BGR array."""
    pil_image = Image.open(BytesIO(uploaded_file.getvalue())).convert("RGB")
    return cv2.cvtColor(np.array(pil_image), cv2.COLOR_RGB2BGR)


def initial_points(image: np.ndarray):
    """Detected contour in source pixels, or None for the default quad."""
    candidate = find_document_contour(image, load_detection_config())
    if candidate is None:
        logger.info("No contour detected in upload, using default corners")
        return None
    return candidate.points


def render_badge(tier_value: str, color: str) -> None:
    st.markdown(
        f"<span style='background-color:{color};color:white;padding:4px 12px;"
        f"border-radius:12px;font-weight:600'>Quality: {tier_value.upper()}</span>",
        unsafe_allow_html=True,
    )


def point_editor_tab(image: np.ndarray, upload_key: str) -> None:
    """Numeric corner adjustment with live preview and confirm."""
    config = load_editor_config()

    if st.session_state.get("upload_key") != upload_key:
        st.session_state.upload_key = upload_key
        st.session_state.seed_points = initial_points(image)
        st.session_state.pop("result", None)

    editor = PointEditor(image, st.session_state.seed_points, config=config)

    st.markdown("**Corner positions** _(display pixels)_")
    new_points = []
    cols = st.columns(4)
    for i, (label, point) in enumerate(zip(CORNER_LABELS, editor.initial_points)):
        with cols[i]:
            st.markdown(f"**{label}**")
            x = st.number_input(
                "x",
                min_value=0.0,
                max_value=float(editor.display_size.width),
                value=float(round(point.x, 1)),
                step=1.0,
                key=f"{upload_key}_x{i}",
            )
            y = st.number_input(
                "y",
                min_value=0.0,
                max_value=float(editor.display_size.height),
                value=float(round(point.y, 1)),
                step=1.0,
                key=f"{upload_key}_y{i}",
            )
            new_points.append(Point(x=x, y=y))

    editor.set_points(new_points)
    render_badge(editor.quality.value, editor.quality_color)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Editor**")
        st.image(to_rgb(editor.render()), width="stretch")
    with col2:
        st.markdown("**Rectified preview**")
        if editor.preview is not None and not editor.preview.is_empty:
            st.image(to_rgb(editor.preview.image), width="stretch")
            st.caption(f"{editor.preview.width} x {editor.preview.height} px")
        else:
            st.warning("Quadrilateral is degenerate, nothing to preview.")

    st.markdown("---")
    if st.button("✅ Confirm", type="primary"):
        image_url = encode_data_url(image, ".jpg")
        result = editor.confirm(image_url)
        payload = result.to_payload()

        try:
            data = OCRClient(load_client_config()).process(result)
        except OCRClientError as e:
            st.error(f"❌ Processing error: {e}")
            logger.error(f"OCR processing failed: {e}")
        else:
            st.success("✅ Recognition completed")
            st.session_state.result = data

        with st.expander("Submitted points"):
            st.code(json.dumps(payload["points"], indent=2), language="json")

    if st.session_state.get("result") is not None:
        st.json(st.session_state.result)


def rectangle_tab(image: np.ndarray, upload_key: str) -> None:
    """Axis-aligned crop, coarser alternative to the point editor."""
    cropper = RectangleCropper(image)
    rect = cropper.rect
    max_w, max_h = float(cropper.canvas_width), float(cropper.canvas_height)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        x = st.number_input("x", 0.0, max_w, float(rect.x), key=f"{upload_key}_rx")
    with col2:
        y = st.number_input("y", 0.0, max_h, float(rect.y), key=f"{upload_key}_ry")
    with col3:
        w = st.number_input(
            "width", 0.0, max_w, float(rect.width), key=f"{upload_key}_rw"
        )
    with col4:
        h = st.number_input(
            "height", 0.0, max_h, float(rect.height), key=f"{upload_key}_rh"
        )

    cropper = RectangleCropper(image, initial_rect=Rect(x=x, y=y, width=w, height=h))
    display = cv2.resize(
        image,
        (cropper.canvas_width, cropper.canvas_height),
        interpolation=cv2.INTER_AREA,
    )

    col1, col2 = st.columns(2)
    with col1:
        st.image(to_rgb(cropper.render(display)), width="stretch")
    with col2:
        st.image(to_rgb(cropper.crop()), width="stretch")
        r = cropper.source_rect()
        st.caption(
            f"Source crop: {r.width:.0f} x {r.height:.0f} px at ({r.x:.0f}, {r.y:.0f})"
        )


def main():
    st.set_page_config(
        page_title="Document Corner Correction",
        page_icon="📄",
        layout="wide",
    )
    st.markdown("## 📄 Document Corner Correction")
    st.markdown(
        "Upload a photo of the document, adjust its four corners and confirm."
    )

    uploaded_file = st.file_uploader(
        "Upload document photo", type=["jpg", "jpeg", "png"]
    )
    if uploaded_file is None:
        st.info("Upload an image to start.")
        return

    try:
        image = decode_upload(uploaded_file)
    except Exception as e:
        st.error(f"❌ Could not read image: {e}")
        return

    upload_key = f"{uploaded_file.name}_{uploaded_file.size}"
    tab1, tab2 = st.tabs(["📐 Point Editor", "✂️ Rectangle Crop"])
    with tab1:
        point_editor_tab(image, upload_key)
    with tab2:
        try:
            rectangle_tab(image, upload_key)
        except ValueError as e:
            st.error(f"❌ {e}")


if __name__ == "__main__":
    main()
