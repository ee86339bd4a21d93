"""
OpenCV HighGUI Scanner Demo.

Desktop rendition of the capture-and-correct flow:
1. Live camera view with the detected document outlined in green
   (press ``c`` to capture once a document is detected, ``q`` to quit)
2. Point editor over the captured frame: drag corners with the mouse,
   ``r`` resets, ``Enter`` confirms, ``q`` quits
3. Rectified preview window updated on every drag
4. Optional POST of the confirmed points to the OCR service

When the camera cannot be opened, pass ``--image`` to load a photo instead.

Usage:
    python demos/scan/app.py
    python demos/scan/app.py --image form.jpg --output rectified.png
    python demos/scan/app.py --api-url http://localhost:8000
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.editor import PointEditor, PointerEvent, PointerKind  # noqa: E402
from src.editor.types import CorrectionResult  # noqa: E402
from src.live_detection import (  # noqa: E402
    CapturedFrame,
    DetectorState,
    HighGuiFrameScheduler,
    LiveContourDetector,
    VideoSource,
    find_document_contour,
    load_config as load_detection_config,
)
from src.ocr_client import OCRClient, OCRClientError  # noqa: E402
from src.ocr_client import load_config as load_client_config  # noqa: E402
from src.utils.io import load_image  # noqa: E402
from src.utils.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

SCANNER_WINDOW = "Scanner"
EDITOR_WINDOW = "Correct corners"
PREVIEW_WINDOW = "Rectified preview"

KEY_ENTER = (10, 13)
KEY_QUIT = (ord("q"), 27)


def _window_closed(name: str) -> bool:
    return cv2.getWindowProperty(name, cv2.WND_PROP_VISIBLE) < 1


def _draw_status(frame: np.ndarray, message: str) -> np.ndarray:
    canvas = frame.copy()
    cv2.rectangle(canvas, (0, 0), (canvas.shape[1], 36), (0, 0, 0), -1)
    cv2.putText(
        canvas, message, (10, 25), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
    )
    return canvas


def run_live(camera: int) -> Optional[CapturedFrame]:
    """
    Show the live detector until a capture or quit.

    Returns:
        The captured frame, or None if the user quit or the camera failed.
    """
    config = load_detection_config()
    scheduler = HighGuiFrameScheduler(config.camera.frame_delay_ms)
    source = VideoSource(
        camera,
        config.camera.width,
        config.camera.height,
        max_failed_reads=config.camera.max_failed_reads,
    )
    detector = LiveContourDetector(
        scheduler,
        source,
        config,
        on_status=lambda status: logger.debug(status.value),
    )

    detector.start()
    if detector.state != DetectorState.DETECTING:
        logger.error(detector.status.value)
        return None

    cv2.namedWindow(SCANNER_WINDOW, cv2.WINDOW_NORMAL)
    captured = None
    try:
        while detector.state == DetectorState.DETECTING:
            key = scheduler.wait() & 0xFF
            if detector.frame is not None:
                cv2.imshow(
                    SCANNER_WINDOW, _draw_status(detector.frame, detector.status.value)
                )

            if key in KEY_QUIT or _window_closed(SCANNER_WINDOW):
                break
            if key == ord("c"):
                if detector.can_capture:
                    captured = detector.capture()
                    break
                logger.warning("No document detected yet, nothing to capture")
    finally:
        detector.stop()
        cv2.destroyWindow(SCANNER_WINDOW)

    if detector.state == DetectorState.ERROR:
        logger.error(detector.status.value)
    return captured


def run_editor(editor: PointEditor, image_url: str) -> Optional[CorrectionResult]:
    """
    Run the point editor window until confirm or quit.

    Returns:
        The confirmed correction, or None if the user quit.
    """

    def on_mouse(event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            editor.handle_event(PointerEvent(PointerKind.DOWN, x, y))
        elif event == cv2.EVENT_MOUSEMOVE:
            editor.handle_event(PointerEvent(PointerKind.MOVE, x, y))
        elif event == cv2.EVENT_LBUTTONUP:
            editor.handle_event(PointerEvent(PointerKind.UP, x, y))

    cv2.namedWindow(EDITOR_WINDOW, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(EDITOR_WINDOW, on_mouse)
    logger.info("Drag the corners; 'r' resets, Enter confirms, 'q' quits")

    result = None
    try:
        while True:
            cv2.imshow(EDITOR_WINDOW, editor.render())
            if editor.preview is not None and not editor.preview.is_empty:
                cv2.imshow(PREVIEW_WINDOW, editor.preview.image)

            key = cv2.waitKey(15) & 0xFF
            if key in KEY_QUIT or _window_closed(EDITOR_WINDOW):
                break
            if key == ord("r"):
                editor.reset()
            elif key in KEY_ENTER:
                result = editor.confirm(image_url)
                break
    finally:
        cv2.destroyAllWindows()
    return result


def editor_for_image(image: np.ndarray) -> PointEditor:
    """Editor over a static image, seeded with its detected contour if any."""
    candidate = find_document_contour(image, load_detection_config())
    if candidate is None:
        logger.info("No document contour in image, starting from default corners")
        return PointEditor(image)
    return PointEditor(image, candidate.points)


def main(argv=None):
    """Main entry point for the scanner demo."""
    parser = argparse.ArgumentParser(
        description="Capture a document and correct its corners"
    )
    parser.add_argument(
        "--image",
        type=str,
        help="Photo path, URL or data URL to load instead of the camera",
    )
    parser.add_argument(
        "--image-url",
        type=str,
        help="Image reference sent to the OCR service (default: --image or capture)",
    )
    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera index (default: from live detection config)",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        help="OCR service base URL; confirmed points are posted there",
    )
    parser.add_argument(
        "--output", type=str, help="Write the rectified image to this path"
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Logging level (default: INFO)"
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.image:
        image = load_image(args.image)
        editor = editor_for_image(image)
        image_url = args.image_url or args.image
    else:
        camera = args.camera
        if camera is None:
            camera = load_detection_config().camera.index
        captured = run_live(camera)
        if captured is None:
            logger.info("Nothing captured. Use --image to correct a photo instead.")
            return 1
        editor = PointEditor.from_capture(captured)
        image_url = args.image_url or captured.data_url

    result = run_editor(editor, image_url)
    if result is None:
        logger.info("Correction cancelled")
        return 1

    logger.info(f"Quality: {result.quality.value}")
    logger.info(f"Points (source px): {result.to_payload()['points']}")

    if args.output:
        if editor.preview is None or editor.preview.is_empty:
            logger.warning("Rectified image is empty, nothing written")
        else:
            cv2.imwrite(args.output, editor.preview.image)
            logger.info(f"Rectified image written to {args.output}")

    if args.api_url:
        config = load_client_config()
        config.api_url = args.api_url.rstrip("/")
        try:
            data = OCRClient(config).process(result)
        except OCRClientError as e:
            logger.error(f"OCR processing failed: {e}")
            return 1
        print(json.dumps(data, indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
