#!/usr/bin/env python3
"""
Configuration Verification Script

Loads and validates the editor, live detection and OCR client configuration
files through their module loaders and prints the effective values.

Usage:
    python scripts/verify_config.py
    python scripts/verify_config.py --editor custom_editor.yaml
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.editor import config_loader as editor_config  # noqa: E402
from src.live_detection import config_loader as detection_config  # noqa: E402
from src.ocr_client import config_loader as client_config  # noqa: E402


def verify_configuration(
    editor_path: Path, detection_path: Path, client_path: Path
) -> bool:
    """
    Load every configuration file and report the result.

    Returns:
        True if all files load and validate.
    """
    print("=" * 60)
    print("  Configuration Verification  ")
    print("=" * 60)
    print()

    checks = []

    try:
        editor = editor_config.load_config(editor_path)
        print(f"  ✓ Editor: {editor_path}")
        print(f"      max display width {editor.display.max_width}px, "
              f"hit radius {editor.interaction.hit_radius:g}px")
        print(f"      quality thresholds {editor.quality.good_below:g} / "
              f"{editor.quality.fair_below:g} deg, "
              f"preview {editor.preview.interpolation}")
        checks.append(True)
    except (FileNotFoundError, ValueError) as e:
        print(f"  ✗ Editor: {e}")
        checks.append(False)

    try:
        detection = detection_config.load_config(detection_path)
        print(f"  ✓ Live detection: {detection_path}")
        print(f"      Canny {detection.preprocessing.canny_low:g}/"
              f"{detection.preprocessing.canny_high:g}, "
              f"min area {detection.contours.min_area:g}px^2, "
              f"retrieval {detection.contours.retrieval_mode}")
        print(f"      camera {detection.camera.index} at "
              f"{detection.camera.width}x{detection.camera.height}")
        checks.append(True)
    except (FileNotFoundError, ValueError) as e:
        print(f"  ✗ Live detection: {e}")
        checks.append(False)

    try:
        client = client_config.load_config(client_path)
        print(f"  ✓ OCR client: {client_path}")
        print(f"      {client.api_url} (timeout {client.timeout_seconds:g}s, "
              f"token {'set' if client.api_token else 'not set'})")
        checks.append(True)
    except (FileNotFoundError, ValueError) as e:
        print(f"  ✗ OCR client: {e}")
        checks.append(False)

    print()
    print("=" * 60)
    passed = sum(checks)
    print(f"  {passed}/{len(checks)} configuration files valid")
    print("=" * 60)
    return all(checks)


def main():
    parser = argparse.ArgumentParser(description="Validate configuration files")
    parser.add_argument(
        "--editor", type=Path, default=editor_config.DEFAULT_CONFIG_PATH
    )
    parser.add_argument(
        "--detection", type=Path, default=detection_config.DEFAULT_CONFIG_PATH
    )
    parser.add_argument(
        "--client", type=Path, default=client_config.DEFAULT_CONFIG_PATH
    )
    args = parser.parse_args()

    ok = verify_configuration(args.editor, args.detection, args.client)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
