"""
Unified Demo Launcher.

This script provides a command-line interface to launch either demo.

Usage:
    # Live camera scanner with the OpenCV point editor
    python scripts/run_demo.py --demo scan

    # Scanner over a photo instead of the camera
    python scripts/run_demo.py --demo scan --image form.jpg

    # Streamlit correction page
    python scripts/run_demo.py --demo correct --port 8502
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.utils.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

DEMOS = {
    "scan": "OpenCV scanner: live detection, capture and corner correction",
    "correct": "Streamlit correction page: upload and corner correction",
}


def main():
    """Main entry point for demo launcher."""
    parser = argparse.ArgumentParser(
        description="Launch a document correction demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_demo.py --demo scan
  python scripts/run_demo.py --demo scan --image form.jpg --output out.png
  python scripts/run_demo.py --demo correct --port 8502
        """,
    )

    parser.add_argument(
        "--demo",
        type=str,
        required=True,
        choices=sorted(DEMOS),
        help="Demo to launch (scan: OpenCV window, correct: Streamlit page)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8501,
        help="Streamlit server port (default: 8501, correct demo only)",
    )
    parser.add_argument(
        "--server",
        type=str,
        default="127.0.0.1",
        help="Streamlit server address (default: 127.0.0.1, correct demo only)",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Logging level (default: INFO)"
    )

    # Remaining arguments are forwarded to the scan demo
    args, extra = parser.parse_known_args()
    setup_logging(args.log_level)

    logger.info("=" * 60)
    logger.info("Document Correction - Demo Launcher")
    logger.info("=" * 60)
    logger.info(f"Demo: {DEMOS[args.demo]}")
    logger.info("=" * 60)

    try:
        if args.demo == "scan":
            from demos.scan.app import main as scan_main

            sys.exit(scan_main(extra + ["--log-level", args.log_level]))

        from demos.correct.launch import main as correct_main

        correct_main(port=args.port, server=args.server)
    except Exception as e:
        logger.error(f"Failed to launch demo: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
