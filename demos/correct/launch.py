"""
Demo Launcher Script for the Streamlit Correction Page.
"""

import logging
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def launch_demo(port: int = 8501, server: str = "127.0.0.1") -> None:
    """
    Launch the Streamlit correction page.

    Raises:
        ImportError: If Streamlit is not installed
    """
    app_path = Path(__file__).resolve().parent / "app.py"
    logger.info(f"Launching Streamlit app: {app_path}")

    try:
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                str(app_path),
                "--server.port",
                str(port),
                "--server.address",
                server,
            ],
            cwd=PROJECT_ROOT,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"Failed to launch Streamlit: {e}")
        raise
    except FileNotFoundError:
        raise ImportError(
            "Streamlit is not installed.\n\n"
            "Please install it using:\n"
            "  pip install streamlit"
        )


def main(port: int = 8501, server: str = "127.0.0.1") -> None:
    """Main entry point for demo launcher."""
    logger.info("=" * 60)
    logger.info("Document Corner Correction Demo Launcher")
    logger.info("=" * 60)
    launch_demo(port, server)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    main()
