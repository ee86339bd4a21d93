"""
Configuration loader for the OCR service client.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

from src.ocr_client.types import OCRClientConfig
from src.utils.io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# Environment overrides for deployment without editing the YAML file
API_URL_ENV = "OCR_API_URL"
API_TOKEN_ENV = "OCR_API_TOKEN"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> OCRClientConfig:
    """
    Load OCR client configuration from YAML file.

    ``OCR_API_URL`` and ``OCR_API_TOKEN`` override the file values when set.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw_config = load_yaml(config_path)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info(f"Loaded OCR client configuration (api_url={config.api_url})")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> OCRClientConfig:
    api_url = os.environ.get(API_URL_ENV) or raw["api_url"]
    token = os.environ.get(API_TOKEN_ENV) or raw.get("api_token")
    return OCRClientConfig(
        api_url=str(api_url).rstrip("/"),
        timeout_seconds=float(raw["timeout_seconds"]),
        api_token=str(token) if token else None,
    )


def _validate_config(config: OCRClientConfig) -> None:
    if not config.api_url.startswith(("http://", "https://")):
        raise ValueError(f"api_url must be an http(s) URL, got {config.api_url!r}")
    if config.timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")
