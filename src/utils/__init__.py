"""
Shared Utilities

Common functions used across all modules.
"""

from src.utils.io import decode_data_url, encode_data_url, load_image, load_yaml
from src.utils.logging_config import setup_logging

__all__ = [
    "decode_data_url",
    "encode_data_url",
    "load_image",
    "load_yaml",
    "setup_logging",
]
