"""
OCR Service Client

Posts confirmed corner corrections to the document OCR service.
"""

from src.ocr_client.client import OCRClient
from src.ocr_client.config_loader import load_config
from src.ocr_client.types import OCRClientConfig, OCRClientError

__all__ = ["OCRClient", "OCRClientConfig", "OCRClientError", "load_config"]
