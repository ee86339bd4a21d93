"""
Data types for the OCR service client.
"""

from dataclasses import dataclass
from typing import Optional


class OCRClientError(RuntimeError):
    """
    A request to the OCR service failed.

    Attributes:
        status_code: HTTP status of the response, None for transport failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class OCRClientConfig:
    """
    OCR service connection settings.

    Attributes:
        api_url: Base URL of the service, without trailing slash.
        timeout_seconds: Per-request timeout.
        api_token: Optional bearer token sent with every request.
    """

    api_url: str
    timeout_seconds: float
    api_token: Optional[str] = None
