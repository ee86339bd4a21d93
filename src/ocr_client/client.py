"""
HTTP client for the document OCR service.

The service receives the original image reference together with the
corrected corners in source-image pixels and performs the rectification
and text extraction on its side.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from src.common.types import (
    Point,
    points_from_pairs,
    points_to_pairs,
    validate_quadrilateral,
)
from src.editor.types import CorrectionResult
from src.ocr_client.config_loader import load_config
from src.ocr_client.types import OCRClientConfig, OCRClientError

logger = logging.getLogger(__name__)


class OCRClient:
    """
    Client for the ``/process/`` and ``/ocr/correct/`` endpoints.

    Example:
        >>> client = OCRClient()
        >>> data = client.process(editor.confirm(image_url))
    """

    def __init__(
        self,
        config: Optional[OCRClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config if config is not None else load_config()
        self.session = session if session is not None else requests.Session()

    def process(self, correction: CorrectionResult) -> Dict[str, Any]:
        """
        Submit a confirmed correction for rectification and OCR.

        Args:
            correction: Result of ``PointEditor.confirm``.

        Returns:
            Decoded JSON body of the service response.

        Raises:
            OCRClientError: On a non-2xx response or a transport failure.
        """
        return self._post("/process/", correction.to_payload())

    def correct_image(self, record_id: str, points: Sequence) -> Dict[str, Any]:
        """
        Re-run extraction for a stored record with corrected corners.

        Args:
            record_id: Identifier of the stored document record.
            points: Four corners in source pixels, as Points or [x, y] pairs.
        """
        quad: List[Point] = points_from_pairs(points)
        validate_quadrilateral(quad)
        return self._post(
            "/ocr/correct/", {"id": record_id, "points": points_to_pairs(quad)}
        )

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.config.api_url}{path}"
        headers = {"Content-Type": "application/json"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"

        logger.info(f"POST {url}")
        try:
            response = self.session.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise OCRClientError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            message = _error_message(response)
            logger.error(f"OCR service error {response.status_code}: {message}")
            raise OCRClientError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise OCRClientError(
                f"Invalid JSON in response from {url}", status_code=response.status_code
            ) from e


def _error_message(response: requests.Response) -> str:
    """Server-provided ``error`` field, falling back to the HTTP reason."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason or f"HTTP {response.status_code}"
