"""Client for the text-detection OCR provider (Google Cloud Vision REST API).

Environment variables:
    GOOGLE_VISION_API_KEY: API key sent with every request (required)
    GOOGLE_VISION_ENDPOINT: Override of the ``images:annotate`` URL
"""

import asyncio
import os
import time
from typing import Any

import httpx

from receiptbox.receipt.ocr_helpers import (
    annotation_error_message,
    build_text_detection_request,
    extract_annotation_text,
    resize_image_bytes,
)
from receiptbox.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"
OCR_TIMEOUT_SECONDS = 60.0


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


def _api_key() -> str:
    api_key = os.environ.get("GOOGLE_VISION_API_KEY", "").strip()
    if not api_key:
        raise OCRServiceUnavailable("No Google credentials configured")
    return api_key


def _endpoint() -> str:
    return os.environ.get("GOOGLE_VISION_ENDPOINT") or DEFAULT_VISION_ENDPOINT


def _prepare_image(image_bytes: bytes) -> bytes:
    """Normalize the image for OCR, sending it unchanged if it cannot be decoded."""
    try:
        return resize_image_bytes(image_bytes)
    except OSError as e:
        logger.warning("Could not normalize image before OCR, sending as-is: %s", e)
        return image_bytes


def _text_from_response(response: httpx.Response) -> str:
    if response.status_code != 200:
        # TODO(security): redact the response body before logging; it can echo OCR text with PII.
        logger.error("OCR service error: %s - %s", response.status_code, response.text)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

    try:
        payload: dict[str, Any] = response.json()
    except ValueError as e:
        raise OCRServiceUnavailable(f"OCR service returned invalid JSON: {e}") from e

    error_message = annotation_error_message(payload)
    if error_message:
        logger.error("OCR provider rejected request: %s", error_message)
        raise OCRServiceUnavailable(f"OCR provider error: {error_message}")

    text = extract_annotation_text(payload)
    if text:
        logger.info("Extracted %d characters from image", len(text))
    else:
        logger.info("No text found in image")
    return text


def extract_text(image_bytes: bytes, client: httpx.Client | None = None) -> str:
    """
    Return the full text recognized in an image, or "" if none was found.

    Raises:
        OCRServiceUnavailable: missing credentials, transport failure or provider error
    """
    params = {"key": _api_key()}
    body = build_text_detection_request(_prepare_image(image_bytes))
    logger.info("Sending receipt to OCR service...")

    start_time = time.time()
    try:
        if client is None:
            response = httpx.post(_endpoint(), params=params, json=body, timeout=OCR_TIMEOUT_SECONDS)
        else:
            response = client.post(_endpoint(), params=params, json=body)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
    logger.info("OCR service returned in %.2f seconds", time.time() - start_time)

    return _text_from_response(response)


async def extract_text_async(image_bytes: bytes, client: httpx.AsyncClient | None = None) -> str:
    """Async variant of :func:`extract_text` for the upload server."""
    params = {"key": _api_key()}
    # Pillow decode and re-encode is CPU-bound; keep it off the event loop
    prepared = await asyncio.to_thread(_prepare_image, image_bytes)
    body = build_text_detection_request(prepared)
    logger.info("Sending receipt to OCR service...")

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=OCR_TIMEOUT_SECONDS) as owned_client:
                response = await owned_client.post(_endpoint(), params=params, json=body)
        else:
            response = await client.post(_endpoint(), params=params, json=body)
    except httpx.RequestError as e:
        logger.error("OCR service unavailable: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e

    return _text_from_response(response)
