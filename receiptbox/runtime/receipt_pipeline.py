"""Runtime helpers for the receipt OCR pipeline: image bytes -> ParsedReceipt."""

import httpx

from receiptbox.domain.receipt import ParsedReceipt, empty_receipt
from receiptbox.receipt.ocr_result_parser import parse_receipt_text
from receiptbox.runtime.logging import get_logger
from receiptbox.runtime.ocr_client import OCRServiceUnavailable, extract_text, extract_text_async

logger = get_logger(__name__)


def _parse_or_default(text: str) -> ParsedReceipt:
    if not text:
        logger.info("No text extracted, returning default receipt")
        return empty_receipt()
    return parse_receipt_text(text)


def process_receipt(image_bytes: bytes, client: httpx.Client | None = None) -> ParsedReceipt:
    """
    OCR an image and parse the recognized text.

    A failing OCR provider degrades to the empty receipt instead of raising,
    so a scan never crashes because the provider is down or misconfigured.
    """
    try:
        text = extract_text(image_bytes, client=client)
    except OCRServiceUnavailable as e:
        logger.error("Error processing receipt: %s", e)
        return empty_receipt()
    return _parse_or_default(text)


async def process_receipt_async(image_bytes: bytes, client: httpx.AsyncClient | None = None) -> ParsedReceipt:
    """Async variant of :func:`process_receipt`; the OCR call is the only await."""
    try:
        text = await extract_text_async(image_bytes, client=client)
    except OCRServiceUnavailable as e:
        logger.error("Error processing receipt: %s", e)
        return empty_receipt()
    return _parse_or_default(text)
