"""Parse raw OCR text into structured ParsedReceipt data."""

from receiptbox.domain.receipt import ParsedReceipt, empty_receipt
from receiptbox.runtime.logging import get_logger

from .ocr_parser import (
    _extract_address,
    _extract_date,
    _extract_items,
    _extract_store_name,
    _extract_total,
    _merge_duplicate_items,
    _normalize_lines,
)

logger = get_logger(__name__)


def parse_receipt_text(text: str | None) -> ParsedReceipt:
    """
    Parse OCR text into a ParsedReceipt.

    This is a best-effort parser - results should be manually reviewed.
    It never raises for malformed text: every field falls back to its
    default (empty strings, today's date, zero total, no items).

    Args:
        text: Full text annotation returned by the OCR provider

    Returns:
        ParsedReceipt with parsed data
    """
    full_text = text or ""
    result = empty_receipt(raw_text=full_text)

    lines = _normalize_lines(full_text)
    if not lines:
        logger.debug("Empty text provided for parsing")
        return result

    texts = [line.text for line in lines]

    result.store_name = _extract_store_name(full_text)
    address = _extract_address(texts)
    result.store_location = address.location
    result.store_city = address.city
    result.store_state = address.state
    result.store_zip = address.zip_code

    purchase_date = _extract_date(full_text)
    if purchase_date is not None:
        result.purchase_date = purchase_date
    else:
        logger.debug("No purchase date found; defaulting to %s", result.purchase_date)

    result.items = _merge_duplicate_items(_extract_items(lines))
    result.total_amount = _extract_total(texts, full_text, result.items)

    logger.info(
        "Parsed receipt: store=%r, %d items, total %s",
        result.store_name,
        len(result.items),
        result.total_amount,
    )
    return result
