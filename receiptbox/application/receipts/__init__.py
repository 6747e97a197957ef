"""Receipt workflows."""

from receiptbox.application.receipts.listing import ScannedReceiptListing, run_list_scanned_receipts
from receiptbox.application.receipts.scan import (
    ReceiptScanRequest,
    ReceiptScanResult,
    TextParseRequest,
    run_receipt_scan,
    run_text_parse,
)

__all__ = [
    "ReceiptScanRequest",
    "ReceiptScanResult",
    "TextParseRequest",
    "run_receipt_scan",
    "run_text_parse",
    "ScannedReceiptListing",
    "run_list_scanned_receipts",
]
