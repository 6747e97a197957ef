"""Receipt listing workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path

from receiptbox.runtime.receipt_storage import list_scanned_receipts, parse_filename_info


@dataclass(frozen=True)
class ScannedReceiptListing:
    """Scanned receipt summaries for CLI display."""

    receipts: list[tuple[Path, str | None, date | None, Decimal | None]]


def run_list_scanned_receipts() -> ScannedReceiptListing:
    """Load scanned receipt paths with the summary encoded in their names."""
    summaries = []
    for path in list_scanned_receipts():
        receipt_date, store, amount = parse_filename_info(path)
        summaries.append((path, store, receipt_date, amount))
    return ScannedReceiptListing(receipts=summaries)
