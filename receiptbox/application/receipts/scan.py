"""Receipt scan workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from receiptbox.domain.receipt import empty_receipt
from receiptbox.receipt.ocr_result_parser import parse_receipt_text
from receiptbox.runtime.ocr_client import OCRServiceUnavailable, extract_text
from receiptbox.runtime.receipt_storage import save_scanned_receipt

if TYPE_CHECKING:
    from receiptbox.domain.receipt import ParsedReceipt

ScanStatus = Literal[
    "file_not_found",
    "ocr_unavailable",
    "parsed",
    "scanned_saved",
]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running receipt scan workflow."""

    image_path: Path
    save: bool = True


@dataclass(frozen=True)
class TextParseRequest:
    """Inputs for parsing a file of already-recognized OCR text."""

    text_path: Path
    save: bool = False


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from a scan or parse workflow."""

    status: ScanStatus
    receipt: ParsedReceipt | None = None
    scanned_path: Path | None = None
    error: str | None = None


def _finish(receipt: ParsedReceipt, save: bool) -> ReceiptScanResult:
    if not save:
        return ReceiptScanResult(status="parsed", receipt=receipt)
    return ReceiptScanResult(status="scanned_saved", receipt=receipt, scanned_path=save_scanned_receipt(receipt))


def run_receipt_scan(request: ReceiptScanRequest) -> ReceiptScanResult:
    """
    Run scan flow: OCR -> parse -> optionally save to scanned/.

    An unavailable OCR provider still yields the empty receipt, with status
    ``ocr_unavailable`` and nothing saved, so callers can report it.
    """
    if not request.image_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.image_path}",
        )

    try:
        text = extract_text(request.image_path.read_bytes())
    except OCRServiceUnavailable as exc:
        return ReceiptScanResult(
            status="ocr_unavailable",
            receipt=empty_receipt(),
            error=str(exc),
        )

    return _finish(parse_receipt_text(text), request.save)


def run_text_parse(request: TextParseRequest) -> ReceiptScanResult:
    """Parse OCR text saved in a file, optionally saving the result to scanned/."""
    if not request.text_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Text file not found: {request.text_path}",
        )
    text = request.text_path.read_text(encoding="utf-8", errors="replace")
    return _finish(parse_receipt_text(text), request.save)
