"""Receipt command handlers used by the unified CLI."""

import argparse
import sys
from pathlib import Path

from receiptbox.application.receipts import (
    ReceiptScanRequest,
    ReceiptScanResult,
    TextParseRequest,
    run_list_scanned_receipts,
    run_receipt_scan,
    run_text_parse,
)
from receiptbox.receipt.formatter import format_parsed_receipt
from receiptbox.receipt.serialization import receipt_to_json
from receiptbox.runtime import get_logger, get_paths
from receiptbox.runtime.receipt_storage import delete_scanned_receipt, load_receipt

logger = get_logger(__name__)


def _print_result(result: ReceiptScanResult, as_json: bool) -> None:
    assert result.receipt is not None
    if as_json:
        print(receipt_to_json(result.receipt, include_raw_text=False))
    else:
        print(format_parsed_receipt(result.receipt), end="")
    if result.scanned_path is not None:
        print(f"Saved for review: {result.scanned_path}")


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse OCR text from a file."""
    result = run_text_parse(TextParseRequest(text_path=Path(args.text_file), save=args.save))
    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)
    _print_result(result, args.json)


def cmd_scan(args: argparse.Namespace) -> None:
    """OCR a receipt image, parse it and save the draft to scanned/."""
    result = run_receipt_scan(ReceiptScanRequest(image_path=Path(args.image), save=not args.no_save))

    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "ocr_unavailable":
        logger.error("%s", result.error)
        print(f"OCR service unavailable: {result.error}")
        print("Set GOOGLE_VISION_API_KEY and check network access before scanning receipts.")
        sys.exit(1)

    _print_result(result, args.json)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for receiving receipt uploads."""
    import uvicorn

    from receiptbox.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Upload endpoint: http://{args.host}:{args.port}/upload")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_list_scanned(args: argparse.Namespace) -> None:
    """List receipts waiting for review."""
    listing = run_list_scanned_receipts()
    if not listing.receipts:
        print("No scanned receipts.")
        return

    for path, store, receipt_date, amount in listing.receipts:
        if receipt_date is None or amount is None:
            print(f"  {path.name}")
        else:
            print(f"  {receipt_date}  {store:<30}  {amount:>10.2f}  {path.name}")


def _resolve_scanned_path(name: str) -> Path:
    receipt_path = Path(name)
    if not receipt_path.exists():
        receipt_path = get_paths().receipts_scanned / name
    return receipt_path


def cmd_show(args: argparse.Namespace) -> None:
    """Print one scanned receipt."""
    receipt_path = _resolve_scanned_path(args.file)

    try:
        receipt = load_receipt(receipt_path)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if args.json:
        print(receipt_to_json(receipt, include_raw_text=False))
    else:
        print(format_parsed_receipt(receipt), end="")


def cmd_delete(args: argparse.Namespace) -> None:
    """Delete a scanned receipt once it has been reviewed."""
    receipt_path = _resolve_scanned_path(args.file)
    try:
        delete_scanned_receipt(receipt_path)
    except FileNotFoundError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
    print(f"Deleted {receipt_path.name}")
