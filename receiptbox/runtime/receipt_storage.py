"""Storage and retrieval of scanned receipts.

Parsed receipts are written as JSON so they can be reviewed and corrected by
hand before anything downstream consumes them.

Directory structure (under RECEIPTBOX_HOME):
    receipts/
    ├── images/     - Uploaded receipt photos
    └── scanned/    - OCR+parser output, not yet reviewed
"""

import json
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from receiptbox.domain.receipt import ParsedReceipt
from receiptbox.receipt.serialization import receipt_from_dict, receipt_to_json
from receiptbox.runtime.logging import get_logger
from receiptbox.runtime.paths import get_paths

logger = get_logger(__name__)


def ensure_directories() -> None:
    """Create required directories if they don't exist."""
    get_paths().ensure_receipt_directories()


def generate_receipt_filename(receipt: ParsedReceipt) -> str:
    """
    Generate filename for receipt files.

    Format: YYYY-MM-DD_store_amount.json

    This format enables quick pre-filtering by parsing filename
    before loading file content.
    """
    date_str = receipt.purchase_date.strftime("%Y-%m-%d")

    # Clean store name for filename
    store_clean = "".join(c if c.isalnum() else "_" for c in receipt.store_name.lower())
    store_clean = "_".join(filter(None, store_clean.split("_")))
    if not store_clean:
        store_clean = "unknown"
    store_clean = store_clean[:30]

    # Format amount (replace . with _ for filename safety)
    amount_str = f"{receipt.total_amount:.2f}".replace(".", "_")

    return f"{date_str}_{store_clean}_{amount_str}.json"


def _unique_path(directory: Path, filename: str) -> Path:
    """Append a counter to the file stem until the path is free."""
    filepath = directory / filename
    counter = 1
    base_name = filepath.stem
    while filepath.exists():
        filepath = directory / f"{base_name}_{counter}{filepath.suffix}"
        counter += 1
    return filepath


def save_scanned_receipt(receipt: ParsedReceipt) -> Path:
    """
    Save a parsed receipt to the scanned/ directory for manual review.

    Returns:
        Path to the saved file
    """
    ensure_directories()
    filepath = _unique_path(get_paths().receipts_scanned, generate_receipt_filename(receipt))
    filepath.write_text(receipt_to_json(receipt))
    logger.info("Saved scanned receipt to %s", filepath)
    return filepath


def save_receipt_image(image_bytes: bytes, filename: str) -> Path:
    """Keep the uploaded photo next to its parsed output."""
    ensure_directories()
    filepath = _unique_path(get_paths().receipts_images, Path(filename).name)
    filepath.write_bytes(image_bytes)
    logger.debug("Saved receipt image to %s", filepath)
    return filepath


def load_receipt(receipt_path: Path) -> ParsedReceipt:
    """
    Load a receipt saved by :func:`save_scanned_receipt`.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file is not a valid receipt document
    """
    if not receipt_path.exists():
        raise FileNotFoundError(f"Receipt not found: {receipt_path}")
    try:
        data = json.loads(receipt_path.read_text())
        return receipt_from_dict(data)
    except (json.JSONDecodeError, AttributeError, KeyError, TypeError) as e:
        raise ValueError(f"Malformed receipt file {receipt_path}: {e}") from e


def parse_filename_info(filepath: Path) -> tuple[date | None, str | None, Decimal | None]:
    """
    Extract date, store, and amount from filename.

    Returns:
        Tuple of (date, store, amount) - any may be None if parsing fails
    """
    # Expected format: YYYY-MM-DD_store_amount, amount is like 51_61 for $51.61
    match = re.match(r"^(\d{4}-\d{2}-\d{2})_(.+)_(\d+_\d{2})(?:_\d+)?$", filepath.stem)
    if not match:
        return None, None, None

    try:
        parsed_date = date.fromisoformat(match.group(1))
        store = match.group(2).replace("_", " ").title()
        amount = Decimal(match.group(3).replace("_", "."))
        return parsed_date, store, amount
    except (ValueError, InvalidOperation):
        return None, None, None


def list_scanned_receipts() -> list[Path]:
    """List all receipts waiting for review, oldest file name first."""
    scanned_dir = get_paths().receipts_scanned
    if not scanned_dir.exists():
        return []
    return sorted(scanned_dir.glob("*.json"))


def delete_scanned_receipt(receipt_path: Path) -> None:
    """Remove a reviewed receipt from scanned/."""
    if not receipt_path.exists():
        raise FileNotFoundError(f"Receipt not found: {receipt_path}")
    receipt_path.unlink()
    logger.info("Deleted %s", receipt_path)
