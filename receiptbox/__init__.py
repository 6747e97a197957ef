"""receiptbox: turn OCR text from retail receipts into structured purchase records."""

__version__ = "0.1.0"
