"""Receipt text extraction: OCR text in, ParsedReceipt out."""

from receiptbox.receipt.ocr_result_parser import parse_receipt_text

__all__ = ["parse_receipt_text"]
