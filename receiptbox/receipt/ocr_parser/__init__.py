"""Composable OCR receipt parser components."""

from .fields_parser import _extract_address, _extract_date, _extract_store_name, _extract_total
from .item_merger import _merge_duplicate_items
from .items_text_parser import _extract_items
from .lines import _normalize_lines

__all__ = [
    "_extract_address",
    "_extract_date",
    "_extract_items",
    "_extract_store_name",
    "_extract_total",
    "_merge_duplicate_items",
    "_normalize_lines",
]
