"""Shared constants and helpers for OCR receipt parsing."""

import re
from decimal import Decimal, InvalidOperation

from receiptbox.domain.receipt import round2

# Accepted range for any parsed money value: MIN_PRICE <= value < MAX_PRICE
MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("10000")

MIN_ITEM_NAME_LENGTH = 2

# Address fragments only appear in the receipt header
ADDRESS_SCAN_LINES = 15

# Lines after a total marker searched for the grand total
TOTAL_LOOKAHEAD_LINES = 15

# A discount line applies to a resolved item at most this many lines above it.
# Empirical; tune against real receipts.
DISCOUNT_LOOKBACK_LINES = 3

# Known merchants, matched against the full text top-to-bottom (first match wins)
KNOWN_MERCHANT_PATTERNS = [
    (re.compile(r"COSTCO\s*WHOLESALE", re.IGNORECASE), "Costco Wholesale"),
    (re.compile(r"\bWALMART\b", re.IGNORECASE), "Walmart"),
    (re.compile(r"\bTARGET\b", re.IGNORECASE), "Target"),
    (re.compile(r"\bSAFEWAY\b", re.IGNORECASE), "Safeway"),
    (re.compile(r"\bKROGER\b", re.IGNORECASE), "Kroger"),
    (re.compile(r"\bSAM'?S\s+CLUB\b", re.IGNORECASE), "Sam's Club"),
    (re.compile(r"\bWHOLE\s+FOODS\b", re.IGNORECASE), "Whole Foods Market"),
    (re.compile(r"\bTRADER\s+JOE'?S\b", re.IGNORECASE), "Trader Joe's"),
]

# Section boundaries and noise. A match ends the current item block.
SECTION_BOUNDARY_PATTERNS = [
    (re.compile(r"^COSTCO", re.IGNORECASE), "store banner"),
    (re.compile(r"^WHOLESALE", re.IGNORECASE), "store banner"),
    (re.compile(r"^SUB\s*TOTAL\b", re.IGNORECASE), "subtotal"),
    (re.compile(r"\bTAX\b", re.IGNORECASE), "tax"),
    (re.compile(r"^\*+\s*TOTAL", re.IGNORECASE), "total"),
    (re.compile(r"\bTOTAL\b", re.IGNORECASE), "total"),
    (re.compile(r"\bAMOUNT\s+DUE\b", re.IGNORECASE), "total"),
    (re.compile(r"BALANCE", re.IGNORECASE), "payment"),
    (re.compile(r"\bCHANGE\b", re.IGNORECASE), "payment"),
    (re.compile(r"\bCASH\b", re.IGNORECASE), "payment"),
    (re.compile(r"\bCREDIT\b", re.IGNORECASE), "payment"),
    (re.compile(r"\bDEBIT\b", re.IGNORECASE), "payment"),
    (re.compile(r"APPROVED", re.IGNORECASE), "card auth"),
    (re.compile(r"VISA", re.IGNORECASE), "card auth"),
    (re.compile(r"MASTERCARD", re.IGNORECASE), "card auth"),
    (re.compile(r"X{4,}", re.IGNORECASE), "masked card number"),
    (re.compile(r"^MEMBER", re.IGNORECASE), "membership"),
    (re.compile(r"^\d{12,}"), "numeric run"),
    (re.compile(r"TERMINAL", re.IGNORECASE), "terminal"),
    (re.compile(r"THANK\s*YOU", re.IGNORECASE), "footer"),
]

# "1234567 KIRKLAND WATER 4.99 A", "E 923855 POST-TS 16.99 E", "MILK 4.50"
ITEM_WITH_PRICE_LINE = re.compile(r"^(?:[A-Z]\s+)?(?:(\d{4,7}[A-Z]?)\s+)?(.+?)\s+(\d+\.\d{2})\s*([A-Z])?$")
# "39.99 A", "2.99"
PRICE_ONLY_LINE = re.compile(r"^(\d+\.\d{2})\s*([A-Z])?$")
# "8.00-A", "800-A" (OCR dropped the decimal point)
DISCOUNT_LINE = re.compile(r"^(\d+(?:\.\d{2})?)-([A-Z])?$")
# "1954841 IRIS BIN", "E 1268174 PEDIASURE OG"
ITEM_ONLY_LINE = re.compile(r"^(?:[A-Z]\s+)?(\d{4,7}[A-Z]?)\s+(.+)$")


def _section_boundary_reason(text: str) -> str | None:
    """Return why a line ends the item block, or None for ordinary lines."""
    for pattern, reason in SECTION_BOUNDARY_PATTERNS:
        if pattern.search(text):
            return reason
    return None


def _parse_money(token: str) -> Decimal | None:
    """Parse a money token, returning None when it is outside the accepted range."""
    try:
        value = Decimal(token)
    except InvalidOperation:
        return None
    if value < MIN_PRICE or value >= MAX_PRICE:
        return None
    return round2(value)


def _parse_discount(token: str) -> Decimal | None:
    """Parse a trailing-minus discount amount; "800" means 8.00."""
    try:
        value = Decimal(token)
    except InvalidOperation:
        return None
    if "." not in token:
        value = value / 100
    return _parse_money(str(value))


def _clean_item_name(name: str) -> str:
    """Clean up item name from OCR artifacts."""
    name = re.sub(r"^\d{5,7}\s*", "", name)
    name = re.sub(r"\s+", " ", name)
    # Single leading tax marker like "E "
    name = re.sub(r"^[A-Z]\s+", "", name)
    return name.strip()


def _is_valid_item_name(name: str) -> bool:
    """Return True if a cleaned name can stand for a purchased item."""
    return len(name) >= MIN_ITEM_NAME_LENGTH and any(c.isalpha() for c in name)


def _merge_key(name: str, unit_price: Decimal, item_number: str | None) -> str:
    """Identity used to fold repeated scan lines of one purchased unit."""
    if item_number:
        return item_number
    normalized_name = re.sub(r"\s+", " ", name.lower().strip())
    return f"{normalized_name}|{unit_price:.2f}"
