"""Store/address/date/total extraction helpers."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from receiptbox.domain.receipt import ResolvedItem, round2

from .common import ADDRESS_SCAN_LINES, KNOWN_MERCHANT_PATTERNS, TOTAL_LOOKAHEAD_LINES

STREET_SUFFIXES = (
    "STREET|ST|AVENUE|AVE|ROAD|RD|BOULEVARD|BLVD|DRIVE|DR|LANE|LN|WAY|PARKWAY|PKWY|"
    "HIGHWAY|HWY|COURT|CT|PLACE|PL|CIRCLE|CIR|TRAIL|TRL|PIKE|PLAZA|TERRACE|TER"
)

# MM/DD/YYYY or MM/DD/YY, not followed by more digits
DATE_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?!\d)")

TOTAL_MARKER = re.compile(r"^(?:\*+\s*TOTAL\b.*|TOTAL)$", re.IGNORECASE)
TOTAL_VALUE_LINE = re.compile(r"^(\d+\.\d{2})$")
INLINE_TOTAL = re.compile(r"\bTOTAL[ \t:]+\$?[ \t]*(\d+\.\d{2})", re.IGNORECASE)


@dataclass
class StoreAddress:
    """Address fields found in the receipt header."""

    location: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


def _fill_street(address: StoreAddress, match: re.Match[str]) -> None:
    if not address.location:
        address.location = re.sub(r"\s+", " ", match.group(1)).strip()


def _fill_city_state_zip(address: StoreAddress, match: re.Match[str]) -> None:
    if not address.city:
        address.city = match.group(1).strip()
    if not address.state:
        address.state = match.group(2).upper()
    if not address.zip_code:
        address.zip_code = match.group(3)


def _fill_city_state(address: StoreAddress, match: re.Match[str]) -> None:
    if not address.city:
        address.city = match.group(1).strip()
    if not address.state:
        address.state = match.group(2).upper()


def _fill_zip(address: StoreAddress, match: re.Match[str]) -> None:
    if not address.zip_code:
        address.zip_code = match.group(1)


# Address shapes, tried in order against each header line; one shape per line.
ADDRESS_PATTERNS: list[tuple[re.Pattern[str], Callable[[StoreAddress, re.Match[str]], None]]] = [
    # "1901 West 22nd Street", "505 West Army Trail Road"
    (
        re.compile(rf"^(\d{{1,6}}\s+[A-Za-z0-9 .'-]+?\s+(?:{STREET_SUFFIXES})\.?)$", re.IGNORECASE),
        _fill_street,
    ),
    # "Oak Brook, IL 60523"
    (re.compile(r"^([A-Za-z][A-Za-z .'-]*?),?\s+([A-Z]{2})\s+(\d{5})(?:-\d{4})?$"), _fill_city_state_zip),
    # "Oak Brook, IL"
    (re.compile(r"^([A-Za-z][A-Za-z .'-]*?),\s*([A-Z]{2})$"), _fill_city_state),
    # "60523"
    (re.compile(r"^(\d{5})(?:-\d{4})?$"), _fill_zip),
]


def _extract_store_name(full_text: str) -> str:
    """Return the first known merchant mentioned in the text, or ""."""
    for pattern, merchant in KNOWN_MERCHANT_PATTERNS:
        if pattern.search(full_text):
            return merchant
    return ""


def _extract_address(lines: list[str]) -> StoreAddress:
    """Extract street and city/state/zip from the receipt header."""
    address = StoreAddress()
    for line in lines[:ADDRESS_SCAN_LINES]:
        for pattern, fill in ADDRESS_PATTERNS:
            match = pattern.match(line)
            if match:
                fill(address, match)
                break
    return address


def _extract_date(full_text: str) -> date | None:
    """Extract purchase date (returns None if unknown)."""
    for match in DATE_PATTERN.finditer(full_text):
        month, day, year = (int(group) for group in match.groups())
        if year < 100:
            year += 2000
        try:
            return date(year, month, day)
        except ValueError:
            continue
    return None


def _extract_total(lines: list[str], full_text: str, items: list[ResolvedItem]) -> Decimal:
    """
    Resolve the receipt total.

    Priority:
    1. Largest bare amount within the lines after a "**** TOTAL" marker
       (subtotal, tax and total are often printed together below it)
    2. First inline "TOTAL $X.XX" in the text
    3. Sum of parsed item totals
    """
    for i, line in enumerate(lines):
        if not TOTAL_MARKER.match(line):
            continue
        amounts = [
            Decimal(match.group(1))
            for following in lines[i + 1 : i + 1 + TOTAL_LOOKAHEAD_LINES]
            if (match := TOTAL_VALUE_LINE.match(following))
        ]
        if amounts:
            return round2(max(amounts))

    match = INLINE_TOTAL.search(full_text)
    if match:
        return round2(Decimal(match.group(1)))

    if items:
        return round2(sum((item.total_price for item in items), Decimal("0")))
    return Decimal("0.00")
