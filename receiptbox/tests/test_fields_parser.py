from datetime import date
from decimal import Decimal

from receiptbox.domain.receipt import ResolvedItem
from receiptbox.receipt.ocr_parser.fields_parser import (
    _extract_address,
    _extract_date,
    _extract_store_name,
    _extract_total,
)


def test_store_name_uses_known_merchant_table() -> None:
    assert _extract_store_name("COSTCO\nWHOLESALE\n#388") == "Costco Wholesale"
    assert _extract_store_name("welcome to walmart supercenter") == "Walmart"
    assert _extract_store_name("TRADER JOES #552") == "Trader Joe's"


def test_store_name_first_table_entry_wins() -> None:
    # Both merchants mentioned; table order decides
    assert _extract_store_name("TARGET\nreturns accepted at COSTCO WHOLESALE") == "Costco Wholesale"


def test_store_name_unknown_merchant_is_empty() -> None:
    assert _extract_store_name("CORNER DELI\n123 MAIN ST") == ""
    # Word boundaries: TARGETED is not Target
    assert _extract_store_name("TARGETED SAVINGS") == ""


def test_address_from_header_lines() -> None:
    address = _extract_address(["COSTCO", "1901 West 22nd Street", "Oak Brook, IL 60523"])

    assert address.location == "1901 West 22nd Street"
    assert address.city == "Oak Brook"
    assert address.state == "IL"
    assert address.zip_code == "60523"


def test_address_city_state_and_zip_on_separate_lines() -> None:
    address = _extract_address(["505 Army Trail Rd", "Bloomingdale, IL", "60108"])

    assert address.location == "505 Army Trail Rd"
    assert address.city == "Bloomingdale"
    assert address.state == "IL"
    assert address.zip_code == "60108"


def test_address_first_match_wins() -> None:
    address = _extract_address(["100 Main Street", "200 Elm Avenue", "Springfield, IL 62701", "Chicago, IL 60601"])

    assert address.location == "100 Main Street"
    assert address.city == "Springfield"
    assert address.zip_code == "62701"


def test_address_only_scans_header_lines() -> None:
    lines = [f"LINE {i}" for i in range(15)] + ["1901 West 22nd Street", "Oak Brook, IL 60523"]
    address = _extract_address(lines)

    assert address.location == ""
    assert address.city == ""
    assert address.state == ""
    assert address.zip_code == ""


def test_date_four_and_two_digit_years() -> None:
    assert _extract_date("12/09/2025 13:35") == date(2025, 12, 9)
    assert _extract_date("12/09/25 13:35") == date(2025, 12, 9)
    assert _extract_date("1/2/2024") == date(2024, 1, 2)


def test_date_skips_invalid_calendar_dates() -> None:
    assert _extract_date("13/45/2025 01/02/2024") == date(2024, 1, 2)


def test_date_missing() -> None:
    assert _extract_date("no date here") is None
    assert _extract_date("02/30/2024") is None


def test_total_takes_largest_amount_after_marker() -> None:
    lines = ["**** TOTAL", "XXXX5089", "427.03", "25.39", "452.42", "H", "CHANGE", "452.42"]

    assert _extract_total(lines, "\n".join(lines), []) == Decimal("452.42")


def test_total_marker_lookahead_is_bounded() -> None:
    lines = ["TOTAL"] + ["NOISE"] * 15 + ["999.99"]

    assert _extract_total(lines, "\n".join(lines), []) == Decimal("0.00")


def test_total_inline_amount() -> None:
    lines = ["MILK 4.50", "TOTAL $12.34"]

    assert _extract_total(lines, "\n".join(lines), []) == Decimal("12.34")


def test_subtotal_is_not_an_inline_total() -> None:
    items = [ResolvedItem.single("MILK", Decimal("4.50"), 0), ResolvedItem.single("BREAD", Decimal("3.25"), 1)]
    lines = ["MILK 4.50", "BREAD 3.25", "SUBTOTAL 99.99"]

    assert _extract_total(lines, "\n".join(lines), items) == Decimal("7.75")


def test_total_falls_back_to_item_sum_of_totals() -> None:
    item = ResolvedItem.single("HUG PU", Decimal("39.99"), 0)
    item.apply_discount(Decimal("8.00"))

    assert _extract_total(["HUG PU"], "HUG PU", [item]) == Decimal("31.99")


def test_total_defaults_to_zero() -> None:
    assert _extract_total([], "", []) == Decimal("0.00")
