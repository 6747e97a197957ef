from datetime import date
from decimal import Decimal

from receiptbox.domain.receipt import RawLine, round2
from receiptbox.receipt.ocr_parser.items_text_parser import _extract_items
from receiptbox.receipt.ocr_parser.lines import _normalize_lines
from receiptbox.receipt.ocr_result_parser import parse_receipt_text


def _lines(*texts: str) -> list[RawLine]:
    return [RawLine(text=text, order=i) for i, text in enumerate(texts)]


def test_separate_and_inline_prices_resolve_with_sum_fallback_total() -> None:
    result = parse_receipt_text("\n".join(["123456 BANANAS", "2.99", "654321 MILK 4.50", "SUBTOTAL", "7.49"]))

    assert [(item.name, item.unit_price, item.quantity, item.total_price) for item in result.items] == [
        ("BANANAS", Decimal("2.99"), 1, Decimal("2.99")),
        ("MILK", Decimal("4.50"), 1, Decimal("4.50")),
    ]
    assert result.items[0].item_number == "123456"
    assert result.items[1].item_number == "654321"
    assert result.total_amount == Decimal("7.49")
    assert result.store_name == ""


def test_price_binds_to_closest_unmatched_item() -> None:
    items = _extract_items(
        _lines("WELCOME", "HELLO", "1111111 APPLES", "PLAIN TEXT", "MORE TEXT", "2222222 PEARS", "3.49")
    )

    assert len(items) == 1
    assert items[0].name == "PEARS"
    assert items[0].order == 5


def test_remaining_candidate_takes_the_next_price() -> None:
    items = _extract_items(_lines("1111111 APPLES", "2222222 PEARS", "3.49", "1.99"))

    assert [(item.name, item.unit_price, item.order) for item in items] == [
        ("PEARS", Decimal("3.49"), 1),
        ("APPLES", Decimal("1.99"), 0),
    ]


def test_section_boundary_discards_unpriced_items() -> None:
    items = _extract_items(_lines("WELCOME", "HELLO", "HI", "1234567 CHEESE", "SUBTOTAL", "5.99"))

    assert items == []


def test_out_of_range_prices_are_never_bound() -> None:
    items = _extract_items(_lines("1234567 TV", "15000.00", "0.00"))
    assert items == []

    items = _extract_items(_lines("1234567 TV", "15000.00", "0.00", "9.99"))
    assert [(item.name, item.unit_price) for item in items] == [("TV", Decimal("9.99"))]


def test_rejected_priced_line_does_not_become_a_candidate() -> None:
    items = _extract_items(_lines("1111111 APPLES", "2222222 BAG 0.00", "1.99"))

    assert [(item.name, item.unit_price, item.order) for item in items] == [("APPLES", Decimal("1.99"), 0)]


def test_tax_and_payment_lines_are_not_items() -> None:
    result = parse_receipt_text("1111111 MILK 4.50\nSALES TAX 0.36\nCASH 20.00\nCHANGE DUE 15.14")

    assert [item.name for item in result.items] == ["MILK"]
    assert result.total_amount == Decimal("4.50")


def test_total_and_card_lines_end_the_item_block() -> None:
    items = _extract_items(
        _lines("BREAD 3.25", "GRAND TOTAL 12.00", "AMOUNT DUE 12.00", "CREDIT 12.00", "DEBIT CARD 12.00", "9.99")
    )

    assert [item.name for item in items] == ["BREAD"]


def test_price_without_any_item_is_dropped() -> None:
    assert _extract_items(_lines("4.99", "5.00 A")) == []


def test_inline_item_with_tax_markers() -> None:
    items = _extract_items(_lines("1234567 KIRKLAND WATER 4.99 A", "E 7654321 ORGANIC EGGS 8.99 E"))

    assert [(item.item_number, item.name, item.unit_price) for item in items] == [
        ("1234567", "KIRKLAND WATER", Decimal("4.99")),
        ("7654321", "ORGANIC EGGS", Decimal("8.99")),
    ]


def test_tax_marker_prefix_is_stripped_from_item_only_lines() -> None:
    items = _extract_items(_lines("E 1268174 PEDIASURE OG", "39.99 E"))

    assert items[0].name == "PEDIASURE OG"
    assert items[0].item_number == "1268174"


def test_names_without_letters_are_not_items() -> None:
    assert _extract_items(_lines("427.03 25.39")) == []


def test_discount_applies_to_item_above() -> None:
    items = _extract_items(_lines("1935001 HUG PU 3T-4T", "39.99 A", "8.00-A"))

    assert len(items) == 1
    assert items[0].unit_price == Decimal("39.99")
    assert items[0].discount == Decimal("8.00")
    assert items[0].total_price == Decimal("31.99")


def test_discount_without_decimal_point_is_cents() -> None:
    items = _extract_items(_lines("1935001 HUG PU 3T-4T", "39.99 A", "800-A"))

    assert items[0].discount == Decimal("8.00")
    assert items[0].total_price == Decimal("31.99")


def test_discount_goes_to_the_nearest_item() -> None:
    items = _extract_items(_lines("1111111 SOAP 3.00", "2222222 RAG 2.00", "1.00-"))

    assert items[0].total_price == Decimal("3.00")
    assert items[1].discount == Decimal("1.00")
    assert items[1].total_price == Decimal("1.00")


def test_discount_window_is_measured_from_the_item_line() -> None:
    # The item's position is its name line, not its price line
    within = _extract_items(_lines("1234567 LAMP", "FOO", "24.99", "5.00-"))
    assert within[0].total_price == Decimal("19.99")

    outside = _extract_items(_lines("1234567 LAMP", "24.99", "FOO", "BAR", "BAZ", "5.00-"))
    assert outside[0].discount == Decimal("0.00")
    assert outside[0].total_price == Decimal("24.99")


def test_total_price_invariant_holds_for_parsed_items(costco_receipt_text: str) -> None:
    result = parse_receipt_text(costco_receipt_text)

    for item in result.items:
        assert item.total_price == round2(item.unit_price * item.quantity - item.discount)


def test_full_receipt(costco_receipt_text: str) -> None:
    result = parse_receipt_text(costco_receipt_text)

    assert result.store_name == "Costco Wholesale"
    assert result.store_location == "1901 West 22nd Street"
    assert result.store_city == "Oak Brook"
    assert result.store_state == "IL"
    assert result.store_zip == "60523"
    assert result.purchase_date == date(2025, 12, 9)
    assert result.total_amount == Decimal("64.96")
    assert result.raw_text == costco_receipt_text

    hug_pu, iris_bin, eggs = result.items
    assert (hug_pu.name, hug_pu.unit_price, hug_pu.discount, hug_pu.total_price) == (
        "HUG PU 3T-4T",
        Decimal("39.99"),
        Decimal("8.00"),
        Decimal("31.99"),
    )
    assert (iris_bin.name, iris_bin.quantity, iris_bin.unit_price, iris_bin.total_price) == (
        "IRIS BIN",
        2,
        Decimal("11.99"),
        Decimal("23.98"),
    )
    assert (eggs.name, eggs.unit_price) == ("ORGANIC EGGS", Decimal("8.99"))
    assert [item.order for item in result.items] == sorted(item.order for item in result.items)


def test_parse_is_idempotent(costco_receipt_text: str) -> None:
    assert parse_receipt_text(costco_receipt_text) == parse_receipt_text(costco_receipt_text)


def test_empty_text_returns_defaults() -> None:
    for text in ("", "   \n\t  \n", None):
        result = parse_receipt_text(text)

        assert result.items == []
        assert result.store_name == ""
        assert result.store_location == ""
        assert result.store_city == ""
        assert result.store_state == ""
        assert result.store_zip == ""
        assert result.total_amount == Decimal("0.00")
        assert result.purchase_date == date.today()


def test_text_without_receipt_data() -> None:
    result = parse_receipt_text("random text without any receipt data")

    assert result.items == []
    assert result.total_amount == Decimal("0.00")


def test_normalize_lines_trims_and_drops_blank_lines() -> None:
    lines = _normalize_lines("  COSTCO \r\n\n   \nWHOLESALE\n 2.99 A ")

    assert lines == [
        RawLine(text="COSTCO", order=0),
        RawLine(text="WHOLESALE", order=1),
        RawLine(text="2.99 A", order=2),
    ]
    assert _normalize_lines("") == []
    assert _normalize_lines(None) == []
