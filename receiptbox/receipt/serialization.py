"""Convert ParsedReceipt values to and from JSON-safe dictionaries."""

import json
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from receiptbox.domain.receipt import ParsedReceipt, ResolvedItem


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def _parse_money(value: Any, default: str = "0.00") -> Decimal:
    try:
        return Decimal(str(value if value is not None else default))
    except InvalidOperation as e:
        raise ValueError(f"Invalid money amount: {value!r}") from e


def item_to_dict(item: ResolvedItem) -> dict[str, Any]:
    return {
        "item_number": item.item_number,
        "name": item.name,
        "unit_price": _money(item.unit_price),
        "quantity": item.quantity,
        "discount": _money(item.discount),
        "total_price": _money(item.total_price),
        "item_order": item.order,
    }


def item_from_dict(data: dict[str, Any]) -> ResolvedItem:
    return ResolvedItem(
        name=str(data["name"]),
        unit_price=_parse_money(data["unit_price"]),
        order=int(data.get("item_order", 0)),
        quantity=int(data.get("quantity", 1)),
        discount=_parse_money(data.get("discount")),
        total_price=_parse_money(data.get("total_price")),
        item_number=data.get("item_number") or None,
    )


def receipt_to_dict(receipt: ParsedReceipt, include_raw_text: bool = True) -> dict[str, Any]:
    """Serialize a receipt; money is written as 2-decimal strings to avoid float drift."""
    data: dict[str, Any] = {
        "store_name": receipt.store_name,
        "store_location": receipt.store_location,
        "store_city": receipt.store_city,
        "store_state": receipt.store_state,
        "store_zip": receipt.store_zip,
        "purchase_date": receipt.purchase_date.isoformat(),
        "total_amount": _money(receipt.total_amount),
        "items": [item_to_dict(item) for item in receipt.items],
    }
    if include_raw_text:
        data["raw_text"] = receipt.raw_text
    return data


def receipt_from_dict(data: dict[str, Any]) -> ParsedReceipt:
    """
    Rebuild a receipt from :func:`receipt_to_dict` output.

    Raises:
        ValueError: a date or money field is malformed
        KeyError: an item lacks its name or unit price
    """
    receipt = ParsedReceipt(
        store_name=data.get("store_name", ""),
        store_location=data.get("store_location", ""),
        store_city=data.get("store_city", ""),
        store_state=data.get("store_state", ""),
        store_zip=data.get("store_zip", ""),
        total_amount=_parse_money(data.get("total_amount")),
        items=[item_from_dict(item) for item in data.get("items", [])],
        raw_text=data.get("raw_text", ""),
    )
    if data.get("purchase_date"):
        receipt.purchase_date = date.fromisoformat(data["purchase_date"])
    return receipt


def receipt_to_json(receipt: ParsedReceipt, include_raw_text: bool = True) -> str:
    return json.dumps(receipt_to_dict(receipt, include_raw_text=include_raw_text), indent=2)
