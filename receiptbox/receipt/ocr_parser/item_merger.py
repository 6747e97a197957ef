"""Fold repeated scan lines of one purchased unit into a single item."""

from decimal import Decimal

from receiptbox.domain.receipt import ResolvedItem, round2

from .common import _merge_key


def _merge_duplicate_items(items: list[ResolvedItem]) -> list[ResolvedItem]:
    """
    Merge duplicate receipt items.

    Receipts print one line per unit, so two "IRIS BIN 11.99" lines become a
    single item with quantity 2. Items are grouped by item number, or by
    normalized name plus unit price when there is none; items without a
    positive unit price are dropped.

    Within a group, quantities, totals and discounts are summed and the unit
    price is recomputed from the folded amounts as (total + discount) / quantity
    rather than total / quantity, so a merged discount does not lower the unit
    price and total_price == unit_price * quantity - discount still holds.

    The merged item keeps the position of its first occurrence, and the result
    is ordered by position.
    """
    merged: dict[str, ResolvedItem] = {}
    for item in items:
        if not isinstance(item.unit_price, Decimal) or item.unit_price <= 0:
            continue
        key = _merge_key(item.name, item.unit_price, item.item_number)
        existing = merged.get(key)
        if existing is None:
            merged[key] = ResolvedItem(
                name=item.name,
                unit_price=item.unit_price,
                order=item.order,
                quantity=item.quantity,
                discount=item.discount,
                total_price=item.total_price,
                item_number=item.item_number,
            )
            continue

        existing.quantity += item.quantity
        existing.discount = round2(existing.discount + item.discount)
        existing.total_price = round2(existing.total_price + item.total_price)
        # Gross of discounts: total_price == unit_price * quantity - discount
        existing.unit_price = round2((existing.total_price + existing.discount) / existing.quantity)
        existing.order = min(existing.order, item.order)

    return sorted(merged.values(), key=lambda merged_item: merged_item.order)
