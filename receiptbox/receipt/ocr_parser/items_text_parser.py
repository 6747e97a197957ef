"""Text-line based receipt item extraction."""

from receiptbox.domain.receipt import CandidateItem, RawLine, ResolvedItem
from receiptbox.runtime.logging import get_logger

from .common import (
    DISCOUNT_LINE,
    DISCOUNT_LOOKBACK_LINES,
    ITEM_ONLY_LINE,
    ITEM_WITH_PRICE_LINE,
    PRICE_ONLY_LINE,
    _clean_item_name,
    _is_valid_item_name,
    _parse_discount,
    _parse_money,
    _section_boundary_reason,
)

logger = get_logger(__name__)


def _match_candidate(candidates: list[CandidateItem], price_order: int) -> CandidateItem | None:
    """Return the closest unmatched candidate at or above the price line."""
    best: CandidateItem | None = None
    for candidate in candidates:
        if candidate.matched or candidate.order > price_order:
            continue
        if best is None or price_order - candidate.order < price_order - best.order:
            best = candidate
    return best


def _find_discount_target(items: list[ResolvedItem], discount_order: int) -> ResolvedItem | None:
    """Return the nearest resolved item within the discount look-back window."""
    best: ResolvedItem | None = None
    for item in items:
        distance = discount_order - item.order
        if distance <= 0 or distance > DISCOUNT_LOOKBACK_LINES:
            continue
        if best is None or distance < discount_order - best.order:
            best = item
    return best


def _extract_items(lines: list[RawLine]) -> list[ResolvedItem]:
    """
    Extract line items from receipt lines, in emission order.

    This is heuristic-based and will likely need manual correction.
    Handles multi-line item formats where item and price are on separate
    lines: an item line without a price becomes a candidate, and the next
    price-only line binds to the closest unmatched candidate above it.

    Duplicate scan lines are kept here; see ``item_merger._merge_duplicate_items``.
    """
    candidates: list[CandidateItem] = []
    items: list[ResolvedItem] = []

    for line in lines:
        text = line.text

        reason = _section_boundary_reason(text)
        if reason is not None:
            dropped = sum(1 for candidate in candidates if not candidate.matched)
            if dropped:
                logger.debug("Line %d (%s) drops %d unpriced item(s)", line.order, reason, dropped)
            candidates = []
            continue

        match = ITEM_WITH_PRICE_LINE.match(text)
        if match:
            name = _clean_item_name(match.group(2))
            price = _parse_money(match.group(3))
            if price is not None and _is_valid_item_name(name):
                items.append(ResolvedItem.single(name, price, line.order, item_number=match.group(1)))
            else:
                logger.debug("Line %d: rejected priced line %r", line.order, text)
            # A trailing price means this is never an item-only line
            continue

        match = PRICE_ONLY_LINE.match(text)
        if match:
            price = _parse_money(match.group(1))
            if price is None:
                continue
            candidate = _match_candidate(candidates, line.order)
            if candidate is None:
                logger.debug("Line %d: no item for price %s", line.order, price)
                continue
            candidate.matched = True
            items.append(ResolvedItem.single(candidate.name, price, candidate.order, item_number=candidate.item_number))
            continue

        match = DISCOUNT_LINE.match(text)
        if match:
            discount = _parse_discount(match.group(1))
            if discount is None:
                continue
            target = _find_discount_target(items, line.order)
            if target is None:
                logger.debug("Line %d: no item for discount %s", line.order, discount)
                continue
            target.apply_discount(discount)
            continue

        match = ITEM_ONLY_LINE.match(text)
        if match:
            name = _clean_item_name(match.group(2))
            if _is_valid_item_name(name):
                candidates.append(CandidateItem(name=name, order=line.order, item_number=match.group(1)))

    return items
