"""Format ParsedReceipt data as human-readable text for review."""

from receiptbox.domain.receipt import ParsedReceipt, ResolvedItem


def _format_rows_aligned(rows: list[tuple[str, str, str | None]], indent: str = "  ") -> list[str]:
    """
    Format item rows with aligned amounts and comments.

    Args:
        rows: List of (label, amount, comment_or_none) tuples
        indent: Indentation prefix for each line

    Returns:
        List of formatted lines with aligned amounts and comments
    """
    if not rows:
        return []

    max_label_len = max(len(label) for label, _, _ in rows)
    max_amount_len = max(len(amount) for _, amount, _ in rows)

    lines = []
    for label, amount, comment in rows:
        base = f"{indent}{label.ljust(max_label_len)}  {amount.rjust(max_amount_len)}"
        if comment:
            lines.append(f"{base}  ; {comment}")
        else:
            lines.append(base)
    return lines


def _item_label(item: ResolvedItem) -> str:
    label = item.name
    if item.quantity > 1:
        label += f" (qty {item.quantity} @ {item.unit_price:.2f})"
    return label


def _item_comment(item: ResolvedItem) -> str | None:
    parts = []
    if item.item_number:
        parts.append(f"item #{item.item_number}")
    if item.discount > 0:
        parts.append(f"discount {item.discount:.2f}")
    return ", ".join(parts) or None


def format_parsed_receipt(receipt: ParsedReceipt) -> str:
    """Render a parsed receipt: header, one aligned row per item, then the total."""
    lines = [
        f"Store:    {receipt.store_name or '(unknown)'}",
    ]
    address = ", ".join(
        part
        for part in (
            receipt.store_location,
            receipt.store_city,
            " ".join(p for p in (receipt.store_state, receipt.store_zip) if p),
        )
        if part
    )
    if address:
        lines.append(f"Address:  {address}")
    lines.append(f"Date:     {receipt.purchase_date.isoformat()}")
    lines.append("Items:")

    rows = [(_item_label(item), f"{item.total_price:.2f}", _item_comment(item)) for item in receipt.items]
    if rows:
        lines.extend(_format_rows_aligned(rows))
    else:
        lines.append("  (none found)")

    items_sum = sum(item.total_price for item in receipt.items)
    lines.append(f"Total:    {receipt.total_amount:.2f}")
    if receipt.items and items_sum != receipt.total_amount:
        lines.append(f"  ; items sum to {items_sum:.2f}, review before saving")
    return "\n".join(lines) + "\n"
