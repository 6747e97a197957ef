"""Data models for receipt scanning."""

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round a money amount to cents (half-up, like printed receipts)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RawLine:
    """A trimmed, non-empty OCR line and its position in the receipt."""

    text: str
    order: int


@dataclass
class CandidateItem:
    """An item line seen without a price, waiting for a nearby price line."""

    name: str
    order: int
    item_number: str | None = None
    matched: bool = False


@dataclass
class ResolvedItem:
    """A single line item on a receipt."""

    name: str
    unit_price: Decimal
    order: int
    quantity: int = 1
    discount: Decimal = Decimal("0.00")
    total_price: Decimal = Decimal("0.00")
    item_number: str | None = None

    @classmethod
    def single(cls, name: str, price: Decimal, order: int, item_number: str | None = None) -> "ResolvedItem":
        """Build a quantity-1, undiscounted item."""
        price = round2(price)
        return cls(name=name, unit_price=price, order=order, total_price=price, item_number=item_number)

    def expected_total(self) -> Decimal:
        return round2(self.unit_price * self.quantity - self.discount)

    def apply_discount(self, amount: Decimal) -> None:
        """Add a discount and keep total_price consistent with it."""
        self.discount = round2(self.discount + amount)
        self.total_price = self.expected_total()


@dataclass
class ParsedReceipt:
    """Parsed receipt data."""

    store_name: str = ""
    store_location: str = ""
    store_city: str = ""
    store_state: str = ""
    store_zip: str = ""
    purchase_date: date = field(default_factory=date.today)
    total_amount: Decimal = Decimal("0.00")
    items: list[ResolvedItem] = field(default_factory=list)
    raw_text: str = ""  # Original OCR text for reference


def empty_receipt(raw_text: str = "") -> ParsedReceipt:
    """Return the receipt shape used when nothing could be detected."""
    return ParsedReceipt(raw_text=raw_text)
