"""
Bill Model - Line-by-Line Checkout Pricing
==========================================
A Bill is an ordered list of BillLines, one line per purchased unit.

RULE: Each line carries at most ONE discount. Setting a new one overwrites the slot.
RULE: Only the discount resolver mutates lines; the allocator never sees them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from errors import InvalidDiscountError, UnpricedLineError


class DiscountKind(Enum):
    """Which kind of deal produced a discount."""

    PRICE_OVERRIDE = "price_override"
    # Fixed replacement unit price

    BULK = "bulk"
    # Buy N, pay for M


@dataclass(frozen=True)
class Discount:
    """Immutable discount stamped onto a single bill line."""
    kind: DiscountKind
    description: str
    amount: float


@dataclass
class BillLine:
    """
    Single purchased unit during bill analysis.

    price is the undiscounted unit price; None until the resolver seeds it.
    """
    product_code: str
    price: Optional[float] = None
    discount: Optional[Discount] = None

    def set_discount(self, kind: DiscountKind, description: str, amount: float) -> Discount:
        """Replace this line's discount. Amount must lie within [0, price]."""
        if self.price is None:
            raise UnpricedLineError(f"Cannot discount unpriced line for {self.product_code!r}")
        if amount < 0:
            raise InvalidDiscountError(f"Negative discount {amount} on {self.product_code!r}")
        if amount > self.price:
            raise InvalidDiscountError(
                f"Discount {amount} exceeds price {self.price} on {self.product_code!r}"
            )
        self.discount = Discount(kind=kind, description=description, amount=amount)
        return self.discount

    def clear_discount(self) -> None:
        self.discount = None

    def total(self) -> float:
        """Cost of this line including any applied discount."""
        if self.price is None:
            raise UnpricedLineError(f"Pricing missing from bill line {self.product_code!r}")
        if self.discount is None:
            return self.price
        return self.price - self.discount.amount


@dataclass
class Bill:
    """Ordered collection of bill lines."""
    lines: List[BillLine] = field(default_factory=list)

    @classmethod
    def from_codes(cls, product_codes: Iterable[str]) -> "Bill":
        """Create an unpriced bill with one line per product code."""
        return cls(lines=[BillLine(product_code=code) for code in product_codes])

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def group_by_product(self) -> Dict[str, List[BillLine]]:
        """Lines grouped by product code, in first-seen order."""
        groups: Dict[str, List[BillLine]] = {}
        for line in self.lines:
            groups.setdefault(line.product_code, []).append(line)
        return groups

    def total(self) -> float:
        """Total cost of all lines, including applied discounts."""
        return sum(line.total() for line in self.lines)

    def discount_total(self) -> float:
        return sum(line.discount.amount for line in self.lines if line.discount is not None)
