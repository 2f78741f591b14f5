"""
Deal Types and Application - Customer Discount Rules
====================================================
Two fixed deal kinds, applied through a single dispatch function.

PRICE_OVERRIDE: replaces a product's unit price once a unit-count threshold is met.
BULK: "buy N, pay for M", repeatable in batches of N.

CRITICAL: The set of deal kinds is closed. Add a kind here + a handler in
_APPLY_HANDLERS, never by subclassing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence, Union

from models.bill import BillLine, DiscountKind

PRICE_DISCOUNT_DESCRIPTION = "price discount deal"


class DealKind(Enum):
    PRICE_OVERRIDE = "price_override"
    BULK = "bulk"


@dataclass(frozen=True)
class PriceOverrideDeal:
    """
    Fixed replacement unit price for one product.

    Eligible only when the bill holds >= trigger_size units of the product
    and price is strictly below the standard price. trigger_size 0 = always.
    """
    customer_id: int
    product_code: str
    price: float
    trigger_size: int = 0
    kind: DealKind = field(default=DealKind.PRICE_OVERRIDE, init=False, repr=False)

    def is_triggered(self, count: int) -> bool:
        return count >= self.trigger_size

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'PriceOverrideDeal':
        return PriceOverrideDeal(
            customer_id=int(data["customer_id"]),
            product_code=str(data["product_code"]),
            price=float(data["price"]),
            trigger_size=int(data.get("trigger_size", 0)),
        )


@dataclass(frozen=True)
class BulkDeal:
    """Buy purchase_size (N) units, pay for only cost_size (M) of them."""
    customer_id: int
    product_code: str
    purchase_size: int
    cost_size: int
    kind: DealKind = field(default=DealKind.BULK, init=False, repr=False)

    def __post_init__(self):
        if self.purchase_size < 1:
            raise ValueError(f"purchase_size must be >= 1, got {self.purchase_size}")
        if not 0 <= self.cost_size < self.purchase_size:
            raise ValueError(
                f"cost_size must satisfy 0 <= M < N, got N={self.purchase_size} M={self.cost_size}"
            )

    @property
    def description(self) -> str:
        return f"{self.purchase_size} for {self.cost_size} deal"

    def effective_price(self, price: float) -> float:
        """Per-unit price this deal implies when fully packed."""
        return (self.cost_size / self.purchase_size) * price

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'BulkDeal':
        return BulkDeal(
            customer_id=int(data["customer_id"]),
            product_code=str(data["product_code"]),
            purchase_size=int(data["purchase_size"]),
            cost_size=int(data["cost_size"]),
        )


Deal = Union[PriceOverrideDeal, BulkDeal]


def _apply_price_override(deal: PriceOverrideDeal, lines: Sequence[BillLine]) -> int:
    for line in lines:
        line.set_discount(
            DiscountKind.PRICE_OVERRIDE,
            PRICE_DISCOUNT_DESCRIPTION,
            max(line.price - deal.price, 0),
        )
    return len(lines)


def _apply_bulk(deal: BulkDeal, lines: Sequence[BillLine]) -> int:
    # Leave the first M lines of each batch alone, zero the remaining N-M.
    # A trailing partial batch is not discounted.
    discounted = 0
    n = deal.purchase_size
    full = len(lines) - len(lines) % n
    for start in range(0, full, n):
        for line in lines[start + deal.cost_size:start + n]:
            line.set_discount(DiscountKind.BULK, deal.description, line.total())
            discounted += 1
    return discounted


_APPLY_HANDLERS = {
    DealKind.PRICE_OVERRIDE: _apply_price_override,
    DealKind.BULK: _apply_bulk,
}


def apply_deal(deal: Deal, lines: Sequence[BillLine]) -> int:
    """
    Stamp a deal's discount onto bill lines.

    Args:
        deal: PriceOverrideDeal or BulkDeal
        lines: Lines handed over by the resolver (not yet discounted this pass)

    Returns:
        Number of lines that received a discount
    """
    handler = _APPLY_HANDLERS.get(deal.kind)
    if handler is None:
        raise ValueError(f"Unsupported deal kind: {deal.kind}")
    return handler(deal, lines)


def deals_for_product(deals: List[Deal], product_code: str) -> List[Deal]:
    return [d for d in deals if d.product_code == product_code]
