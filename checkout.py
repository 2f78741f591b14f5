"""
Checkout - Accumulate Products, Price the Bill
==============================================
Thin facade over Bill + PricingRules + price_bill.
"""

from typing import List, Optional, Tuple

from catalog import Catalog
from logging_utils.pass_log import PricingPassLog
from models.bill import Bill
from pricing.discount_resolver import PricingRules, price_bill


class Checkout:
    """In-progress checkout for one customer."""

    def __init__(
        self,
        pricing_rules: PricingRules,
        catalog: Catalog,
        max_nodes: Optional[int] = None,
    ):
        self.pricing_rules = pricing_rules
        self.catalog = catalog
        self.max_nodes = max_nodes
        self._items: List[str] = []

    @classmethod
    def for_customer(
        cls,
        catalog: Catalog,
        customer_id: int,
        max_nodes: Optional[int] = None,
    ) -> "Checkout":
        """Checkout using the customer's deals (NotFoundError if unknown)."""
        return cls(PricingRules.load(catalog, customer_id), catalog, max_nodes=max_nodes)

    def add(self, product_code: str):
        """Add one unit of a product to the checkout."""
        self._items.append(product_code)

    @property
    def items(self) -> Tuple[str, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def bill(self, pricing_log: Optional[PricingPassLog] = None) -> Bill:
        """
        Build and price a bill for the current items.

        Raises:
            NotFoundError: If any added product code is unknown
        """
        bill = Bill.from_codes(self._items)
        price_bill(
            bill,
            self.pricing_rules,
            self.catalog,
            pricing_log=pricing_log,
            max_nodes=self.max_nodes,
        )
        return bill

    def total(self) -> float:
        """Total cost of the current items, applying the customer's discounts."""
        return self.bill().total()
