"""
Discount Resolver - Apply Customer Deals to a Bill
==================================================
Per product group in a bill:
1. Pick the best price override (lowest triggered price below standard)
2. Pick the bulk deals that beat the standard price
3. Ask the exact-fill allocator how to cover the units at minimum cost
4. Stamp bulk discounts per the plan, price-override discounts on the rest

RULE: Bulk eligibility is tested against the STANDARD price; participation in the
allocation against the BASELINE price (override winner or standard).
RULE: Allocator cost of a bulk deal = effective_price(standard) * cost_size.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from allocation.exact_fill import AllocationItem, AllocationPlan, allocate
from catalog import Catalog
from errors import AllocationBudgetExceeded
from logging_utils.pass_log import PricingPassLog
from logging_utils.product_log import ProductPricingLog
from models.bill import Bill, BillLine
from models.deals import BulkDeal, PriceOverrideDeal, apply_deal, deals_for_product
from utils_logging import log_debug, log_warning


@dataclass(frozen=True)
class PricingRules:
    """All deals a customer is entitled to; immutable for a pricing pass."""
    price_deals: Tuple[PriceOverrideDeal, ...] = ()
    bulk_deals: Tuple[BulkDeal, ...] = ()
    customer_id: Optional[int] = None

    @classmethod
    def load(cls, catalog: Catalog, customer_id: int) -> "PricingRules":
        """
        Load the pricing rules for a customer.

        Raises:
            NotFoundError: If the customer is unknown
        """
        catalog.lookup_customer(customer_id)
        return cls(
            price_deals=tuple(catalog.price_deals_for(customer_id)),
            bulk_deals=tuple(catalog.bulk_deals_for(customer_id)),
            customer_id=customer_id,
        )

    def resolve_product_deals(
        self,
        product_code: str,
        std_price: float,
        count: int,
    ) -> Tuple[Optional[PriceOverrideDeal], List[BulkDeal]]:
        """
        Determine the deals applicable to a specific product.

        Returns:
            (price override winner or None, bulk deals cheaper than std_price)
        """
        price_deal = None
        for deal in deals_for_product(list(self.price_deals), product_code):
            if deal.price < std_price and deal.is_triggered(count):
                # strict < keeps the first of equally priced deals
                if price_deal is None or deal.price < price_deal.price:
                    price_deal = deal

        bulk_deals = [
            deal for deal in deals_for_product(list(self.bulk_deals), product_code)
            if deal.effective_price(std_price) < std_price
        ]
        return price_deal, bulk_deals


def find_bulk_allocation_plan(
    deals: Sequence[BulkDeal],
    num_items: int,
    std_price: float,
    baseline_price: float,
    max_nodes: Optional[int] = None,
) -> AllocationPlan:
    """
    Determine the most cost efficient way to apply a set of bulk deals.

    Each deal becomes an allocator item (weight = purchase_size,
    cost = effective_price(std_price) * cost_size); a weight-1 item at the
    baseline price completes the fill.

    Args:
        deals: Bulk deals for one product
        num_items: Units of the product in the bill
        std_price: Standard product price (drives bulk economics)
        baseline_price: Price charged for units outside any bulk deal

    Returns:
        AllocationPlan whose entry payloads are BulkDeal or None (fallback)
    """
    # Trim down the problem space - deals that can't beat the baseline
    deals = [deal for deal in deals if deal.effective_price(std_price) < baseline_price]
    if not deals:
        return AllocationPlan()

    items = [
        AllocationItem(
            weight=deal.purchase_size,
            cost=deal.effective_price(std_price) * deal.cost_size,
            payload=deal,
        )
        for deal in deals
    ]
    # Bigger bundles first among equal rates (looks better on the bill)
    items = sorted(items, key=lambda item: item.weight, reverse=True)
    items.append(AllocationItem(weight=1, cost=baseline_price, payload=None))

    return allocate(items, num_items, max_nodes=max_nodes)


def price_bill(
    bill: Bill,
    rules: PricingRules,
    catalog: Catalog,
    pricing_log: Optional[PricingPassLog] = None,
    max_nodes: Optional[int] = None,
) -> None:
    """
    Apply the pricing rules to a bill, in place.

    Idempotent: every line is re-seeded with its standard price and stripped
    of any previous discount first.

    Raises:
        NotFoundError: If a line's product code is unknown
    """
    for line in bill.lines:
        line.price = catalog.lookup_product(line.product_code).price
        line.clear_discount()

    if pricing_log is not None:
        pricing_log.increment_stat("total_lines", len(bill.lines))

    for product_code, product_lines in bill.group_by_product().items():
        product_log = pricing_log.get_product_log(product_code) if pricing_log is not None else None
        _apply_product_deals(
            product_code, product_lines, rules, catalog, product_log, pricing_log, max_nodes
        )


def _apply_product_deals(
    product_code: str,
    product_lines: List[BillLine],
    rules: PricingRules,
    catalog: Catalog,
    product_log: Optional[ProductPricingLog],
    pricing_log: Optional[PricingPassLog],
    max_nodes: Optional[int],
):
    """Apply any discounts applicable to a single product group."""
    std_price = catalog.lookup_product(product_code).price
    count = len(product_lines)

    price_deal, bulk_deals = rules.resolve_product_deals(product_code, std_price, count)
    baseline = price_deal.price if price_deal is not None else std_price

    if product_log is not None:
        product_log.units = count
        product_log.standard_price = std_price
        product_log.baseline_price = baseline
        product_log.price_override = price_deal.price if price_deal is not None else None
        product_log.bulk_candidates = [deal.description for deal in bulk_deals]

    if price_deal is None and not bulk_deals:
        log_debug(f"{product_code}: no deals apply")
        if product_log is not None:
            product_log.log_skip("no deals apply")
            product_log.subtotal = sum(line.total() for line in product_lines)
        return

    try:
        plan = find_bulk_allocation_plan(bulk_deals, count, std_price, baseline, max_nodes=max_nodes)
    except AllocationBudgetExceeded as e:
        # Fail closed: no bulk discount for this product
        log_warning(f"{product_code}: {e} - bulk deals skipped")
        if pricing_log is not None:
            pricing_log.increment_stat("budget_exceeded")
        if product_log is not None:
            product_log.log_step("budget_exceeded", reason=str(e))
        plan = AllocationPlan()

    log_debug(f"{product_code} x{count}: std={std_price:.2f} baseline={baseline:.2f} plan={plan.describe()}")
    if product_log is not None:
        product_log.plan = plan.describe() if not plan.is_empty else ""
    if pricing_log is not None and not plan.is_empty:
        pricing_log.increment_stat("bulk_plans")

    remaining = list(product_lines)
    for entry in plan:
        deal = entry.payload
        if deal is None or entry.repeats == 0:
            continue
        take = entry.repeats * deal.purchase_size
        batch, remaining = remaining[:take], remaining[take:]
        discounted = apply_deal(deal, batch)
        if product_log is not None:
            product_log.log_deal_applied(deal.description, len(batch), discounted)

    if price_deal is not None and remaining:
        discounted = apply_deal(price_deal, remaining)
        if product_log is not None:
            product_log.log_deal_applied(f"price {price_deal.price:.2f}", len(remaining), discounted)

    if product_log is not None:
        product_log.subtotal = sum(line.total() for line in product_lines)
