"""Discount resolution: customer pricing rules applied to bills."""

from .discount_resolver import (
    PricingRules,
    find_bulk_allocation_plan,
    price_bill,
)

__all__ = [
    'PricingRules',
    'find_bulk_allocation_plan',
    'price_bill',
]
