"""
Tests for Deal Types and Application
====================================
Verifies bulk batching, price override discounts and dispatch.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from models.bill import BillLine, DiscountKind
from models.deals import (
    BulkDeal,
    DealKind,
    PriceOverrideDeal,
    apply_deal,
    deals_for_product,
)


def _lines(n: int, price: float = 100.0):
    return [BillLine("classic", price=price) for _ in range(n)]


def test_bulk_deal_economics():
    deal = BulkDeal(customer_id=1, product_code="classic", purchase_size=3, cost_size=2)

    assert deal.kind == DealKind.BULK
    assert deal.description == "3 for 2 deal"
    assert deal.effective_price(269.99) == pytest.approx(179.9933333)


def test_bulk_deal_invalid_sizes():
    with pytest.raises(ValueError):
        BulkDeal(customer_id=1, product_code="classic", purchase_size=0, cost_size=0)
    with pytest.raises(ValueError):
        BulkDeal(customer_id=1, product_code="classic", purchase_size=3, cost_size=3)
    with pytest.raises(ValueError):
        BulkDeal(customer_id=1, product_code="classic", purchase_size=3, cost_size=-1)

    # N for 0 is a valid (free) bundle
    assert BulkDeal(1, "classic", 2, 0).effective_price(10.0) == 0.0


def test_bulk_apply_discounts_tail_of_each_batch():
    """3-for-2 on 6 lines: 3rd and 6th lines become free."""
    print("\n=== TEST: Bulk Apply ===")

    deal = BulkDeal(customer_id=1, product_code="classic", purchase_size=3, cost_size=2)
    lines = _lines(6)

    discounted = apply_deal(deal, lines)

    assert discounted == 2
    free = [idx for idx, line in enumerate(lines) if line.discount is not None]
    assert free == [2, 5], f"❌ Wrong lines discounted: {free}"
    for idx in free:
        assert lines[idx].discount.kind == DiscountKind.BULK
        assert lines[idx].discount.description == "3 for 2 deal"
        assert lines[idx].total() == 0.0
    assert sum(line.total() for line in lines) == pytest.approx(400.0)

    print("✅ PASSED")


def test_bulk_apply_ignores_partial_batch():
    deal = BulkDeal(customer_id=1, product_code="classic", purchase_size=3, cost_size=2)
    lines = _lines(5)

    assert apply_deal(deal, lines) == 1
    assert [line.discount is not None for line in lines] == [False, False, True, False, False]


def test_price_override_apply():
    deal = PriceOverrideDeal(customer_id=2, product_code="standout", price=299.99)
    lines = [BillLine("standout", price=322.99) for _ in range(3)]

    assert deal.kind == DealKind.PRICE_OVERRIDE
    assert apply_deal(deal, lines) == 3
    for line in lines:
        assert line.discount.kind == DiscountKind.PRICE_OVERRIDE
        assert line.discount.description == "price discount deal"
        assert line.total() == pytest.approx(299.99)


def test_price_override_never_raises_price():
    """An override above the line price yields a zero discount, not a surcharge."""
    deal = PriceOverrideDeal(customer_id=2, product_code="standout", price=500.0)
    lines = [BillLine("standout", price=322.99)]

    apply_deal(deal, lines)

    assert lines[0].discount.amount == 0
    assert lines[0].total() == pytest.approx(322.99)


def test_price_override_trigger():
    deal = PriceOverrideDeal(customer_id=7, product_code="test1", price=150, trigger_size=3)

    assert not deal.is_triggered(2)
    assert deal.is_triggered(3)
    assert PriceOverrideDeal(7, "test1", 150).is_triggered(0)


def test_from_dict_defaults():
    deal = PriceOverrideDeal.from_dict({"customer_id": "5", "product_code": "test1", "price": "150"})

    assert deal == PriceOverrideDeal(customer_id=5, product_code="test1", price=150.0, trigger_size=0)

    bulk = BulkDeal.from_dict({"customer_id": 6, "product_code": "test2", "purchase_size": 5, "cost_size": 2})
    assert bulk.description == "5 for 2 deal"


def test_deals_for_product():
    deals = [
        BulkDeal(5, "classic", 6, 4),
        BulkDeal(5, "premium", 6, 4),
        BulkDeal(5, "classic", 20, 12),
    ]

    assert [d.purchase_size for d in deals_for_product(deals, "classic")] == [6, 20]
    assert deals_for_product(deals, "standout") == []


if __name__ == "__main__":
    test_bulk_deal_economics()
    test_bulk_deal_invalid_sizes()
    test_bulk_apply_discounts_tail_of_each_batch()
    test_bulk_apply_ignores_partial_batch()
    test_price_override_apply()
    test_price_override_never_raises_price()
    test_price_override_trigger()
    test_from_dict_defaults()
    test_deals_for_product()
    print("\n✅ ALL DEAL TESTS PASSED")
