"""
Integrated Checkout Tests
=========================
End-to-end totals for the fixture customers in configs/catalog.yaml.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from catalog import load_catalog
from checkout import Checkout
from errors import NotFoundError

CATALOG_PATH = os.path.join(os.path.dirname(__file__), '..', 'configs', 'catalog.yaml')
CATALOG = load_catalog(CATALOG_PATH)


def _total(customer_id: int, *baskets) -> float:
    """baskets: (product_code, quantity) pairs."""
    checkout = Checkout.for_customer(CATALOG, customer_id)
    for code, qty in baskets:
        for _ in range(qty):
            checkout.add(code)
    return checkout.total()


# ==============================================================================
# EXAMPLE SCENARIOS
# ==============================================================================

def test_default_customer_no_deals():
    """Customer without deals pays standard prices."""
    total = _total(4, ("classic", 1), ("standout", 1), ("premium", 1))
    assert total == pytest.approx(987.97, abs=1e-5)


def test_three_for_two_classic():
    total = _total(1, ("classic", 3), ("premium", 1))
    assert total == pytest.approx(934.97, abs=1e-5)


def test_standout_price_override():
    total = _total(2, ("standout", 3), ("premium", 1))
    assert total == pytest.approx(1294.96, abs=1e-5)


# ==============================================================================
# BULK DEALS
# ==============================================================================

@pytest.mark.parametrize("units, expected", [
    (6, 1079.96),    # single 6-for-4
    (7, 1349.95),    # + one unit at full price
    (12, 2159.92),   # 6-for-4 twice
    (13, 2429.91),   # twice + one extra
])
def test_six_for_four_classic(units, expected):
    assert _total(5, ("classic", units)) == pytest.approx(expected, abs=1e-5)


def test_two_bulk_deals_combined():
    """26 premium -> 20-for-12 + 6-for-4."""
    print("\n=== TEST: Two Bulk Deals ===")

    assert _total(5, ("premium", 26)) == pytest.approx(6319.84, abs=1e-5)
    assert _total(5, ("premium", 27)) == pytest.approx(6714.83, abs=1e-5)

    print("✅ PASSED")


# ==============================================================================
# PRICE OVERRIDES
# ==============================================================================

def test_price_override_without_trigger():
    assert _total(5, ("standout", 2)) == pytest.approx(599.98, abs=1e-5)


@pytest.mark.parametrize("units, expected", [
    (1, 394.99),   # below both thresholds
    (2, 400.0),    # 200 deal from 2 units
    (3, 450.0),    # 150 deal from 3 units
])
def test_tiered_trigger_sizes(units, expected):
    assert _total(7, ("test1", units)) == pytest.approx(expected, abs=1e-5)


def test_trigger_threshold_only():
    """Single override with trigger_size 3."""
    assert _total(8, ("test1", 2)) == pytest.approx(2 * 394.99, abs=1e-5)
    assert _total(8, ("test1", 3)) == pytest.approx(450.0, abs=1e-5)


def test_price_trumps_bulk():
    """150 override beats a 2-for-1 at 394.99."""
    assert _total(5, ("test1", 2)) == pytest.approx(300.0, abs=1e-5)


def test_bulk_trumps_no_deal():
    """2-for-1 without an override: pay for one."""
    assert _total(5, ("test2", 2)) == pytest.approx(394.99, abs=1e-5)


# ==============================================================================
# CHECKOUT BEHAVIOUR
# ==============================================================================

def test_total_is_repeatable():
    checkout = Checkout.for_customer(CATALOG, 5)
    for _ in range(13):
        checkout.add("classic")

    assert checkout.total() == pytest.approx(checkout.total())
    assert len(checkout) == 13
    assert checkout.items == ("classic",) * 13


def test_empty_checkout():
    assert Checkout.for_customer(CATALOG, 1).total() == 0


def test_bill_exposes_line_discounts():
    checkout = Checkout.for_customer(CATALOG, 1)
    for code in ["classic", "premium", "classic", "classic"]:
        checkout.add(code)

    bill = checkout.bill()

    assert [line.product_code for line in bill.lines] == ["classic", "premium", "classic", "classic"]
    free = [line for line in bill.lines if line.discount is not None]
    assert len(free) == 1
    assert free[0] is bill.lines[3]
    assert free[0].discount.description == "3 for 2 deal"


def test_unknown_product_raises_on_total():
    checkout = Checkout.for_customer(CATALOG, 1)
    checkout.add("nope")

    with pytest.raises(NotFoundError):
        checkout.total()


def test_unknown_customer():
    with pytest.raises(NotFoundError):
        Checkout.for_customer(CATALOG, 999)


if __name__ == "__main__":
    print("\n" + "="*60)
    print("RUNNING INTEGRATED CHECKOUT TESTS")
    print("="*60)

    test_default_customer_no_deals()
    test_three_for_two_classic()
    test_standout_price_override()
    for units, expected in [(6, 1079.96), (7, 1349.95), (12, 2159.92), (13, 2429.91)]:
        test_six_for_four_classic(units, expected)
    test_two_bulk_deals_combined()
    test_price_override_without_trigger()
    for units, expected in [(1, 394.99), (2, 400.0), (3, 450.0)]:
        test_tiered_trigger_sizes(units, expected)
    test_trigger_threshold_only()
    test_price_trumps_bulk()
    test_bulk_trumps_no_deal()
    test_total_is_repeatable()
    test_empty_checkout()
    test_bill_exposes_line_discounts()
    test_unknown_product_raises_on_total()
    test_unknown_customer()

    print("\n" + "="*60)
    print("✅ ALL CHECKOUT TESTS PASSED")
    print("="*60)
