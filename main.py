"""
Checkout Runner
===============
Prices a basket for one customer and prints the bill.

Usage:
    python main.py --customer 1 classic classic classic premium
    python main.py --customer 5 --debug premium --qty 26

Steps:
1. Load config (.env + configs/config.yaml)
2. Load the catalog
3. Build the checkout for the customer
4. Price the bill and print line-by-line results
"""

import argparse
import sys
from typing import List, Optional

from catalog import load_catalog
from checkout import Checkout
from config import load_config, print_config_summary
from errors import CheckoutError
from logging_utils.pass_log import PricingPassLog
from models.bill import Bill
from utils_logging import LOG_LEVEL_DEBUG, log_error, set_log_level, set_log_level_by_name


def print_bill(bill: Bill, customer_name: str):
    """Print every bill line with its discount, then the total."""
    print("\n" + "=" * 60)
    print(f"🧾 BILL - {customer_name}")
    print("=" * 60)
    for idx, line in enumerate(bill.lines, start=1):
        discount = ""
        if line.discount is not None:
            discount = f"  -{line.discount.amount:8.2f} ({line.discount.description})"
        print(f"  {idx:3d}. {line.product_code:12} {line.price:9.2f}{discount}")
    print("-" * 60)
    print(f"  Discounts: {bill.discount_total():10.2f}")
    print(f"  TOTAL:     {bill.total():10.2f}")
    print("=" * 60 + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Price a checkout with customer deals")
    parser.add_argument("products", nargs="+", help="Product codes, one per unit")
    parser.add_argument("--customer", type=int, required=True, help="Customer id")
    parser.add_argument("--qty", type=int, default=1, help="Repeat the product list this many times")
    parser.add_argument("--config", default=None, help="Config file (default: configs/config.yaml)")
    parser.add_argument("--debug", action="store_true", help="Show pricing decisions")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except FileNotFoundError as e:
        log_error(str(e))
        return 1

    set_log_level_by_name(cfg.logging.level)
    if args.debug:
        set_log_level(LOG_LEVEL_DEBUG)
        print_config_summary(cfg)

    try:
        catalog = load_catalog(cfg.catalog.path)
        customer = catalog.lookup_customer(args.customer)
        checkout = Checkout.for_customer(catalog, customer.id, max_nodes=cfg.allocator.max_nodes)

        for _ in range(max(args.qty, 1)):
            for code in args.products:
                checkout.add(code)

        pricing_log = PricingPassLog(customer.id)
        bill = checkout.bill(pricing_log=pricing_log)
    except (CheckoutError, FileNotFoundError) as e:
        log_error(str(e))
        return 1

    if args.debug:
        pricing_log.print_summary()
    print_bill(bill, customer.name)
    return 0


# ==============================================================================
# MAIN ENTRYPOINT
# ==============================================================================

if __name__ == "__main__":
    sys.exit(main())
