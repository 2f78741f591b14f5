"""
Pricing Pass Log - Bill-Level Statistics
========================================
Aggregates per-product decisions for one pricing pass.
"""

from typing import Any, Dict, Optional

from logging_utils.product_log import ProductPricingLog


class PricingPassLog:
    """Logging for one pricing pass over a bill."""

    def __init__(self, customer_id: Optional[int] = None):
        self.customer_id = customer_id
        self.product_logs: Dict[str, ProductPricingLog] = {}
        self.pass_stats = {
            "total_lines": 0,
            "products": 0,
            "products_skipped": 0,
            "bulk_plans": 0,
            "budget_exceeded": 0,
            "discounted_lines": 0,
        }

    def get_product_log(self, product_code: str) -> ProductPricingLog:
        """Get or create product log."""
        if product_code not in self.product_logs:
            self.product_logs[product_code] = ProductPricingLog(product_code)
        return self.product_logs[product_code]

    def increment_stat(self, stat_name: str, amount: int = 1):
        """Increment a pass statistic."""
        if stat_name in self.pass_stats:
            self.pass_stats[stat_name] += amount

    def finalize_pass(self) -> Dict[str, Any]:
        """Calculate final statistics."""
        self.pass_stats["products"] = len(self.product_logs)
        self.pass_stats["products_skipped"] = sum(
            1 for log in self.product_logs.values() if log.skipped
        )
        self.pass_stats["discounted_lines"] = sum(
            log.discounted_lines for log in self.product_logs.values()
        )
        return self.pass_stats

    def print_summary(self):
        """Print the pricing decisions for a non-technical reader."""
        stats = self.finalize_pass()

        print("\n" + "=" * 60)
        header = "PRICING DECISIONS"
        if self.customer_id is not None:
            header += f" - Customer {self.customer_id}"
        print(header)
        print("=" * 60)

        for log in self.product_logs.values():
            log.print_summary()

        print("-" * 60)
        print(f"Lines:            {stats['total_lines']}")
        print(f"Products:         {stats['products']} ({stats['products_skipped']} without deals)")
        print(f"Bulk plans:       {stats['bulk_plans']}")
        print(f"Discounted lines: {stats['discounted_lines']}")
        if stats["budget_exceeded"]:
            print(f"⚠️  Search budget exceeded: {stats['budget_exceeded']}")
        print("=" * 60)
