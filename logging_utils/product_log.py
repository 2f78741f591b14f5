"""
Product Pricing Log - Per-Product Decision Tracking
===================================================
Records what the discount resolver decided for one product group.

CRITICAL: Transparent reporting - why a deal did or did not apply.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional


class ProductPricingLog:
    """Decision log for one product group within a pricing pass."""

    def __init__(self, product_code: str):
        self.product_code = product_code
        self.units = 0
        self.standard_price: Optional[float] = None
        self.baseline_price: Optional[float] = None
        self.price_override: Optional[float] = None
        self.bulk_candidates: List[str] = []
        self.plan: str = ""
        self.discounted_lines = 0
        self.subtotal: Optional[float] = None
        self.steps: List[Dict[str, Any]] = []

    def log_step(self, step_name: str, **kwargs):
        """Log a resolver step."""
        self.steps.append({
            "step": step_name,
            "timestamp": datetime.now().isoformat(),
            **kwargs
        })

    def log_skip(self, reason: str):
        """Log a skip decision."""
        self.log_step("skip", reason=reason)

    def log_deal_applied(self, description: str, lines: int, discounted: int):
        self.discounted_lines += discounted
        self.log_step("apply", reason=description, lines=lines, discounted=discounted)

    @property
    def skipped(self) -> bool:
        return any(step["step"] == "skip" for step in self.steps)

    def summary(self) -> Dict[str, Any]:
        """Generate summary of the decision."""
        return {
            "product_code": self.product_code,
            "units": self.units,
            "standard_price": self.standard_price,
            "baseline_price": self.baseline_price,
            "price_override": self.price_override,
            "bulk_candidates": list(self.bulk_candidates),
            "plan": self.plan,
            "discounted_lines": self.discounted_lines,
            "subtotal": self.subtotal,
            "steps": self.steps,
        }

    def print_summary(self):
        """Print human-readable summary."""
        print(f"\n  {self.product_code} x{self.units}")
        if self.standard_price is not None:
            print(f"    Standard price: {self.standard_price:.2f}")
        if self.baseline_price is not None:
            print(f"    Baseline price: {self.baseline_price:.2f}")
        if self.bulk_candidates:
            print(f"    Bulk deals:     {', '.join(self.bulk_candidates)}")
        if self.plan:
            print(f"    Plan:           {self.plan}")
        if self.subtotal is not None:
            print(f"    Subtotal:       {self.subtotal:.2f} ({self.discounted_lines} discounted lines)")
        for step in self.steps:
            print(f"    - {step['step']}: {step.get('reason', 'N/A')}")
