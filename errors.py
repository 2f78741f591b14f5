"""
Checkout Errors
===============
Exception taxonomy for catalog lookups, bill arithmetic and allocation.

RULE: An infeasible allocation is NOT an error - allocate() returns an empty plan.
"""


class CheckoutError(Exception):
    """Base exception for all checkout errors."""
    pass


class NotFoundError(CheckoutError):
    """Raised when a product or customer code is unknown to the catalog."""

    def __init__(self, kind: str, key):
        super().__init__(f"Unknown {kind}: {key!r}")
        self.kind = kind
        self.key = key


class InvalidDiscountError(CheckoutError):
    """Raised when a discount amount exceeds the line price (or is negative)."""
    pass


class UnpricedLineError(CheckoutError):
    """Raised when a bill line total is requested before its price is set."""
    pass


class CatalogError(CheckoutError):
    """Raised for malformed catalog data."""
    pass


class AllocationBudgetExceeded(CheckoutError):
    """Raised when the allocator visits more search nodes than allowed."""

    def __init__(self, max_nodes: int):
        super().__init__(f"Allocation search exceeded {max_nodes} nodes")
        self.max_nodes = max_nodes
