"""
Exact-Fill Allocator - Minimum-Cost Unbounded Knapsack (Equality Variant)
=========================================================================
Finds the cheapest multiset of item repeats whose weights sum EXACTLY to a target.

Example:
    A customer buys 26 units and has a 6-for-4 and a 20-for-12 deal. Each deal is an
    item type (weight = N, cost = price of one full bundle) and a weight-1 item is the
    single-unit fallback. Target weight = units purchased.

Approach: greedy-first branch and bound.
- Item types are walked depth-first in ascending cost-per-weight order
- At each level the largest possible repeat count is tried first
- An exact fill ends the branch (remaining items are never cheaper per unit)
- A partial cost above the best complete plan ends the branch

Worst case is exponential in the number of item types; typical deal catalogs
(a handful of bundle sizes) resolve almost instantly.

CRITICAL: Knows nothing about bills, deals or products. Payloads are opaque.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence

from errors import AllocationBudgetExceeded


@dataclass(frozen=True)
class AllocationItem:
    """
    One item type with unlimited supply.

    cost is the cost of ONE use of the item (covering `weight` units), not a unit cost.
    """
    weight: int
    cost: float
    payload: Any = None

    @property
    def rate(self) -> float:
        return self.cost / self.weight


@dataclass(frozen=True)
class AllocationEntry:
    item: AllocationItem
    repeats: int

    @property
    def payload(self) -> Any:
        return self.item.payload

    @property
    def weight(self) -> int:
        return self.item.weight * self.repeats

    @property
    def cost(self) -> float:
        return self.item.cost * self.repeats


@dataclass
class AllocationPlan:
    """
    Result of an allocation.

    cost is None when no exact fill exists (infeasible); an empty plan for a
    zero target has cost 0.0.
    """
    entries: List[AllocationEntry] = field(default_factory=list)
    cost: Optional[float] = None

    def __iter__(self) -> Iterator[AllocationEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def is_feasible(self) -> bool:
        return self.cost is not None

    @property
    def total_cost(self) -> Optional[float]:
        return self.cost

    @property
    def total_weight(self) -> int:
        return sum(entry.weight for entry in self.entries)

    def describe(self) -> str:
        if not self.is_feasible:
            return "infeasible"
        if self.is_empty:
            return "nothing to allocate"
        parts = [f"{e.repeats}x(w={e.item.weight}, c={e.item.cost:.2f})" for e in self.entries]
        return f"{' + '.join(parts)} = {self.cost:.2f}"


class _SearchState:
    """Best plan so far plus the node budget, shared across the whole tree walk."""

    def __init__(self, max_nodes: Optional[int]):
        self.best_cost: Optional[float] = None
        self.best_entries: List[AllocationEntry] = []
        self.nodes = 0
        self.max_nodes = max_nodes

    def visit(self):
        self.nodes += 1
        if self.max_nodes is not None and self.nodes > self.max_nodes:
            raise AllocationBudgetExceeded(self.max_nodes)

    def offer(self, cost: float, entries: List[AllocationEntry]):
        if self.best_cost is None or cost < self.best_cost:
            self.best_cost = cost
            self.best_entries = entries


def allocate(
    items: Sequence[AllocationItem],
    target_weight: int,
    max_nodes: Optional[int] = None,
) -> AllocationPlan:
    """
    Determine the minimum-cost way to exactly fill target_weight.

    Args:
        items: Item types; equal-rate items keep the caller's order
        target_weight: Exact total weight to reach (>= 0)
        max_nodes: Optional cap on visited search nodes

    Returns:
        AllocationPlan; empty with cost None if no exact combination exists

    Raises:
        AllocationBudgetExceeded: If max_nodes is exceeded
        ValueError: On a negative target or non-positive item weight
    """
    if target_weight < 0:
        raise ValueError(f"target_weight must be >= 0, got {target_weight}")
    for item in items:
        if item.weight < 1:
            raise ValueError(f"Item weight must be a positive integer, got {item.weight}")

    if target_weight == 0:
        return AllocationPlan(entries=[], cost=0.0)

    # Trim down the problem space, then order by cost-per-weight (sorted() is stable)
    candidates = [item for item in items if item.weight <= target_weight]
    if not candidates:
        return AllocationPlan()
    candidates = sorted(candidates, key=lambda item: item.rate)

    state = _SearchState(max_nodes)
    _walk(candidates, target_weight, 0.0, [], state)

    if state.best_cost is None:
        return AllocationPlan()
    return AllocationPlan(entries=state.best_entries, cost=state.best_cost)


def _walk(
    items: List[AllocationItem],
    remaining: int,
    cost_so_far: float,
    entries: List[AllocationEntry],
    state: _SearchState,
):
    """Depth-first walk over repeat counts of items[0], then the rest."""
    state.visit()

    items = [item for item in items if item.weight <= remaining]
    if not items:
        return

    if len(items) == 1:
        # Leaf: only an exact multiple completes the fill
        item = items[0]
        if remaining % item.weight == 0:
            repeats = remaining // item.weight
            state.offer(
                cost_so_far + repeats * item.cost,
                entries + [AllocationEntry(item, repeats)],
            )
        return

    item = items[0]
    for repeats in range(remaining // item.weight, -1, -1):
        if repeats > 0:
            new_entries = entries + [AllocationEntry(item, repeats)]
            new_cost = cost_so_far + repeats * item.cost
            new_remaining = remaining - repeats * item.weight
        else:
            new_entries = entries
            new_cost = cost_so_far
            new_remaining = remaining

        if new_remaining == 0:
            # Exact fill; fewer repeats would only lean on pricier items
            state.offer(new_cost, new_entries)
            return

        if state.best_cost is not None and new_cost > state.best_cost:
            # Fewer repeats leave more weight for pricier items: can't win either
            return

        _walk(items[1:], new_remaining, new_cost, new_entries, state)
