"""Exact-fill allocation (branch and bound)."""

from .exact_fill import (
    AllocationItem,
    AllocationEntry,
    AllocationPlan,
    allocate,
)

__all__ = [
    'AllocationItem',
    'AllocationEntry',
    'AllocationPlan',
    'allocate',
]
