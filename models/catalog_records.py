"""
Catalog Records - Products and Customers
========================================
Plain read-only master data returned by catalog lookups.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Product:
    code: str
    name: str
    description: str
    price: float

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Product':
        """Create from a catalog dictionary."""
        return Product(
            code=str(data["code"]),
            name=data.get("name", data["code"]),
            description=data.get("description", ""),
            price=float(data["price"]),
        )


@dataclass(frozen=True)
class Customer:
    id: int
    name: str

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Customer':
        """Create from a catalog dictionary."""
        return Customer(
            id=int(data["id"]),
            name=data.get("name", ""),
        )
