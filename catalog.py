"""
Catalog - Read-Only Master Data
===============================
Products, customers and per-customer deals, loaded from a YAML file and passed
explicitly to pricing (no module-level tables).

YAML layout (configs/catalog.yaml):
    customers:   [{id, name}]
    products:    [{code, name, description, price}]
    price_deals: [{customer_id, product_code, price, trigger_size}]
    bulk_deals:  [{customer_id, product_code, purchase_size, cost_size}]
"""

import os
from typing import Any, Dict, Iterable, List, Optional

import yaml

from errors import CatalogError, NotFoundError
from models.catalog_records import Customer, Product
from models.deals import BulkDeal, PriceOverrideDeal
from utils_logging import log_debug, log_info


class Catalog:
    """In-memory lookup tables; treat as immutable once built."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        customers: Iterable[Customer] = (),
        price_deals: Iterable[PriceOverrideDeal] = (),
        bulk_deals: Iterable[BulkDeal] = (),
    ):
        self._products: Dict[str, Product] = {p.code: p for p in products}
        self._customers: Dict[int, Customer] = {c.id: c for c in customers}
        self._price_deals: Dict[int, List[PriceOverrideDeal]] = {}
        self._bulk_deals: Dict[int, List[BulkDeal]] = {}

        for deal in price_deals:
            self._price_deals.setdefault(deal.customer_id, []).append(deal)
        for deal in bulk_deals:
            self._bulk_deals.setdefault(deal.customer_id, []).append(deal)

    # --------------------------------------------------------------------------
    # Lookups
    # --------------------------------------------------------------------------

    def lookup_product(self, code: str) -> Product:
        product = self._products.get(code)
        if product is None:
            raise NotFoundError("product", code)
        return product

    def lookup_customer(self, customer_id: int) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise NotFoundError("customer", customer_id)
        return customer

    def price_deals_for(self, customer_id: int) -> List[PriceOverrideDeal]:
        """Price override deals for a customer ([] if none)."""
        return list(self._price_deals.get(customer_id, []))

    def bulk_deals_for(self, customer_id: int) -> List[BulkDeal]:
        """Bulk deals for a customer ([] if none)."""
        return list(self._bulk_deals.get(customer_id, []))

    @property
    def product_codes(self) -> List[str]:
        return list(self._products)

    @property
    def customer_ids(self) -> List[int]:
        return list(self._customers)

    # --------------------------------------------------------------------------
    # Construction
    # --------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Catalog":
        """
        Build a catalog from parsed YAML.

        Raises:
            CatalogError: If a record is missing fields or has invalid values
        """
        data = data or {}
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog root must be a mapping, got {type(data).__name__}")

        return cls(
            products=_parse_section(data, "products", Product.from_dict),
            customers=_parse_section(data, "customers", Customer.from_dict),
            price_deals=_parse_section(data, "price_deals", PriceOverrideDeal.from_dict),
            bulk_deals=_parse_section(data, "bulk_deals", BulkDeal.from_dict),
        )


def _parse_section(data: Dict[str, Any], section: str, factory) -> list:
    records = data.get(section) or []
    if not isinstance(records, list):
        raise CatalogError(f"Catalog section '{section}' must be a list")

    parsed = []
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise CatalogError(f"{section}[{idx}]: expected a mapping, got {record!r}")
        try:
            parsed.append(factory(record))
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"{section}[{idx}]: invalid record {record!r} ({e})") from e
    return parsed


def load_catalog(path: str) -> Catalog:
    """
    Loads a catalog from a YAML file.

    Raises:
        FileNotFoundError: If path does not exist
        CatalogError: If the content is malformed
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Catalog file {path} is not valid YAML: {e}") from e

    catalog = Catalog.from_dict(data)
    log_debug(f"Loaded catalog from {path}")
    log_info(
        f"📦 Catalog: {len(catalog.product_codes)} products, "
        f"{len(catalog.customer_ids)} customers"
    )
    return catalog
