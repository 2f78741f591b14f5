"""
Models Package - Checkout Data Structures
=========================================
Bill lines, catalog records and deal types.
"""

from models.bill import Bill, BillLine, Discount, DiscountKind
from models.catalog_records import Customer, Product
from models.deals import BulkDeal, DealKind, PriceOverrideDeal, apply_deal

__all__ = [
    'Bill',
    'BillLine',
    'Discount',
    'DiscountKind',
    'Customer',
    'Product',
    'BulkDeal',
    'DealKind',
    'PriceOverrideDeal',
    'apply_deal',
]
