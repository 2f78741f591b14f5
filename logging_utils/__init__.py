"""
Logging Utils - Pricing Pass and Product Logging
================================================
Transparent logging of discount decisions.
"""

from logging_utils.product_log import ProductPricingLog
from logging_utils.pass_log import PricingPassLog

__all__ = [
    'ProductPricingLog',
    'PricingPassLog',
]
