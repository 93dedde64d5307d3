# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for sales app models.
"""

from .sales_line_item import SalesLineItem
from .sales_transaction import SalesTransaction

__all__ = [
    "SalesTransaction",
    "SalesLineItem",
]
