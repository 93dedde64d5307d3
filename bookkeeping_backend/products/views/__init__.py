"""
Products views package exports.
"""

from .product import ProductViewSet

__all__ = [
    "ProductViewSet",
]
