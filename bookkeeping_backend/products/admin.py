# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Stock is read-only in admin: it only moves through posted
sales and purchases (products.services.inventory.adjust_stock).
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "unit_price",
        "cost_price",
        "stock_quantity",
        "minimum_stock",
        "is_low_stock",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "created_at")
    search_fields = ("sku", "name")
    ordering = ("-created_at",)

    def get_readonly_fields(self, request, obj=None):
        base = ("created_at", "updated_at")
        if obj is not None:
            return base + ("stock_quantity", "cost_price")
        return base

    @admin.display(boolean=True)
    def is_low_stock(self, obj):
        return obj.is_low_stock
