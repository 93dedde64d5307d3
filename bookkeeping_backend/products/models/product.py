# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Represents a stocked, sellable product.

    STOCK MODEL:
    - stock_quantity is a whole-unit counter on the product row.
    - It only moves through products.services.inventory.adjust_stock()
      (sales decrement it, purchases increment it).
    - cost_price is the latest purchase cost.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sku = models.CharField(max_length=128, unique=True, db_index=True)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, null=True)

    # Current/default selling price
    unit_price = models.DecimalField(max_digits=15, decimal_places=2)
    cost_price = models.DecimalField(max_digits=15, decimal_places=2)

    stock_quantity = models.PositiveIntegerField(default=0)
    minimum_stock = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=32, default="pcs")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["sku"], name="products_pr_sku_3f0a1e_idx"),
            models.Index(fields=["name"], name="products_pr_name_8b2c4d_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(unit_price__gt=Decimal("0.00")),
                name="product_unit_price_gt_zero",
            ),
            models.CheckConstraint(
                condition=models.Q(cost_price__gt=Decimal("0.00")),
                name="product_cost_price_gt_zero",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        self.sku = (self.sku or "").strip().upper()
        self.name = (self.name or "").strip()

        if not self.sku:
            raise ValidationError({"sku": "SKU is required"})
        if not self.name:
            raise ValidationError({"name": "name is required"})

        if self.unit_price is None or Decimal(self.unit_price) <= 0:
            raise ValidationError("Unit price must be greater than zero")

        if self.cost_price is None or Decimal(self.cost_price) <= 0:
            raise ValidationError("Cost price must be greater than zero")

    def save(self, *args, **kwargs):
        self.full_clean(validate_unique=False)
        return super().save(*args, **kwargs)

    @property
    def is_low_stock(self) -> bool:
        return int(self.stock_quantity or 0) <= int(self.minimum_stock or 0)
