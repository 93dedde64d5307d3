# sales/models/sales_line_item.py

"""
SALES LINE ITEM (IMMUTABLE SNAPSHOT)

Price and quantity as sold. Rows are written once together with their
SalesTransaction and never edited afterwards.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .sales_transaction import SalesTransaction


class SalesLineItem(models.Model):
    transaction = models.ForeignKey(
        SalesTransaction,
        on_delete=models.PROTECT,
        related_name="items",
    )

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="sales_line_items",
    )

    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=15, decimal_places=2)
    line_total = models.DecimalField(max_digits=15, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="sales_line_quantity_gt_zero",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_price__gt=Decimal("0.00")),
                name="sales_line_unit_price_gt_zero",
            ),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_id} @ {self.unit_price}"

    def save(self, *args, **kwargs):
        if self.pk and SalesLineItem.objects.filter(pk=self.pk).exists():
            raise ValidationError("Sales line items are immutable")
        return super().save(*args, **kwargs)
