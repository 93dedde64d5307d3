"""
======================================================
PATH: products/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Product (integer stock counter, latest cost)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("sku", models.CharField(db_index=True, max_length=128, unique=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=15)),
                ("cost_price", models.DecimalField(decimal_places=2, max_digits=15)),
                ("stock_quantity", models.PositiveIntegerField(default=0)),
                ("minimum_stock", models.PositiveIntegerField(default=0)),
                ("unit", models.CharField(default="pcs", max_length=32)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["sku"], name="products_pr_sku_3f0a1e_idx"),
                    models.Index(fields=["name"], name="products_pr_name_8b2c4d_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(unit_price__gt=Decimal("0.00")),
                        name="product_unit_price_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(cost_price__gt=Decimal("0.00")),
                        name="product_cost_price_gt_zero",
                    ),
                ],
            },
        ),
    ]
