"""
======================================================
PATH: sales/migrations/0001_initial.py
======================================================
MIGRATION: CREATE SalesTransaction + SalesLineItem
"""

from __future__ import annotations

from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("accounting", "0001_initial"),
        ("parties", "0001_initial"),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SalesTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("due_date", models.DateField(blank=True, null=True)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("posted", "Posted"), ("cancelled", "Cancelled")],
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("invoice_number", models.CharField(max_length=20, unique=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sales_salestransaction_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_transactions",
                        to="parties.customer",
                    ),
                ),
                (
                    "journal_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_salestransaction",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Sales Transaction",
                "verbose_name_plural": "Sales Transactions",
                "ordering": ["-date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["date"], name="sales_txn_date_idx"),
                    models.Index(fields=["customer"], name="sales_txn_customer_idx"),
                    models.Index(fields=["status"], name="sales_txn_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=~models.Q(status="posted") | models.Q(journal_entry__isnull=False),
                        name="sales_salestransaction_posted_requires_journal",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(subtotal__gte=Decimal("0.00"))
                        & models.Q(tax_amount__gte=Decimal("0.00"))
                        & models.Q(total_amount__gte=Decimal("0.00")),
                        name="sales_salestransaction_amounts_nonnegative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesLineItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=15)),
                ("line_total", models.DecimalField(decimal_places=2, max_digits=15)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_line_items",
                        to="products.product",
                    ),
                ),
                (
                    "transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items",
                        to="sales.salestransaction",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gt=0),
                        name="sales_line_quantity_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(unit_price__gt=Decimal("0.00")),
                        name="sales_line_unit_price_gt_zero",
                    ),
                ],
            },
        ),
    ]
