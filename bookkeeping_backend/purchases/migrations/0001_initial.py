"""
======================================================
PATH: purchases/migrations/0001_initial.py
======================================================
MIGRATION: CREATE PurchaseTransaction + PurchaseLineItem
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
            name="PurchaseTransaction",
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
                ("invoice_number", models.CharField(max_length=64)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="purchases_purchasetransaction_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_transactions",
                        to="parties.supplier",
                    ),
                ),
                (
                    "journal_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchases_purchasetransaction",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Purchase Transaction",
                "verbose_name_plural": "Purchase Transactions",
                "ordering": ["-date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["date"], name="purch_txn_date_idx"),
                    models.Index(fields=["supplier"], name="purch_txn_supplier_idx"),
                    models.Index(fields=["status"], name="purch_txn_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=~models.Q(status="posted") | models.Q(journal_entry__isnull=False),
                        name="purchases_purchasetransaction_posted_requires_journal",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(subtotal__gte=Decimal("0.00"))
                        & models.Q(tax_amount__gte=Decimal("0.00"))
                        & models.Q(total_amount__gte=Decimal("0.00")),
                        name="purchases_purchasetransaction_amounts_nonnegative",
                    ),
                    models.UniqueConstraint(
                        fields=("supplier", "invoice_number"),
                        name="uniq_purchase_supplier_invoice",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PurchaseLineItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("unit_cost", models.DecimalField(decimal_places=2, max_digits=15)),
                ("line_total", models.DecimalField(decimal_places=2, max_digits=15)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_line_items",
                        to="products.product",
                    ),
                ),
                (
                    "transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items",
                        to="purchases.purchasetransaction",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gt=0),
                        name="purchase_line_quantity_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(unit_cost__gt=Decimal("0.00")),
                        name="purchase_line_unit_cost_gt_zero",
                    ),
                ],
            },
        ),
    ]
