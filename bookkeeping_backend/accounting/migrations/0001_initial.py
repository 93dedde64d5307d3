"""
======================================================
PATH: accounting/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Account, JournalEntry, JournalLine, SequenceCounter,
ExpenseTransaction
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
        ("parties", "0001_initial"),
    ]

    operations = [
        # ------------------------------------------------------------
        # ACCOUNT
        # ------------------------------------------------------------
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("asset", "Asset"),
                            ("liability", "Liability"),
                            ("equity", "Equity"),
                            ("revenue", "Revenue"),
                            ("expense", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                (
                    "is_cash_equivalent",
                    models.BooleanField(
                        default=False,
                        help_text="Cash/bank account counted by the cash-flow statement",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["account_type"], name="acct_account_type_idx"),
                    models.Index(fields=["is_active"], name="acct_account_active_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=~models.Q(code=""), name="chk_account_code_not_blank"),
                    models.CheckConstraint(condition=~models.Q(name=""), name="chk_account_name_not_blank"),
                    models.CheckConstraint(
                        condition=models.Q(
                            account_type__in=["asset", "liability", "equity", "revenue", "expense"]
                        ),
                        name="chk_account_type_valid",
                    ),
                ],
            },
        ),
        # ------------------------------------------------------------
        # JOURNAL ENTRY
        # ------------------------------------------------------------
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("entry_number", models.CharField(editable=False, max_length=20, unique=True)),
                ("date", models.DateField(help_text="Accounting effective date")),
                ("description", models.TextField(help_text="Narrative description of the journal entry")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="External reference (invoice number, REV:<entry>, etc.)",
                        max_length=100,
                        null=True,
                    ),
                ),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[
                            ("sale", "Sale"),
                            ("purchase", "Purchase"),
                            ("expense", "Expense"),
                            ("manual", "Manual"),
                        ],
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("posted", "Posted"), ("cancelled", "Cancelled")],
                        default="draft",
                        max_length=10,
                    ),
                ),
                (
                    "cash_flow_category",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("operating", "Operating"),
                            ("investing", "Investing"),
                            ("financing", "Financing"),
                        ],
                        help_text="Explicit cash-flow activity; when empty the classifier infers one",
                        max_length=10,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="journal_entries_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "reverses",
                    models.OneToOneField(
                        blank=True,
                        help_text="Posted entry this contra entry reverses",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reversal",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-date", "-entry_number"],
                "indexes": [
                    models.Index(fields=["date"], name="acct_je_date_idx"),
                    models.Index(fields=["status", "date"], name="acct_je_status_date_idx"),
                    models.Index(fields=["transaction_type"], name="acct_je_type_idx"),
                    models.Index(fields=["reference"], name="acct_je_reference_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(status__in=["draft", "posted", "cancelled"]),
                        name="chk_journal_status_valid",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(transaction_type__in=["sale", "purchase", "expense", "manual"]),
                        name="chk_journal_type_valid",
                    ),
                ],
            },
        ),
        # ------------------------------------------------------------
        # JOURNAL LINE
        # ------------------------------------------------------------
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("debit_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("credit_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("description", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.account",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lines",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Line",
                "verbose_name_plural": "Journal Lines",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["account"], name="acct_jl_account_idx"),
                    models.Index(fields=["journal_entry"], name="acct_jl_entry_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(debit_amount__gte=Decimal("0.00")),
                        name="chk_journal_line_debit_nonnegative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(credit_amount__gte=Decimal("0.00")),
                        name="chk_journal_line_credit_nonnegative",
                    ),
                    models.CheckConstraint(
                        condition=(
                            models.Q(debit_amount__gt=Decimal("0.00"), credit_amount=Decimal("0.00"))
                            | models.Q(debit_amount=Decimal("0.00"), credit_amount__gt=Decimal("0.00"))
                        ),
                        name="chk_journal_line_single_sided",
                    ),
                ],
            },
        ),
        # ------------------------------------------------------------
        # SEQUENCE COUNTER
        # ------------------------------------------------------------
        migrations.CreateModel(
            name="SequenceCounter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=64, unique=True)),
                ("last_value", models.BigIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Sequence Counter",
                "verbose_name_plural": "Sequence Counters",
            },
        ),
        # ------------------------------------------------------------
        # EXPENSE TRANSACTION
        # ------------------------------------------------------------
        migrations.CreateModel(
            name="ExpenseTransaction",
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
                ("description", models.TextField()),
                ("reference", models.CharField(blank=True, max_length=100, null=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="expense_transactions",
                        to="accounting.account",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="accounting_expensetransaction_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "journal_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounting_expensetransaction",
                        to="accounting.journalentry",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="expense_transactions",
                        to="parties.supplier",
                    ),
                ),
            ],
            options={
                "verbose_name": "Expense Transaction",
                "verbose_name_plural": "Expense Transactions",
                "ordering": ["-date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["date"], name="acct_expense_date_idx"),
                    models.Index(fields=["status"], name="acct_expense_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=~models.Q(status="posted") | models.Q(journal_entry__isnull=False),
                        name="accounting_expensetransaction_posted_requires_journal",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(subtotal__gte=Decimal("0.00"))
                        & models.Q(tax_amount__gte=Decimal("0.00"))
                        & models.Q(total_amount__gte=Decimal("0.00")),
                        name="accounting_expensetransaction_amounts_nonnegative",
                    ),
                ],
            },
        ),
    ]
