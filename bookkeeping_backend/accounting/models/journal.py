# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY + JOURNAL LINE MODELS

JournalEntry is the header of one accounting transaction; JournalLine rows
are its debit/credit legs.

Guarantees:
- entry_number is unique (JE-0000001 ...), allocated by the sequence service
- Posted and cancelled entries are immutable; only drafts may change status
- Lines are single-sided, non-negative and immutable (DB check constraints)
- Nothing is ever deleted; a posted entry is undone by a reversing entry
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.account import Account


class JournalEntry(models.Model):
    TYPE_SALE = "sale"
    TYPE_PURCHASE = "purchase"
    TYPE_EXPENSE = "expense"
    TYPE_MANUAL = "manual"

    TRANSACTION_TYPES = [
        (TYPE_SALE, "Sale"),
        (TYPE_PURCHASE, "Purchase"),
        (TYPE_EXPENSE, "Expense"),
        (TYPE_MANUAL, "Manual"),
    ]

    STATUS_DRAFT = "draft"
    STATUS_POSTED = "posted"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_POSTED, "Posted"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    CASH_FLOW_OPERATING = "operating"
    CASH_FLOW_INVESTING = "investing"
    CASH_FLOW_FINANCING = "financing"

    CASH_FLOW_CATEGORIES = [
        (CASH_FLOW_OPERATING, "Operating"),
        (CASH_FLOW_INVESTING, "Investing"),
        (CASH_FLOW_FINANCING, "Financing"),
    ]

    entry_number = models.CharField(max_length=20, unique=True, editable=False)

    date = models.DateField(help_text="Accounting effective date")
    description = models.TextField(help_text="Narrative description of the journal entry")

    reference = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="External reference (invoice number, REV:<entry>, etc.)",
    )

    transaction_type = models.CharField(max_length=10, choices=TRANSACTION_TYPES)
    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_DRAFT)

    cash_flow_category = models.CharField(
        max_length=10,
        choices=CASH_FLOW_CATEGORIES,
        blank=True,
        null=True,
        help_text="Explicit cash-flow activity; when empty the classifier infers one",
    )

    reverses = models.OneToOneField(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reversal",
        help_text="Posted entry this contra entry reverses",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="journal_entries_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-entry_number"]
        indexes = [
            models.Index(fields=["date"], name="acct_je_date_idx"),
            models.Index(fields=["status", "date"], name="acct_je_status_date_idx"),
            models.Index(fields=["transaction_type"], name="acct_je_type_idx"),
            models.Index(fields=["reference"], name="acct_je_reference_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(status__in=["draft", "posted", "cancelled"]),
                name="chk_journal_status_valid",
            ),
            models.CheckConstraint(
                condition=Q(transaction_type__in=["sale", "purchase", "expense", "manual"]),
                name="chk_journal_type_valid",
            ),
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.entry_number} ({self.status})"

    def clean(self):
        if self.reference is not None:
            ref = str(self.reference).strip()
            self.reference = ref or None

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError("Journal entry description is required")

        if not (self.entry_number or "").strip():
            raise ValidationError("entry_number is required")

    def save(self, *args, **kwargs):
        if self.pk:
            persisted_status = (
                type(self).objects.filter(pk=self.pk).values_list("status", flat=True).first()
            )
            if persisted_status is not None and persisted_status != self.STATUS_DRAFT:
                raise ValidationError(
                    f"Journal entry {self.entry_number} is {persisted_status} and immutable"
                )

        self.full_clean(validate_unique=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Journal entries cannot be deleted; reverse them instead")

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit_amount for line in self.lines.all()), Decimal("0.00"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit_amount for line in self.lines.all()), Decimal("0.00"))


class JournalLine(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="lines",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    debit_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    credit_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    description = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        verbose_name = "Journal Line"
        verbose_name_plural = "Journal Lines"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["account"], name="acct_jl_account_idx"),
            models.Index(fields=["journal_entry"], name="acct_jl_entry_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(debit_amount__gte=Decimal("0.00")),
                name="chk_journal_line_debit_nonnegative",
            ),
            models.CheckConstraint(
                condition=Q(credit_amount__gte=Decimal("0.00")),
                name="chk_journal_line_credit_nonnegative",
            ),
            models.CheckConstraint(
                condition=(
                    Q(debit_amount__gt=Decimal("0.00"), credit_amount=Decimal("0.00"))
                    | Q(debit_amount=Decimal("0.00"), credit_amount__gt=Decimal("0.00"))
                ),
                name="chk_journal_line_single_sided",
            ),
        ]

    def __str__(self):
        side = "Dr" if self.debit_amount > 0 else "Cr"
        amount = self.debit_amount if self.debit_amount > 0 else self.credit_amount
        return f"{side} {amount} -> {self.account}"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("Journal lines are immutable once created")
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Journal lines are immutable and cannot be deleted")
