# accounting/models/business.py

"""
POSTED BUSINESS TRANSACTION (ABSTRACT)

Shared shape of SalesTransaction, PurchaseTransaction and ExpenseTransaction.

Rule:
- The record is written once by its posting service, in the same atomic
  unit as its journal entry; status mirrors the entry's status.
- Once posted it is immutable and cannot be deleted.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.journal import JournalEntry


class PostedTransaction(models.Model):
    STATUS_DRAFT = JournalEntry.STATUS_DRAFT
    STATUS_POSTED = JournalEntry.STATUS_POSTED
    STATUS_CANCELLED = JournalEntry.STATUS_CANCELLED

    STATUSES = JournalEntry.STATUSES

    date = models.DateField()
    due_date = models.DateField(null=True, blank=True)

    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_DRAFT)

    journal_entry = models.OneToOneField(
        JournalEntry,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="%(app_label)s_%(class)s",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(app_label)s_%(class)s_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=~Q(status="posted") | Q(journal_entry__isnull=False),
                name="%(app_label)s_%(class)s_posted_requires_journal",
            ),
            models.CheckConstraint(
                condition=Q(subtotal__gte=Decimal("0.00"))
                & Q(tax_amount__gte=Decimal("0.00"))
                & Q(total_amount__gte=Decimal("0.00")),
                name="%(app_label)s_%(class)s_amounts_nonnegative",
            ),
        ]

    def clean(self):
        if self.status == self.STATUS_POSTED and self.journal_entry_id is None:
            raise ValidationError("journal_entry is required when status is posted")

        if self.subtotal is not None and self.tax_amount is not None and self.total_amount is not None:
            if self.subtotal + self.tax_amount != self.total_amount:
                raise ValidationError("total_amount must equal subtotal + tax_amount")

    def save(self, *args, **kwargs):
        if self.pk and type(self).objects.filter(pk=self.pk, status=self.STATUS_POSTED).exists():
            raise ValidationError(f"{type(self).__name__} records are immutable once posted")
        self.full_clean(validate_unique=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if self.pk and type(self).objects.filter(pk=self.pk, status=self.STATUS_POSTED).exists():
            raise ValidationError(f"Posted {type(self).__name__} records cannot be deleted")
        return super().delete(*args, **kwargs)
