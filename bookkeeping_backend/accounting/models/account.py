# accounting/models/account.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class Account(models.Model):
    """
    A single node of the chart of accounts.

    Guarantees:
    - Account codes are globally unique, trimmed and non-blank
    - account_type is fixed at creation (it decides the normal balance side)
    - parent is a weak reference by id (PROTECT; no cycle checks)
    - Accounts are deactivated, never deleted
    """

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    ACCOUNT_TYPES = [
        (ASSET, "Asset"),
        (LIABILITY, "Liability"),
        (EQUITY, "Equity"),
        (REVENUE, "Revenue"),
        (EXPENSE, "Expense"),
    ]

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=150)

    account_type = models.CharField(
        max_length=20,
        choices=ACCOUNT_TYPES,
    )

    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )

    is_active = models.BooleanField(default=True)
    is_cash_equivalent = models.BooleanField(
        default=False,
        help_text="Cash/bank account counted by the cash-flow statement",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["account_type"], name="acct_account_type_idx"),
            models.Index(fields=["is_active"], name="acct_account_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
            models.CheckConstraint(
                condition=Q(account_type__in=["asset", "liability", "equity", "revenue", "expense"]),
                name="chk_account_type_valid",
            ),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")
        if self.pk and self.parent_id == self.pk:
            raise ValidationError("An account cannot be its own parent")

    def save(self, *args, **kwargs):
        if self.pk:
            persisted_type = (
                type(self).objects.filter(pk=self.pk).values_list("account_type", flat=True).first()
            )
            if persisted_type is not None and persisted_type != self.account_type:
                raise ValidationError("account_type is immutable once the account exists")

        self.full_clean(validate_unique=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Accounts cannot be deleted; deactivate them instead")
