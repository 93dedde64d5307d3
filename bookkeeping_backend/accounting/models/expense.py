# accounting/models/expense.py

from __future__ import annotations

from django.db import models

from accounting.models.account import Account
from accounting.models.business import PostedTransaction


class ExpenseTransaction(PostedTransaction):
    """
    Expense paid from the default cash account.

    Accounting Effect:
    - Dr <expense account>
    - Cr Cash

    tax_amount is always 0; subtotal == total_amount == the expense amount.
    """

    description = models.TextField()
    reference = models.CharField(max_length=100, blank=True, null=True)

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="expense_transactions",
    )

    supplier = models.ForeignKey(
        "parties.Supplier",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="expense_transactions",
    )

    class Meta(PostedTransaction.Meta):
        verbose_name = "Expense Transaction"
        verbose_name_plural = "Expense Transactions"
        indexes = [
            models.Index(fields=["date"], name="acct_expense_date_idx"),
            models.Index(fields=["status"], name="acct_expense_status_idx"),
        ]

    def __str__(self):
        return f"Expense #{self.id} - {self.total_amount} ({self.date})"

    @property
    def amount(self):
        return self.total_amount
