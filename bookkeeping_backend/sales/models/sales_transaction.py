# sales/models/sales_transaction.py

"""
SALES TRANSACTION (POSTED INVOICE)

One credit sale to one customer.

Accounting Effect (via its journal entry):
- Dr Accounts Receivable   total_amount
- Cr Sales Revenue         subtotal
- Cr Tax Payable           tax_amount (only when > 0)

Rules:
- Written only by sales.services.sale_service.post_sale(), in the same
  atomic unit as the journal entry and the stock decrement.
- invoice_number (INV-0000001) is issued from a row-locked sequence.
"""

from __future__ import annotations

from django.db import models

from accounting.models.business import PostedTransaction


class SalesTransaction(PostedTransaction):
    invoice_number = models.CharField(max_length=20, unique=True)

    customer = models.ForeignKey(
        "parties.Customer",
        on_delete=models.PROTECT,
        related_name="sales_transactions",
    )

    class Meta(PostedTransaction.Meta):
        verbose_name = "Sales Transaction"
        verbose_name_plural = "Sales Transactions"
        indexes = [
            models.Index(fields=["date"], name="sales_txn_date_idx"),
            models.Index(fields=["customer"], name="sales_txn_customer_idx"),
            models.Index(fields=["status"], name="sales_txn_status_idx"),
        ]

    def __str__(self):
        return f"{self.invoice_number} - {self.total_amount}"
