# purchases/models.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from accounting.models.business import PostedTransaction


class PurchaseTransaction(PostedTransaction):
    """
    Supplier invoice received on credit.

    Accounting Effect (via its journal entry):
    - Dr Inventory        subtotal
    - Dr Tax Receivable   tax_amount (only when > 0)
    - Cr Accounts Payable total_amount

    invoice_number is the supplier's own number, unique per supplier.
    """

    invoice_number = models.CharField(max_length=64)

    supplier = models.ForeignKey(
        "parties.Supplier",
        on_delete=models.PROTECT,
        related_name="purchase_transactions",
    )

    class Meta(PostedTransaction.Meta):
        verbose_name = "Purchase Transaction"
        verbose_name_plural = "Purchase Transactions"
        indexes = [
            models.Index(fields=["date"], name="purch_txn_date_idx"),
            models.Index(fields=["supplier"], name="purch_txn_supplier_idx"),
            models.Index(fields=["status"], name="purch_txn_status_idx"),
        ]
        constraints = PostedTransaction.Meta.constraints + [
            models.UniqueConstraint(
                fields=["supplier", "invoice_number"],
                name="uniq_purchase_supplier_invoice",
            ),
        ]

    def __str__(self):
        return f"{self.invoice_number} - {self.total_amount}"


class PurchaseLineItem(models.Model):
    """
    Received quantity and unit cost, written once with its transaction.
    """

    transaction = models.ForeignKey(
        PurchaseTransaction,
        on_delete=models.PROTECT,
        related_name="items",
    )

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="purchase_line_items",
    )

    quantity = models.PositiveIntegerField()
    unit_cost = models.DecimalField(max_digits=15, decimal_places=2)
    line_total = models.DecimalField(max_digits=15, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="purchase_line_quantity_gt_zero",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_cost__gt=Decimal("0.00")),
                name="purchase_line_unit_cost_gt_zero",
            ),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_id} @ {self.unit_cost}"

    def save(self, *args, **kwargs):
        if self.pk and PurchaseLineItem.objects.filter(pk=self.pk).exists():
            raise ValidationError("Purchase line items are immutable")
        return super().save(*args, **kwargs)
