# purchases/services/purchase_service.py

"""
PURCHASE POSTING SERVICE (AUTHORITATIVE)

Receives a supplier invoice in one atomic unit:

1) Validate supplier, invoice number, products, quantities, costs, tax rate
2) Reject a supplier invoice number that was already recorded (ConflictError)
3) Post the journal entry through PurchasePostingRule
4) Increment stock and stamp each product's latest unit cost
5) Store the PurchaseTransaction + its line items

Accounting Effect:
- Dr Inventory (subtotal)
- Dr Tax Receivable (tax, if > 0)
- Cr Accounts Payable (total)
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import ConflictError, InvalidEntryError, NotFoundError
from accounting.services.journal_entry_service import _as_date
from accounting.services.posting_rules import (
    PurchasePostingRule,
    compute_line_totals,
    compute_tax,
    execute_posting_rule,
)
from parties.services.directory import get_supplier
from products.services.inventory import get_products
from purchases.models import PurchaseLineItem, PurchaseTransaction

logger = logging.getLogger(__name__)

INVOICE_NUMBER_MAX_LENGTH = 64


def _costed_items(items, products: dict) -> list[dict]:
    # Missing unit_cost falls back to the product's latest cost.
    costed = []
    for item in items:
        if not isinstance(item, dict):
            raise InvalidEntryError("Each line item must be an object")
        row = dict(item)
        if row.get("unit_cost") in (None, ""):
            product = products.get(str(row.get("product_id")))
            if product is not None:
                row["unit_cost"] = product.cost_price
        costed.append(row)
    return costed


@transaction.atomic
def post_purchase(
    *,
    supplier_id,
    date,
    invoice_number: str,
    items,
    tax_rate=None,
    due_date=None,
    author=None,
) -> PurchaseTransaction:
    """
    items: [{"product_id": <uuid>, "quantity": int, "unit_cost": Decimal?}, ...]
    """
    invoice_number = (invoice_number or "").strip()
    if not invoice_number:
        raise InvalidEntryError("invoice_number is required")
    if len(invoice_number) > INVOICE_NUMBER_MAX_LENGTH:
        raise InvalidEntryError(f"invoice_number cannot exceed {INVOICE_NUMBER_MAX_LENGTH} characters")

    if not items:
        raise InvalidEntryError("At least one line item is required")

    purchase_date = _as_date(date)
    purchase_due_date = _as_date(due_date) if due_date else None

    supplier = get_supplier(supplier_id)

    if PurchaseTransaction.objects.filter(supplier=supplier, invoice_number=invoice_number).exists():
        raise ConflictError(f"Invoice {invoice_number} already recorded for supplier {supplier.name}")

    product_ids = [item.get("product_id") for item in items if isinstance(item, dict)]
    if any(not pid for pid in product_ids):
        raise InvalidEntryError("product_id is required")
    products = get_products(product_ids)

    posting_items, subtotal = compute_line_totals(_costed_items(items, products), "unit_cost")
    tax_amount = compute_tax(subtotal, tax_rate)
    total_amount = subtotal + tax_amount

    rule = PurchasePostingRule(
        items=tuple(posting_items),
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
    )
    entry = execute_posting_rule(
        rule,
        date=purchase_date,
        description=f"Purchase {invoice_number} - {supplier.name}",
        reference=invoice_number,
        transaction_type=JournalEntry.TYPE_PURCHASE,
        author=author,
    )

    try:
        with transaction.atomic():
            purchase = PurchaseTransaction.objects.create(
                invoice_number=invoice_number,
                supplier=supplier,
                date=purchase_date,
                due_date=purchase_due_date,
                subtotal=subtotal,
                tax_amount=tax_amount,
                total_amount=total_amount,
                status=PurchaseTransaction.STATUS_POSTED,
                journal_entry=entry,
                created_by=author if getattr(author, "pk", None) else None,
            )
    except IntegrityError as exc:
        # Lost the race against a concurrent post of the same supplier invoice.
        raise ConflictError(
            f"Invoice {invoice_number} already recorded for supplier {supplier.name}"
        ) from exc

    PurchaseLineItem.objects.bulk_create(
        [
            PurchaseLineItem(
                transaction=purchase,
                product=products[item.product_id],
                quantity=item.quantity,
                unit_cost=item.unit_amount,
                line_total=item.line_total,
            )
            for item in posting_items
        ]
    )

    logger.info(
        "Purchase %s posted: entry=%s supplier=%s total=%s",
        invoice_number,
        entry.entry_number,
        supplier.pk,
        total_amount,
    )
    return purchase


def get_purchase(purchase_id) -> PurchaseTransaction:
    try:
        return (
            PurchaseTransaction.objects.select_related("supplier", "journal_entry")
            .prefetch_related("items", "items__product")
            .get(pk=purchase_id)
        )
    except (PurchaseTransaction.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Purchase not found: {purchase_id}") from exc
