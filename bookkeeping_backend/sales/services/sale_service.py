"""
======================================================
PATH: sales/services/sale_service.py
======================================================
SALE POSTING SERVICE (AUTHORITATIVE)

Purpose:
- Turn a customer + line items into a posted SalesTransaction.

Flow (one atomic unit):
1) Validate customer, products, quantities, prices, tax rate (no writes yet)
2) Issue the next invoice number (INV-0000001)
3) Post the journal entry through SalePostingRule
4) Decrement stock (the rule's side effect)
5) Store the SalesTransaction + its line items

Any failure, including insufficient stock, rolls back every step:
no entry, no record, no stock change, no invoice number consumed.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import (
    InsufficientStockError,
    InvalidEntryError,
    NotFoundError,
)
from accounting.services.journal_entry_service import _as_date
from accounting.services.posting_rules import (
    SalePostingRule,
    compute_line_totals,
    compute_tax,
    execute_posting_rule,
)
from accounting.services.sequences import (
    format_sequence,
    max_numeric_suffix,
    next_sequence_value,
)
from parties.services.directory import get_customer
from products.services.inventory import get_products
from sales.models import SalesLineItem, SalesTransaction

logger = logging.getLogger(__name__)

INVOICE_SEQUENCE = "sales_invoice"
INVOICE_PREFIX = "INV"


def next_invoice_number() -> str:
    def seed() -> int:
        numbers = SalesTransaction.objects.filter(
            invoice_number__startswith=f"{INVOICE_PREFIX}-"
        ).values_list("invoice_number", flat=True)
        return max_numeric_suffix(numbers, INVOICE_PREFIX)

    return format_sequence(INVOICE_PREFIX, next_sequence_value(INVOICE_SEQUENCE, seed=seed))


def _priced_items(items, products: dict) -> list[dict]:
    """
    Fill a missing unit_price from the catalog's current selling price.
    """
    priced = []
    for item in items:
        if not isinstance(item, dict):
            raise InvalidEntryError("Each line item must be an object")
        row = dict(item)
        if row.get("unit_price") in (None, ""):
            product = products.get(str(row.get("product_id")))
            if product is not None:
                row["unit_price"] = product.unit_price
        priced.append(row)
    return priced


@transaction.atomic
def post_sale(
    *,
    customer_id,
    date,
    items,
    tax_rate=None,
    due_date=None,
    author=None,
) -> SalesTransaction:
    """
    items: [{"product_id": <uuid>, "quantity": int, "unit_price": Decimal?}, ...]
    """
    if not items:
        raise InvalidEntryError("At least one line item is required")

    sale_date = _as_date(date)
    sale_due_date = _as_date(due_date) if due_date else None

    customer = get_customer(customer_id)

    product_ids = [item.get("product_id") for item in items if isinstance(item, dict)]
    if any(not pid for pid in product_ids):
        raise InvalidEntryError("product_id is required")
    products = get_products(product_ids)

    posting_items, subtotal = compute_line_totals(_priced_items(items, products), "unit_price")
    tax_amount = compute_tax(subtotal, tax_rate)
    total_amount = subtotal + tax_amount

    invoice_number = next_invoice_number()

    rule = SalePostingRule(
        items=tuple(posting_items),
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
    )

    try:
        entry = execute_posting_rule(
            rule,
            date=sale_date,
            description=f"Sale {invoice_number} - {customer.name}",
            reference=invoice_number,
            transaction_type=JournalEntry.TYPE_SALE,
            author=author,
        )
    except InsufficientStockError:
        logger.warning(
            "Sale rejected (insufficient stock): customer=%s items=%s",
            customer.pk,
            len(posting_items),
        )
        raise

    sale = SalesTransaction.objects.create(
        invoice_number=invoice_number,
        customer=customer,
        date=sale_date,
        due_date=sale_due_date,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
        status=SalesTransaction.STATUS_POSTED,
        journal_entry=entry,
        created_by=author if getattr(author, "pk", None) else None,
    )

    SalesLineItem.objects.bulk_create(
        [
            SalesLineItem(
                transaction=sale,
                product=products[item.product_id],
                quantity=item.quantity,
                unit_price=item.unit_amount,
                line_total=item.line_total,
            )
            for item in posting_items
        ]
    )

    logger.info(
        "Sale %s posted: entry=%s customer=%s total=%s",
        invoice_number,
        entry.entry_number,
        customer.pk,
        total_amount,
    )
    return sale


def get_sale(sale_id) -> SalesTransaction:
    try:
        return (
            SalesTransaction.objects.select_related("customer", "journal_entry")
            .prefetch_related("items", "items__product")
            .get(pk=sale_id)
        )
    except (SalesTransaction.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Sale not found: {sale_id}") from exc
