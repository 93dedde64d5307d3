"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY CORE SERVICES

Purpose:
- Catalog lookups used by the posting services (existence, batch fetch, cost).
- The ONLY write path for Product.stock_quantity.

Rules:
- Quantities are integer units.
- Decrements are a single conditional UPDATE (stock_quantity >= n), so two
  concurrent sales can never drive stock negative.
- Receipts increment with F() and may stamp the latest unit cost.
- Callers own the transaction; a failed decrement raises inside it and the
  whole posting rolls back.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import F
from django.utils import timezone

from accounting.services.exceptions import (
    InsufficientStockError,
    InvalidEntryError,
    NotFoundError,
)
from accounting.services.journal_entry_service import quantize_money
from products.models import Product

logger = logging.getLogger(__name__)


def _to_int(value, *, field_name="value") -> int:
    if value is None or value == "":
        raise InvalidEntryError(f"{field_name} is required")
    if isinstance(value, bool):
        raise InvalidEntryError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidEntryError(f"{field_name} must be an integer")


def _to_cost(value) -> Decimal:
    try:
        cost = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidEntryError("unit_cost must be a valid decimal") from exc
    if not cost.is_finite():
        raise InvalidEntryError("unit_cost must be a valid decimal")
    cost = quantize_money(cost, label="unit_cost")
    if cost <= Decimal("0.00"):
        raise InvalidEntryError("unit_cost must be greater than zero")
    return cost


# =====================================================
# LOOKUPS
# =====================================================

def get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id, is_active=True)
    except (Product.DoesNotExist, DjangoValidationError, ValueError) as exc:
        raise NotFoundError(f"Product not found: {product_id}") from exc


def product_exists(product_id) -> bool:
    try:
        get_product(product_id)
    except NotFoundError:
        return False
    return True


def current_cost(product_id) -> Decimal:
    return get_product(product_id).cost_price


def get_products(product_ids) -> dict:
    """
    Batch lookup: {str(product_id): Product}.

    Raises NotFoundError listing every id that did not resolve.
    """
    wanted = {str(pid) for pid in product_ids}
    if not wanted:
        return {}

    try:
        found = {
            str(p.id): p
            for p in Product.objects.filter(pk__in=list(wanted), is_active=True)
        }
    except (DjangoValidationError, ValueError) as exc:
        raise NotFoundError(f"Product not found: {sorted(wanted)}") from exc

    missing = sorted(wanted - set(found))
    if missing:
        raise NotFoundError(f"Product not found: {', '.join(missing)}")

    return found


# =====================================================
# STOCK MOVEMENT
# =====================================================

def adjust_stock(product_id, delta, *, unit_cost=None) -> None:
    """
    Move stock by `delta` whole units.

    - delta < 0: conditional decrement; raises InsufficientStockError when
      the product does not hold enough units.
    - delta > 0: increment; when unit_cost is given it becomes cost_price.
    """
    delta = _to_int(delta, field_name="delta")
    if delta == 0:
        return

    now = timezone.now()

    if delta < 0:
        qty = -delta
        updated = Product.objects.filter(
            pk=product_id,
            is_active=True,
            stock_quantity__gte=qty,
        ).update(stock_quantity=F("stock_quantity") - qty, updated_at=now)

        if updated == 0:
            product = get_product(product_id)
            logger.warning(
                "Insufficient stock for product %s: requested %s, available %s",
                product.sku,
                qty,
                product.stock_quantity,
            )
            raise InsufficientStockError(
                f"Insufficient stock for {product.name}: "
                f"requested {qty}, available {product.stock_quantity}"
            )
        return

    fields = {"stock_quantity": F("stock_quantity") + delta, "updated_at": now}
    if unit_cost is not None:
        fields["cost_price"] = _to_cost(unit_cost)

    updated = Product.objects.filter(pk=product_id, is_active=True).update(**fields)
    if updated == 0:
        raise NotFoundError(f"Product not found: {product_id}")
