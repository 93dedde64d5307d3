"""
======================================================
PATH: parties/services/directory.py
======================================================
PARTY DIRECTORY

Read-only lookups used by the posting services before they write anything.
Deactivated parties are treated as absent.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError

from accounting.services.exceptions import NotFoundError
from parties.models import Customer, Supplier


def _get(model, party_id, label: str):
    if not party_id:
        raise NotFoundError(f"{label} not found")
    try:
        return model.objects.get(pk=party_id, is_active=True)
    except (model.DoesNotExist, DjangoValidationError, ValueError) as exc:
        # Malformed UUIDs surface as ValidationError/ValueError.
        raise NotFoundError(f"{label} not found: {party_id}") from exc


def get_customer(customer_id) -> Customer:
    return _get(Customer, customer_id, "Customer")


def get_supplier(supplier_id) -> Supplier:
    return _get(Supplier, supplier_id, "Supplier")


def customer_exists(customer_id) -> bool:
    try:
        get_customer(customer_id)
    except NotFoundError:
        return False
    return True


def supplier_exists(supplier_id) -> bool:
    try:
        get_supplier(supplier_id)
    except NotFoundError:
        return False
    return True


def customer_name(customer_id) -> str:
    return get_customer(customer_id).name


def supplier_name(supplier_id) -> str:
    return get_supplier(supplier_id).name
