"""
======================================================
PATH: accounting/services/account_registry.py
======================================================
ACCOUNT REGISTRY (CHART OF ACCOUNTS)

Create / read / list / deactivate accounts, and the single source of truth
for sign conventions:

- asset, expense                 -> debit-normal
- liability, equity, revenue     -> credit-normal
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Q

from accounting.models.account import Account
from accounting.services.exceptions import (
    ConflictError,
    InvalidEntryError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

DEBIT = "debit"
CREDIT = "credit"

NORMAL_SIDES = {
    Account.ASSET: DEBIT,
    Account.EXPENSE: DEBIT,
    Account.LIABILITY: CREDIT,
    Account.EQUITY: CREDIT,
    Account.REVENUE: CREDIT,
}

VALID_ACCOUNT_TYPES = frozenset(NORMAL_SIDES)


def resolve_normal_side(account_type: str) -> str:
    try:
        return NORMAL_SIDES[account_type]
    except KeyError:
        raise InvalidEntryError(f"Unknown account type: {account_type!r}") from None


def signed_balance(account_type: str, debit, credit) -> Decimal:
    """
    Balance in the account's natural sign (positive = normal side).
    """
    debit = debit or Decimal("0.00")
    credit = credit or Decimal("0.00")
    if resolve_normal_side(account_type) == DEBIT:
        return debit - credit
    return credit - debit


# ============================================================
# READS
# ============================================================


def get_account(account_id) -> Account:
    try:
        return Account.objects.get(pk=account_id)
    except (Account.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Account not found: {account_id}") from exc


def list_accounts(
    *,
    account_type: str | None = None,
    is_active: bool | None = None,
    parent_id=None,
    search: str | None = None,
) -> list[Account]:
    qs = Account.objects.all()

    if account_type:
        if account_type not in VALID_ACCOUNT_TYPES:
            raise InvalidEntryError(f"Unknown account type: {account_type!r}")
        qs = qs.filter(account_type=account_type)

    if is_active is not None:
        qs = qs.filter(is_active=is_active)

    if parent_id is not None:
        try:
            qs = qs.filter(parent_id=int(parent_id))
        except (TypeError, ValueError):
            raise InvalidEntryError(f"Invalid parent id: {parent_id!r}") from None

    search = (search or "").strip()
    if search:
        qs = qs.filter(Q(code__icontains=search) | Q(name__icontains=search))

    return list(qs.order_by("code"))


# ============================================================
# WRITES
# ============================================================


def create_account(
    *,
    code: str,
    name: str,
    account_type: str,
    parent_id=None,
    is_cash_equivalent: bool = False,
) -> Account:
    code = (code or "").strip()
    name = (name or "").strip()

    if not code:
        raise InvalidEntryError("Account code is required")
    if not name:
        raise InvalidEntryError("Account name is required")
    if account_type not in VALID_ACCOUNT_TYPES:
        raise InvalidEntryError(f"Unknown account type: {account_type!r}")

    parent = None
    if parent_id is not None:
        parent = get_account(parent_id)

    if Account.objects.filter(code=code).exists():
        raise ConflictError(f"Account code already exists: {code}")

    try:
        with transaction.atomic():
            account = Account.objects.create(
                code=code,
                name=name,
                account_type=account_type,
                parent=parent,
                is_cash_equivalent=bool(is_cash_equivalent),
            )
    except IntegrityError as exc:
        # Lost the race against a concurrent create with the same code.
        raise ConflictError(f"Account code already exists: {code}") from exc

    logger.info("Account created: %s %s (%s)", account.code, account.name, account.account_type)
    return account


def deactivate_account(account_id) -> Account:
    account = get_account(account_id)
    if account.is_active:
        account.is_active = False
        account.save(update_fields=["is_active", "updated_at"])
        logger.info("Account deactivated: %s", account.code)
    return account
