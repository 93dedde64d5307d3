# PATH: accounting/services/expense_service.py

"""
EXPENSE POSTING SERVICE

Responsibilities:
- Validate expense payload (before any write)
- Resolve the expense account and the well-known cash account
- Post the journal entry through the posting rule
- Create the ExpenseTransaction business record in the same atomic unit

Accounting Effect:
- Dr Expense Account
- Cr Cash
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from accounting.models.account import Account
from accounting.models.expense import ExpenseTransaction
from accounting.models.journal import JournalEntry
from accounting.services.account_registry import get_account
from accounting.services.account_resolver import get_cash_account
from accounting.services.exceptions import (
    InvalidAccountTypeError,
    InvalidEntryError,
)
from accounting.services.journal_entry_service import _as_date, quantize_money
from accounting.services.posting_rules import ExpensePostingRule, execute_posting_rule
from parties.services.directory import get_supplier

logger = logging.getLogger(__name__)


def _money(v) -> Decimal:
    try:
        amount = Decimal(str(v))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidEntryError("amount must be a valid decimal") from exc
    if not amount.is_finite():
        raise InvalidEntryError("amount must be a valid decimal")
    return quantize_money(amount, label="amount")


@transaction.atomic
def post_expense(
    *,
    description: str,
    amount,
    date,
    account_id,
    supplier_id=None,
    reference: str | None = None,
    author=None,
) -> ExpenseTransaction:
    description = (description or "").strip()
    if not description:
        raise InvalidEntryError("description is required")

    amt = _money(amount)
    if amt <= Decimal("0.00"):
        raise InvalidEntryError("Amount must be > 0")

    expense_date = _as_date(date)

    expense_account = get_account(account_id)
    if expense_account.account_type != Account.EXPENSE:
        raise InvalidAccountTypeError(
            f"Account {expense_account.code} is {expense_account.account_type}, not expense"
        )
    if not expense_account.is_active:
        raise InvalidEntryError(f"Account {expense_account.code} is inactive")

    supplier = get_supplier(supplier_id) if supplier_id else None
    cash_account = get_cash_account()

    rule = ExpensePostingRule(
        expense_account=expense_account,
        cash_account=cash_account,
        amount=amt,
    )
    entry = execute_posting_rule(
        rule,
        date=expense_date,
        description=description,
        reference=reference,
        transaction_type=JournalEntry.TYPE_EXPENSE,
        author=author,
    )

    expense = ExpenseTransaction.objects.create(
        date=expense_date,
        description=description,
        reference=(str(reference).strip() or None) if reference else None,
        account=expense_account,
        supplier=supplier,
        subtotal=amt,
        tax_amount=Decimal("0.00"),
        total_amount=amt,
        status=ExpenseTransaction.STATUS_POSTED,
        journal_entry=entry,
        created_by=author if getattr(author, "pk", None) else None,
    )

    logger.info(
        "Expense %s posted: entry=%s account=%s amount=%s",
        expense.pk,
        entry.entry_number,
        expense_account.code,
        amt,
    )
    return expense
