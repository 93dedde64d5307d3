# accounting/services/balance_service.py

"""
BALANCE SERVICE (AUTHORITATIVE)

Read-only ledger aggregation helpers.

RULES:
- READ-ONLY: no writes, ever
- JournalLine is the single source of truth
- Accounting timeline uses JournalEntry.date (inclusive cutoff)
- Only POSTED entries count; drafts and cancelled entries are invisible
- One grouped aggregate per call (no per-account queries)
"""

from __future__ import annotations

import logging
from datetime import date as date_cls, datetime
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Sum
from django.db.models.functions import Coalesce

from accounting.models.account import Account
from accounting.models.journal import JournalEntry, JournalLine
from accounting.services.account_registry import signed_balance
from accounting.services.exceptions import InvalidEntryError, PeriodInvalidError

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _q2(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _posted_lines(*, as_of_date=None, start_date=None):
    qs = JournalLine.objects.filter(journal_entry__status=JournalEntry.STATUS_POSTED)
    if as_of_date is not None:
        qs = qs.filter(journal_entry__date__lte=as_of_date)
    if start_date is not None:
        qs = qs.filter(journal_entry__date__gte=start_date)
    return qs


def _totals_by_account(*, as_of_date=None, start_date=None, account_types=None, account_ids=None):
    qs = _posted_lines(as_of_date=as_of_date, start_date=start_date)
    if account_types is not None:
        qs = qs.filter(account__account_type__in=list(account_types))
    if account_ids is not None:
        qs = qs.filter(account_id__in=list(account_ids))

    return (
        qs.values("account_id", "account__account_type")
        .annotate(
            debit_total=Coalesce(Sum("debit_amount"), ZERO),
            credit_total=Coalesce(Sum("credit_amount"), ZERO),
        )
        .order_by("account_id")
    )


def compute_balances(
    *,
    as_of_date=None,
    start_date=None,
    account_types=None,
    account_ids=None,
) -> dict[int, Decimal]:
    """
    {account_id: signed balance} for every account with at least one posted
    line in range. Accounts without activity are omitted.

    start_date turns the cutoff into a period (used by the income statement).
    """
    if as_of_date is not None and start_date is not None and as_of_date < start_date:
        raise PeriodInvalidError("as_of_date cannot be before start_date")

    balances: dict[int, Decimal] = {}
    for row in _totals_by_account(
        as_of_date=as_of_date,
        start_date=start_date,
        account_types=account_types,
        account_ids=account_ids,
    ):
        balances[row["account_id"]] = _q2(
            signed_balance(row["account__account_type"], row["debit_total"], row["credit_total"])
        )
    return balances


def get_account_balance(account: Account, *, as_of_date=None) -> Decimal:
    """
    Balance rule:
    - Assets & Expenses: debits - credits
    - Liabilities, Equity & Revenue: credits - debits
    """
    if account is None:
        raise InvalidEntryError("Account is required")

    return compute_balances(as_of_date=as_of_date, account_ids=[account.pk]).get(account.pk, ZERO)


def get_trial_balance(*, as_of_date=None) -> dict:
    """
    Per-account debit/credit totals of posted lines up to as_of_date.
    """
    rows = list(_totals_by_account(as_of_date=as_of_date))
    accounts = Account.objects.in_bulk([r["account_id"] for r in rows])

    out = []
    total_debit = ZERO
    total_credit = ZERO
    for r in rows:
        acc = accounts[r["account_id"]]
        debit = _q2(r["debit_total"])
        credit = _q2(r["credit_total"])
        total_debit += debit
        total_credit += credit
        out.append(
            {
                "account_id": acc.pk,
                "code": acc.code,
                "account_name": acc.name,
                "account_type": acc.account_type,
                "debit": debit,
                "credit": credit,
                "balance": _q2(signed_balance(acc.account_type, debit, credit)),
            }
        )

    out.sort(key=lambda row: row["code"])
    return {
        "as_of_date": as_of_date,
        "accounts": out,
        "total_debit": _q2(total_debit),
        "total_credit": _q2(total_credit),
        "is_balanced": _q2(total_debit) == _q2(total_credit),
    }


# ============================================================
# REPORT DATE HELPERS
# ============================================================


def parse_report_date(value, *, field_name: str = "date") -> date_cls:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_cls):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_cls.fromisoformat(value.strip())
        except ValueError as exc:
            raise PeriodInvalidError(f"Invalid {field_name} format (YYYY-MM-DD)") from exc
    raise PeriodInvalidError(f"{field_name} is required")


def parse_period(start_date, end_date) -> tuple[date_cls, date_cls]:
    start = parse_report_date(start_date, field_name="start_date")
    end = parse_report_date(end_date, field_name="end_date")
    if end < start:
        raise PeriodInvalidError("end_date cannot be before start_date")
    return start, end
