# accounting/services/balance_sheet_service.py

"""
BALANCE SHEET SERVICE

Pure accounting read service.

Responsibilities:
- Compute balances per account as at a given date (inclusive)
- Classify balances into Assets, Liabilities, Equity
- Check accounting correctness (Assets = Liabilities + Equity)

Important:
- Revenue/Expense activity is never closed into Retained Earnings by a
  posting, so it is represented as "Current Period Earnings" in Equity to
  keep the identity true for every cutoff date.
- An imbalance means a data-integrity bug. It is logged at ERROR and
  reported through is_balanced, never raised.

Critical accounting rules enforced here:
- Ledger truth is POSTED journal entries only
- Accounting timeline uses JournalEntry.date
- Accounts with no balance are omitted
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from accounting.models.account import Account
from accounting.services.balance_service import compute_balances, parse_report_date

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

CURRENT_PERIOD_EARNINGS = "Current Period Earnings"


def _q2(amount: Decimal) -> Decimal:
    return (amount or ZERO).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _rows_for(accounts: dict, balances: dict, account_type: str) -> list[dict]:
    rows = [
        {
            "account_id": acc.pk,
            "code": acc.code,
            "account_name": acc.name,
            "balance": balances[acc.pk],
        }
        for acc in accounts.values()
        if acc.account_type == account_type and balances[acc.pk] != ZERO
    ]
    rows.sort(key=lambda r: r["code"])
    return rows


def generate_balance_sheet(*, as_of_date) -> dict:
    """
    Args:
        as_of_date: date or ISO string (YYYY-MM-DD). Entries dated on that
        day are included.
    """
    as_of = parse_report_date(as_of_date, field_name="as_of_date")

    balances = compute_balances(as_of_date=as_of)
    accounts = Account.objects.in_bulk(list(balances))

    assets = _rows_for(accounts, balances, Account.ASSET)
    liabilities = _rows_for(accounts, balances, Account.LIABILITY)
    equity = _rows_for(accounts, balances, Account.EQUITY)

    revenue = sum(
        (balances[pk] for pk, acc in accounts.items() if acc.account_type == Account.REVENUE),
        ZERO,
    )
    expenses = sum(
        (balances[pk] for pk, acc in accounts.items() if acc.account_type == Account.EXPENSE),
        ZERO,
    )
    earnings = _q2(revenue - expenses)
    if earnings != ZERO:
        equity.append(
            {
                "account_id": None,
                "code": None,
                "account_name": CURRENT_PERIOD_EARNINGS,
                "balance": earnings,
            }
        )

    total_assets = _q2(sum((r["balance"] for r in assets), ZERO))
    total_liabilities = _q2(sum((r["balance"] for r in liabilities), ZERO))
    total_equity = _q2(sum((r["balance"] for r in equity), ZERO))
    total_liabilities_and_equity = _q2(total_liabilities + total_equity)

    is_balanced = total_assets == total_liabilities_and_equity
    if not is_balanced:
        logger.error(
            "Balance sheet out of balance as of %s: assets=%s liabilities+equity=%s",
            as_of,
            total_assets,
            total_liabilities_and_equity,
        )

    return {
        "as_of_date": as_of,
        "assets": assets,
        "liabilities": liabilities,
        "equity": equity,
        "total_assets": total_assets,
        "total_liabilities": total_liabilities,
        "total_equity": total_equity,
        "total_liabilities_and_equity": total_liabilities_and_equity,
        "is_balanced": is_balanced,
    }
