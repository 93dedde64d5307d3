# accounting/services/income_statement_service.py

"""
INCOME STATEMENT SERVICE

Revenue and expense activity of POSTED entries dated within
[start_date, end_date], both ends inclusive.

- Revenue: credits - debits
- Expense: debits - credits
- net_income = total_revenue - total_expenses
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from accounting.models.account import Account
from accounting.services.balance_service import compute_balances, parse_period

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _q2(amount: Decimal) -> Decimal:
    return (amount or ZERO).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def generate_income_statement(*, start_date, end_date) -> dict:
    start, end = parse_period(start_date, end_date)

    balances = compute_balances(
        start_date=start,
        as_of_date=end,
        account_types=[Account.REVENUE, Account.EXPENSE],
    )
    accounts = Account.objects.in_bulk(list(balances))

    revenues: list[dict] = []
    expenses: list[dict] = []
    for pk, amount in balances.items():
        if amount == ZERO:
            continue
        acc = accounts[pk]
        row = {"account_id": pk, "code": acc.code, "account_name": acc.name, "amount": amount}
        if acc.account_type == Account.REVENUE:
            revenues.append(row)
        else:
            expenses.append(row)

    revenues.sort(key=lambda r: r["code"])
    expenses.sort(key=lambda r: r["code"])

    total_revenue = _q2(sum((r["amount"] for r in revenues), ZERO))
    total_expenses = _q2(sum((r["amount"] for r in expenses), ZERO))

    return {
        "period_start": start,
        "period_end": end,
        "revenues": revenues,
        "expenses": expenses,
        "total_revenue": total_revenue,
        "total_expenses": total_expenses,
        "net_income": _q2(total_revenue - total_expenses),
    }
