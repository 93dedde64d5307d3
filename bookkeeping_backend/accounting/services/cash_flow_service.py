# accounting/services/cash_flow_service.py

"""
CASH-FLOW STATEMENT SERVICE

Direct method over POSTED entries dated within [start_date, end_date].

Cash accounts:
- every account flagged is_cash_equivalent
- if none is flagged: accounts whose name contains "cash" or "bank", or whose
  code starts with one of settings.LEDGER_CASH_ACCOUNT_CODE_PREFIXES

Each entry touching cash becomes one activity whose amount is the net of its
cash lines (debit - credit). Activities within 0.01 of zero are dropped.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.journal import JournalEntry, JournalLine
from accounting.services.balance_service import parse_period
from accounting.services.cash_flow_classifiers import (
    FINANCING,
    INVESTING,
    OPERATING,
    get_configured_classifier,
)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")
SIGNIFICANCE_THRESHOLD = Decimal("0.01")

CASH_NAME_KEYWORDS = ("cash", "bank")


def _q2(amount: Decimal) -> Decimal:
    return (amount or ZERO).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def cash_account_ids() -> list[int]:
    tagged = list(Account.objects.filter(is_cash_equivalent=True).values_list("pk", flat=True))
    if tagged:
        return tagged

    condition = Q()
    for keyword in CASH_NAME_KEYWORDS:
        condition |= Q(name__icontains=keyword)
    for prefix in getattr(settings, "LEDGER_CASH_ACCOUNT_CODE_PREFIXES", None) or []:
        condition |= Q(code__startswith=prefix)

    return list(
        Account.objects.filter(account_type=Account.ASSET)
        .filter(condition)
        .values_list("pk", flat=True)
    )


def generate_cash_flow_statement(*, start_date, end_date, classifier=None) -> dict:
    start, end = parse_period(start_date, end_date)
    classify = classifier or get_configured_classifier()

    cash_ids = cash_account_ids()
    lines = (
        JournalLine.objects.filter(
            account_id__in=cash_ids,
            journal_entry__status=JournalEntry.STATUS_POSTED,
            journal_entry__date__gte=start,
            journal_entry__date__lte=end,
        )
        .select_related("journal_entry")
        .order_by("journal_entry__date", "journal_entry__entry_number", "id")
    )

    entries: dict[int, JournalEntry] = {}
    net_by_entry: dict[int, Decimal] = {}
    for line in lines:
        entries.setdefault(line.journal_entry_id, line.journal_entry)
        net_by_entry[line.journal_entry_id] = (
            net_by_entry.get(line.journal_entry_id, ZERO) + line.debit_amount - line.credit_amount
        )

    sections: dict[str, list[dict]] = {OPERATING: [], INVESTING: [], FINANCING: []}
    for entry_id, amount in net_by_entry.items():
        if abs(amount) <= SIGNIFICANCE_THRESHOLD:
            continue
        entry = entries[entry_id]
        category = classify(entry) or OPERATING
        if category not in sections:
            category = OPERATING
        sections[category].append(
            {
                "entry_id": entry.pk,
                "entry_number": entry.entry_number,
                "date": entry.date,
                "transaction_type": entry.transaction_type,
                "description": entry.description,
                "amount": _q2(amount),
            }
        )

    net_operating = _q2(sum((a["amount"] for a in sections[OPERATING]), ZERO))
    net_investing = _q2(sum((a["amount"] for a in sections[INVESTING]), ZERO))
    net_financing = _q2(sum((a["amount"] for a in sections[FINANCING]), ZERO))

    return {
        "period_start": start,
        "period_end": end,
        "operating_activities": sections[OPERATING],
        "investing_activities": sections[INVESTING],
        "financing_activities": sections[FINANCING],
        "net_operating_cash": net_operating,
        "net_investing_cash": net_investing,
        "net_financing_cash": net_financing,
        "net_cash_flow": _q2(net_operating + net_investing + net_financing),
    }
