# accounting/tests/helpers.py

from __future__ import annotations

from decimal import Decimal
from io import StringIO

from django.core.management import call_command

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.services.journal_entry_service import post_journal_entry


def seed_chart() -> None:
    call_command("seed_standard_chart", stdout=StringIO())


def acct(code: str) -> Account:
    return Account.objects.get(code=code)


def dr(account: Account, amount) -> dict:
    return {"account_id": account.pk, "debit_amount": Decimal(str(amount))}


def cr(account: Account, amount) -> dict:
    return {"account_id": account.pk, "credit_amount": Decimal(str(amount))}


def post_manual(entry_date, description, *lines, cash_flow_category=None) -> JournalEntry:
    """Manual entry posted directly (skips the draft step)."""
    return post_journal_entry(
        date=entry_date,
        description=description,
        lines=list(lines),
        transaction_type=JournalEntry.TYPE_MANUAL,
        status=JournalEntry.STATUS_POSTED,
        cash_flow_category=cash_flow_category,
    )
