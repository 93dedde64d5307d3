# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalLine
- Enforce debit == credit
- Allocate entry numbers
- Guarantee atomicity

Everything else (sales, purchases, expenses, manual entries, reversals)
must pass through post_journal_entry().

Validation order (first failure wins):
1. at least two lines
2. every line single-sided and non-negative
3. |sum(debit) - sum(credit)| <= 0.01
4. every account id resolves (one batch query)
"""

from __future__ import annotations

import logging
from datetime import date as date_cls, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import transaction

from accounting.models.account import Account
from accounting.models.journal import JournalEntry, JournalLine
from accounting.services.exceptions import (
    InvalidEntryError,
    NotFoundError,
    UnbalancedEntryError,
)
from accounting.services.sequences import next_journal_entry_number

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")
MIN_LINES = 2

# Largest magnitude a DecimalField(max_digits=15, decimal_places=2) can store, exclusive.
MAX_AMOUNT = Decimal("1e13")

VALID_TRANSACTION_TYPES = {value for value, _ in JournalEntry.TRANSACTION_TYPES}
VALID_CASH_FLOW_CATEGORIES = {value for value, _ in JournalEntry.CASH_FLOW_CATEGORIES}
CREATABLE_STATUSES = {JournalEntry.STATUS_DRAFT, JournalEntry.STATUS_POSTED}


def _money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")

    if isinstance(value, Decimal):
        amt = value
    elif isinstance(value, float):
        amt = Decimal(str(value))
    else:
        try:
            amt = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise InvalidEntryError(f"Invalid money value: {value!r}") from exc

    if not amt.is_finite():
        raise InvalidEntryError(f"Invalid money value: {value!r}")

    return quantize_money(amt, label=f"Money value {value!r}")


def quantize_money(amount: Decimal, *, label: str) -> Decimal:
    """
    Round to cents and reject anything the ledger columns cannot hold.
    """
    try:
        amount = amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidEntryError(f"{label} is out of range") from exc
    if abs(amount) >= MAX_AMOUNT:
        raise InvalidEntryError(f"{label} is out of range")
    return amount


def _as_date(value) -> date_cls:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_cls):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_cls.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidEntryError("date must be YYYY-MM-DD") from exc
    raise InvalidEntryError("date is required")


def _line_account_id(line: dict):
    account = line.get("account_id", line.get("account"))
    if isinstance(account, Account):
        return account.pk
    return account


def _normalize_lines(lines) -> list[dict]:
    if not isinstance(lines, (list, tuple)) or len(lines) < MIN_LINES:
        raise InvalidEntryError("minimum two lines")

    normalized: list[dict] = []
    for line in lines:
        if not isinstance(line, dict):
            raise InvalidEntryError("line must be single-sided")

        debit = _money(line.get("debit_amount", line.get("debit")))
        credit = _money(line.get("credit_amount", line.get("credit")))

        if debit < 0 or credit < 0 or (debit > 0) == (credit > 0):
            raise InvalidEntryError("line must be single-sided")

        description = line.get("description")
        normalized.append(
            {
                "account_id": _line_account_id(line),
                "debit": debit,
                "credit": credit,
                "description": (str(description).strip() or None) if description else None,
            }
        )

    return normalized


def _assert_balanced(normalized: list[dict]) -> tuple[Decimal, Decimal]:
    total_debits = sum((line["debit"] for line in normalized), Decimal("0.00"))
    total_credits = sum((line["credit"] for line in normalized), Decimal("0.00"))

    if abs(total_debits - total_credits) > BALANCE_TOLERANCE:
        raise UnbalancedEntryError(
            f"Journal entry not balanced: debits={total_debits} credits={total_credits}"
        )
    return total_debits, total_credits


def _resolve_accounts(normalized: list[dict]) -> dict:
    raw_ids = {line["account_id"] for line in normalized}

    ids = set()
    unknown = []
    for raw in raw_ids:
        try:
            ids.add(int(raw))
        except (TypeError, ValueError):
            unknown.append(str(raw))

    accounts = {acc.pk: acc for acc in Account.objects.filter(pk__in=ids)}
    unknown.extend(str(i) for i in sorted(ids - set(accounts)))
    if unknown:
        raise NotFoundError(f"unknown account(s): {', '.join(sorted(unknown))}")

    for line in normalized:
        line["account_id"] = int(line["account_id"])

    inactive = sorted(acc.code for acc in accounts.values() if not acc.is_active)
    if inactive:
        raise InvalidEntryError(f"inactive account(s): {', '.join(inactive)}")

    return accounts


@transaction.atomic
def post_journal_entry(
    *,
    date,
    description: str,
    lines: list,
    transaction_type: str,
    author=None,
    reference: str | None = None,
    status: str | None = None,
    cash_flow_category: str | None = None,
    reverses: JournalEntry | None = None,
) -> JournalEntry:
    """
    Validate and persist one journal entry with all of its lines.

    status defaults to draft for manual entries and posted for entries
    produced by a business transaction.
    """
    normalized = _normalize_lines(lines)
    total_debits, _ = _assert_balanced(normalized)
    _resolve_accounts(normalized)

    description = (description or "").strip()
    if not description:
        raise InvalidEntryError("Journal entry description is required")

    if transaction_type not in VALID_TRANSACTION_TYPES:
        raise InvalidEntryError(f"Invalid transaction_type: {transaction_type!r}")

    if status is None:
        status = (
            JournalEntry.STATUS_DRAFT
            if transaction_type == JournalEntry.TYPE_MANUAL
            else JournalEntry.STATUS_POSTED
        )
    if status not in CREATABLE_STATUSES:
        raise InvalidEntryError(f"Entries cannot be created with status {status!r}")

    cash_flow_category = (cash_flow_category or "").strip().lower() or None
    if cash_flow_category and cash_flow_category not in VALID_CASH_FLOW_CATEGORIES:
        raise InvalidEntryError(f"Invalid cash_flow_category: {cash_flow_category!r}")

    entry_date = _as_date(date)
    reference = (str(reference).strip() or None) if reference else None

    entry = JournalEntry.objects.create(
        entry_number=next_journal_entry_number(),
        date=entry_date,
        description=description,
        reference=reference,
        transaction_type=transaction_type,
        status=status,
        cash_flow_category=cash_flow_category,
        reverses=reverses,
        created_by=author if getattr(author, "pk", None) else None,
    )

    JournalLine.objects.bulk_create(
        [
            JournalLine(
                journal_entry=entry,
                account_id=line["account_id"],
                debit_amount=line["debit"],
                credit_amount=line["credit"],
                description=line["description"],
            )
            for line in normalized
        ]
    )

    logger.info(
        "Journal entry %s created: type=%s status=%s lines=%s amount=%s",
        entry.entry_number,
        transaction_type,
        status,
        len(normalized),
        total_debits,
    )
    return entry


def post_manual_journal_entry(
    *,
    date,
    description: str,
    lines: list,
    reference: str | None = None,
    author=None,
    cash_flow_category: str | None = None,
) -> JournalEntry:
    """
    Manual adjustment authored by a user. Starts as a draft; promote it with
    journal_lifecycle.post_draft_entry().
    """
    return post_journal_entry(
        date=date,
        description=description,
        lines=lines,
        transaction_type=JournalEntry.TYPE_MANUAL,
        author=author,
        reference=reference,
        status=JournalEntry.STATUS_DRAFT,
        cash_flow_category=cash_flow_category,
    )
