"""
JOURNAL ENTRY LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for journal entries.

    draft  -> posted      (post_draft_entry)
    draft  -> cancelled   (cancel_entry, flag only)
    posted -> (terminal)  undone only by reverse_entry(), which posts a new
                          contra entry; the original stays posted so
                          historical reports do not move.
    cancelled -> (terminal)
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    UnbalancedEntryError,
)
from accounting.services.journal_entry_service import (
    BALANCE_TOLERANCE,
    post_journal_entry,
)

logger = logging.getLogger(__name__)

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    JournalEntry.STATUS_POSTED,
    JournalEntry.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    JournalEntry.STATUS_DRAFT: {
        JournalEntry.STATUS_POSTED,
        JournalEntry.STATUS_CANCELLED,
    },
}

REVERSAL_REFERENCE_PREFIX = "REV"


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, entry: JournalEntry, target_status: str) -> None:
    if not can_transition(from_status=entry.status, to_status=target_status):
        raise InvalidStatusTransitionError(
            f"Journal entry {entry.entry_number} cannot transition from "
            f"'{entry.status}' to '{target_status}'"
        )


def _lock(entry_or_id) -> JournalEntry:
    pk = getattr(entry_or_id, "pk", entry_or_id)
    try:
        return JournalEntry.objects.select_for_update().get(pk=pk)
    except (JournalEntry.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Journal entry not found: {pk}") from exc


def _set_status(entry: JournalEntry, target_status: str) -> JournalEntry:
    validate_transition(entry=entry, target_status=target_status)
    entry.status = target_status
    entry.updated_at = timezone.now()
    entry.save(update_fields=["status", "updated_at"])
    return entry


# ============================================================
# TRANSITIONS
# ============================================================


@transaction.atomic
def post_draft_entry(entry) -> JournalEntry:
    entry = _lock(entry)
    validate_transition(entry=entry, target_status=JournalEntry.STATUS_POSTED)

    lines = list(entry.lines.all())
    total_debit = sum((line.debit_amount for line in lines), 0)
    total_credit = sum((line.credit_amount for line in lines), 0)
    if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
        raise UnbalancedEntryError(
            f"Journal entry {entry.entry_number} not balanced: "
            f"debits={total_debit} credits={total_credit}"
        )

    _set_status(entry, JournalEntry.STATUS_POSTED)
    logger.info("Journal entry %s posted", entry.entry_number)
    return entry


@transaction.atomic
def cancel_entry(entry) -> JournalEntry:
    entry = _lock(entry)
    _set_status(entry, JournalEntry.STATUS_CANCELLED)
    logger.info("Journal entry %s cancelled", entry.entry_number)
    return entry


@transaction.atomic
def reverse_entry(entry, *, date=None, author=None, description: str | None = None) -> JournalEntry:
    """
    Post a contra entry for a posted entry (debits and credits swapped).

    Returns the new reversing entry. The original is left untouched.
    """
    entry = _lock(entry)

    if entry.status != JournalEntry.STATUS_POSTED:
        raise InvalidStatusTransitionError(
            f"Only posted entries can be reversed; {entry.entry_number} is '{entry.status}'"
        )
    if entry.reverses_id is not None:
        raise InvalidStatusTransitionError(
            f"{entry.entry_number} is itself a reversal and cannot be reversed"
        )
    if JournalEntry.objects.filter(reverses=entry).exists():
        raise InvalidStatusTransitionError(f"{entry.entry_number} has already been reversed")

    lines = [
        {
            "account_id": line.account_id,
            "debit_amount": line.credit_amount,
            "credit_amount": line.debit_amount,
            "description": line.description,
        }
        for line in entry.lines.all()
    ]

    reversal = post_journal_entry(
        date=date or timezone.localdate(),
        description=description or f"Reversal of {entry.entry_number}: {entry.description}",
        lines=lines,
        transaction_type=entry.transaction_type,
        author=author,
        reference=f"{REVERSAL_REFERENCE_PREFIX}:{entry.entry_number}",
        status=JournalEntry.STATUS_POSTED,
        cash_flow_category=entry.cash_flow_category,
        reverses=entry,
    )

    logger.info("Journal entry %s reversed by %s", entry.entry_number, reversal.entry_number)
    return reversal
