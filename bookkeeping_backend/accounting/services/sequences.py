"""
======================================================
PATH: accounting/services/sequences.py
======================================================
SEQUENCE COUNTERS

Human-readable numbers (JE-0000001, INV-0000001) come from an explicit,
row-locked counter instead of "read the last row and add one".

Contract:
- next_sequence_value() must run inside the caller's transaction.atomic();
  the counter row stays locked until that transaction commits, so two
  concurrent posts can never receive the same number.
- A rolled-back posting also rolls back its increment: no number is issued
  without a stored record.
- On first use the counter is seeded from the highest numeric suffix already
  stored (seed callable), keeping the "max + 1" contract for existing data.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from django.db import IntegrityError, transaction

from accounting.models.journal import JournalEntry
from accounting.models.sequence import SequenceCounter

SEQUENCE_DIGITS = 7

JOURNAL_ENTRY_SEQUENCE = "journal_entry"
JOURNAL_ENTRY_PREFIX = "JE"


def format_sequence(prefix: str, value: int) -> str:
    return f"{prefix}-{int(value):0{SEQUENCE_DIGITS}d}"


def max_numeric_suffix(values: Iterable[str], prefix: str) -> int:
    """
    Highest N among strings shaped '<prefix>-N'; 0 when none match.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    highest = 0
    for value in values:
        m = pattern.match((value or "").strip())
        if m:
            highest = max(highest, int(m.group(1)))
    return highest


def _lock_counter(key: str, seed: Callable[[], int] | None) -> SequenceCounter:
    counter = SequenceCounter.objects.select_for_update().filter(key=key).first()
    if counter is not None:
        return counter

    initial = int(seed()) if seed is not None else 0
    try:
        with transaction.atomic():
            SequenceCounter.objects.create(key=key, last_value=initial)
    except IntegrityError:
        # Another transaction created the row first; fall through and lock it.
        pass

    return SequenceCounter.objects.select_for_update().get(key=key)


def next_sequence_value(key: str, *, seed: Callable[[], int] | None = None) -> int:
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("next_sequence_value() must run inside transaction.atomic()")

    counter = _lock_counter(key, seed)
    counter.last_value += 1
    counter.save(update_fields=["last_value", "updated_at"])
    return counter.last_value


def next_journal_entry_number() -> str:
    def seed() -> int:
        numbers = JournalEntry.objects.filter(
            entry_number__startswith=f"{JOURNAL_ENTRY_PREFIX}-"
        ).values_list("entry_number", flat=True)
        return max_numeric_suffix(numbers, JOURNAL_ENTRY_PREFIX)

    value = next_sequence_value(JOURNAL_ENTRY_SEQUENCE, seed=seed)
    return format_sequence(JOURNAL_ENTRY_PREFIX, value)
