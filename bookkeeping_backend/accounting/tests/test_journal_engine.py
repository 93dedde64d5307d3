# accounting/tests/test_journal_engine.py

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models.journal import JournalEntry, JournalLine
from accounting.models.sequence import SequenceCounter
from accounting.services.exceptions import (
    InvalidEntryError,
    NotFoundError,
    UnbalancedEntryError,
)
from accounting.services.journal_entry_service import (
    post_journal_entry,
    post_manual_journal_entry,
)
from accounting.services.sequences import format_sequence, max_numeric_suffix
from accounting.tests.helpers import acct, cr, dr, seed_chart

D = date(2024, 3, 15)


class JournalEntryServiceTests(TestCase):
    """
    Posting engine tests.

    GUARANTEES:
    - Entry + lines persist together or not at all
    - Validation order: line count, single-sided, balance, account existence
    - Lines are single-sided and non-negative
    """

    def setUp(self):
        seed_chart()
        self.cash = acct("1000")
        self.bank = acct("1010")
        self.equity = acct("3000")
        self.revenue = acct("4000")

    def _manual(self, *lines, description="Adjustment"):
        return post_manual_journal_entry(date=D, description=description, lines=list(lines))

    def test_three_line_balanced_entry(self):
        entry = self._manual(dr(self.cash, "100"), cr(self.equity, "60"), cr(self.revenue, "40"))

        self.assertEqual(entry.status, JournalEntry.STATUS_DRAFT)
        self.assertEqual(entry.transaction_type, JournalEntry.TYPE_MANUAL)
        self.assertEqual(entry.lines.count(), 3)
        self.assertEqual(entry.total_debit, Decimal("100.00"))
        self.assertEqual(entry.total_credit, Decimal("100.00"))
        for line in entry.lines.all():
            self.assertTrue((line.debit_amount > 0) != (line.credit_amount > 0))

    def test_unbalanced_entry_rejected_without_writes(self):
        with self.assertRaises(UnbalancedEntryError):
            self._manual(dr(self.cash, "100"), cr(self.equity, "50"))

        self.assertFalse(JournalEntry.objects.exists())
        self.assertFalse(JournalLine.objects.exists())

    def test_within_tolerance_is_accepted(self):
        entry = self._manual(dr(self.cash, "100.00"), cr(self.equity, "99.99"))
        self.assertEqual(entry.lines.count(), 2)

    def test_single_line_rejected(self):
        with self.assertRaisesMessage(InvalidEntryError, "minimum two lines"):
            self._manual(dr(self.cash, "100"))

    def test_double_sided_line_rejected(self):
        line = {"account_id": self.cash.pk, "debit_amount": "10", "credit_amount": "10"}
        with self.assertRaisesMessage(InvalidEntryError, "single-sided"):
            self._manual(line, cr(self.equity, "0"))

    def test_zero_line_rejected(self):
        with self.assertRaisesMessage(InvalidEntryError, "single-sided"):
            self._manual(dr(self.cash, "0"), cr(self.equity, "0"))

    def test_negative_amount_rejected(self):
        with self.assertRaises(InvalidEntryError):
            self._manual(dr(self.cash, "-10"), cr(self.equity, "-10"))

    def test_out_of_range_amounts_rejected_without_writes(self):
        # 1e30 cannot be rounded to cents in the default decimal context;
        # 1e13 rounds fine but does not fit a 15-digit money column.
        for amount in ("1e30", "10000000000000", "9999999999999.999"):
            with self.subTest(amount=amount):
                with self.assertRaisesMessage(InvalidEntryError, "out of range"):
                    self._manual(
                        {"account_id": self.cash.pk, "debit_amount": amount},
                        {"account_id": self.equity.pk, "credit_amount": amount},
                    )

        self.assertFalse(JournalEntry.objects.exists())

    def test_largest_storable_amount_accepted(self):
        entry = self._manual(dr(self.cash, "9999999999999.99"), cr(self.equity, "9999999999999.99"))
        self.assertEqual(entry.total_debit, Decimal("9999999999999.99"))

    def test_shape_checked_before_balance(self):
        # Unbalanced AND a double-sided line: the structural error wins.
        bad = {"account_id": self.cash.pk, "debit_amount": "10", "credit_amount": "5"}
        with self.assertRaises(InvalidEntryError):
            self._manual(bad, cr(self.equity, "1"))

    def test_balance_checked_before_accounts(self):
        with self.assertRaises(UnbalancedEntryError):
            self._manual(
                {"account_id": 999999, "debit_amount": "10"},
                cr(self.equity, "5"),
            )

    def test_unknown_account_rejected(self):
        with self.assertRaisesMessage(NotFoundError, "unknown account(s): 999999"):
            self._manual(
                {"account_id": 999999, "debit_amount": "10"},
                cr(self.equity, "10"),
            )
        self.assertFalse(JournalEntry.objects.exists())

    def test_blank_description_rejected(self):
        with self.assertRaises(InvalidEntryError):
            self._manual(dr(self.cash, "10"), cr(self.equity, "10"), description="   ")

    def test_accepts_account_instances_and_short_keys(self):
        entry = post_journal_entry(
            date="2024-03-15",
            description="Owner investment",
            lines=[
                {"account": self.bank, "debit": 250},
                {"account": self.equity, "credit": "250"},
            ],
            transaction_type=JournalEntry.TYPE_MANUAL,
            status=JournalEntry.STATUS_POSTED,
            cash_flow_category="financing",
        )
        self.assertEqual(entry.status, JournalEntry.STATUS_POSTED)
        self.assertEqual(entry.date, D)
        self.assertEqual(entry.cash_flow_category, JournalEntry.CASH_FLOW_FINANCING)

    def test_business_types_default_to_posted(self):
        entry = post_journal_entry(
            date=D,
            description="Cash sale",
            lines=[dr(self.cash, "10"), cr(self.revenue, "10")],
            transaction_type=JournalEntry.TYPE_SALE,
        )
        self.assertEqual(entry.status, JournalEntry.STATUS_POSTED)

    def test_cannot_create_cancelled(self):
        with self.assertRaises(InvalidEntryError):
            post_journal_entry(
                date=D,
                description="x",
                lines=[dr(self.cash, "10"), cr(self.revenue, "10")],
                transaction_type=JournalEntry.TYPE_MANUAL,
                status=JournalEntry.STATUS_CANCELLED,
            )

    def test_lines_are_immutable(self):
        entry = self._manual(dr(self.cash, "10"), cr(self.equity, "10"))
        line = entry.lines.first()
        line.debit_amount = Decimal("20.00")
        with self.assertRaises(ValidationError):
            line.save()
        with self.assertRaises(ValidationError):
            line.delete()
        with self.assertRaises(ValidationError):
            entry.delete()


class EntryNumberingTests(TestCase):
    """
    GUARANTEES:
    - JE-<7 digits>, unique, strictly increasing
    - Continues after the highest number already stored
    - Failed postings do not consume numbers
    """

    def setUp(self):
        seed_chart()
        self.cash = acct("1000")
        self.equity = acct("3000")

    def _post(self):
        return post_manual_journal_entry(
            date=D,
            description="Numbered",
            lines=[dr(self.cash, "1"), cr(self.equity, "1")],
        )

    def test_sequential_numbers(self):
        numbers = [self._post().entry_number for _ in range(3)]
        self.assertEqual(numbers, ["JE-0000001", "JE-0000002", "JE-0000003"])

    def test_seeds_from_existing_max(self):
        JournalEntry.objects.create(
            entry_number="JE-0000041",
            date=D,
            description="Imported",
            transaction_type=JournalEntry.TYPE_MANUAL,
        )
        self.assertFalse(SequenceCounter.objects.exists())
        self.assertEqual(self._post().entry_number, "JE-0000042")

    def test_rejected_posting_does_not_consume_number(self):
        self._post()
        with self.assertRaises(UnbalancedEntryError):
            post_manual_journal_entry(
                date=D,
                description="bad",
                lines=[dr(self.cash, "1"), cr(self.equity, "2")],
            )
        self.assertEqual(self._post().entry_number, "JE-0000002")

    def test_format_helpers(self):
        self.assertEqual(format_sequence("JE", 7), "JE-0000007")
        self.assertEqual(max_numeric_suffix(["JE-0000003", "JE-0000010", "X-99", "JE-abc"], "JE"), 10)
        self.assertEqual(max_numeric_suffix([], "JE"), 0)
