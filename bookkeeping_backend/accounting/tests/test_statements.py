# accounting/tests/test_statements.py

from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace

from django.test import TestCase, override_settings

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.services.account_registry import create_account
from accounting.services.balance_service import compute_balances, get_trial_balance
from accounting.services.balance_sheet_service import (
    CURRENT_PERIOD_EARNINGS,
    generate_balance_sheet,
)
from accounting.services.cash_flow_classifiers import (
    classify_by_category,
    classify_by_keywords,
    default_classifier,
)
from accounting.services.cash_flow_service import generate_cash_flow_statement
from accounting.services.exceptions import PeriodInvalidError
from accounting.services.expense_service import post_expense
from accounting.services.income_statement_service import generate_income_statement
from accounting.services.journal_entry_service import post_manual_journal_entry
from accounting.tests.helpers import acct, cr, dr, post_manual, seed_chart


def everything_investing(entry):
    return "investing"


class EmptyLedgerStatementTests(TestCase):
    """
    GUARANTEES:
    - Empty ledgers produce empty, zero-valued statements (never errors)
    """

    def setUp(self):
        seed_chart()

    def test_balance_sheet_before_any_entries(self):
        sheet = generate_balance_sheet(as_of_date="2023-12-31")

        self.assertEqual(sheet["assets"], [])
        self.assertEqual(sheet["liabilities"], [])
        self.assertEqual(sheet["equity"], [])
        self.assertEqual(sheet["total_assets"], Decimal("0.00"))
        self.assertEqual(sheet["total_liabilities"], Decimal("0.00"))
        self.assertEqual(sheet["total_equity"], Decimal("0.00"))
        self.assertTrue(sheet["is_balanced"])

    def test_empty_income_and_cash_flow(self):
        income = generate_income_statement(start_date="2024-01-01", end_date="2024-01-31")
        self.assertEqual(income["revenues"], [])
        self.assertEqual(income["expenses"], [])
        self.assertEqual(income["net_income"], Decimal("0.00"))

        flows = generate_cash_flow_statement(start_date="2024-01-01", end_date="2024-01-31")
        self.assertEqual(flows["operating_activities"], [])
        self.assertEqual(flows["investing_activities"], [])
        self.assertEqual(flows["financing_activities"], [])
        self.assertEqual(flows["net_cash_flow"], Decimal("0.00"))

    def test_period_validation(self):
        with self.assertRaises(PeriodInvalidError):
            generate_income_statement(start_date="2024-02-01", end_date="2024-01-31")
        with self.assertRaises(PeriodInvalidError):
            generate_cash_flow_statement(start_date="2024-02-01", end_date="2024-01-31")
        with self.assertRaises(PeriodInvalidError):
            generate_balance_sheet(as_of_date="31/01/2024")

    def test_single_day_period_is_valid(self):
        report = generate_income_statement(start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))
        self.assertEqual(report["period_start"], report["period_end"])


class LedgerStatementTests(TestCase):
    """
    Statements over a small two-month ledger.

    GUARANTEES:
    - Assets == Liabilities + Equity at every cutoff
    - Only posted entries count
    - Cash-flow activities are classified and net to the change in cash
    """

    def setUp(self):
        seed_chart()
        self.cash = acct("1000")
        self.equity = acct("3000")
        self.revenue = acct("4000")
        self.equipment = create_account(code="1500", name="Equipment", account_type=Account.ASSET)

        post_manual(date(2024, 1, 1), "Owner capital investment", dr(self.cash, "10000"), cr(self.equity, "10000"))
        post_expense(description="January rent", amount="500", date=date(2024, 1, 15), account_id=acct("6100").pk)
        post_manual(date(2024, 2, 1), "Equipment purchase", dr(self.equipment, "2000"), cr(self.cash, "2000"))
        post_manual(date(2024, 2, 10), "Walk-in cash sale", dr(self.cash, "300"), cr(self.revenue, "300"))

        # Drafts never reach the statements.
        post_manual_journal_entry(
            date=date(2024, 2, 11),
            description="Unapproved adjustment",
            lines=[dr(self.cash, "999"), cr(self.revenue, "999")],
        )

    def test_balance_sheet_end_of_january(self):
        sheet = generate_balance_sheet(as_of_date=date(2024, 1, 31))

        self.assertEqual(
            [(r["code"], r["balance"]) for r in sheet["assets"]],
            [("1000", Decimal("9500.00"))],
        )
        earnings = sheet["equity"][-1]
        self.assertEqual(earnings["account_name"], CURRENT_PERIOD_EARNINGS)
        self.assertIsNone(earnings["account_id"])
        self.assertEqual(earnings["balance"], Decimal("-500.00"))
        self.assertEqual(sheet["total_liabilities_and_equity"], Decimal("9500.00"))
        self.assertTrue(sheet["is_balanced"])

    def test_balance_sheet_end_of_february(self):
        sheet = generate_balance_sheet(as_of_date="2024-02-29")

        self.assertEqual(
            [(r["code"], r["balance"]) for r in sheet["assets"]],
            [("1000", Decimal("7800.00")), ("1500", Decimal("2000.00"))],
        )
        self.assertEqual(sheet["total_assets"], Decimal("9800.00"))
        self.assertEqual(sheet["total_equity"], Decimal("9800.00"))
        self.assertTrue(sheet["is_balanced"])

    def test_identity_holds_at_every_cutoff(self):
        day = date(2023, 12, 30)
        while day <= date(2024, 3, 1):
            sheet = generate_balance_sheet(as_of_date=day)
            self.assertEqual(
                sheet["total_assets"],
                sheet["total_liabilities"] + sheet["total_equity"],
                msg=f"identity broken at {day}",
            )
            day += timedelta(days=1)

    def test_income_statement(self):
        report = generate_income_statement(start_date="2024-01-01", end_date="2024-02-29")

        self.assertEqual([(r["code"], r["amount"]) for r in report["revenues"]], [("4000", Decimal("300.00"))])
        self.assertEqual([(r["code"], r["amount"]) for r in report["expenses"]], [("6100", Decimal("500.00"))])
        self.assertEqual(report["total_revenue"], Decimal("300.00"))
        self.assertEqual(report["total_expenses"], Decimal("500.00"))
        self.assertEqual(report["net_income"], Decimal("-200.00"))

    def test_income_statement_period_bounds_are_inclusive(self):
        report = generate_income_statement(start_date="2024-02-10", end_date="2024-02-10")
        self.assertEqual(report["total_revenue"], Decimal("300.00"))
        self.assertEqual(report["expenses"], [])

    def test_cash_flow_statement(self):
        flows = generate_cash_flow_statement(start_date="2024-01-01", end_date="2024-02-29")

        self.assertEqual(
            [(a["description"], a["amount"]) for a in flows["operating_activities"]],
            [("January rent", Decimal("-500.00")), ("Walk-in cash sale", Decimal("300.00"))],
        )
        self.assertEqual(
            [(a["description"], a["amount"]) for a in flows["investing_activities"]],
            [("Equipment purchase", Decimal("-2000.00"))],
        )
        self.assertEqual(
            [(a["description"], a["amount"]) for a in flows["financing_activities"]],
            [("Owner capital investment", Decimal("10000.00"))],
        )
        self.assertEqual(flows["net_operating_cash"], Decimal("-200.00"))
        self.assertEqual(flows["net_investing_cash"], Decimal("-2000.00"))
        self.assertEqual(flows["net_financing_cash"], Decimal("10000.00"))

        cash_balance = compute_balances(as_of_date=date(2024, 2, 29))[self.cash.pk]
        self.assertEqual(flows["net_cash_flow"], cash_balance)

    def test_cash_flow_name_heuristic_when_nothing_is_tagged(self):
        Account.objects.update(is_cash_equivalent=False)

        flows = generate_cash_flow_statement(start_date="2024-01-01", end_date="2024-02-29")
        self.assertEqual(flows["net_cash_flow"], Decimal("7800.00"))

    def test_cash_moves_between_cash_accounts_are_dropped(self):
        post_manual(date(2024, 2, 20), "Deposit to bank", dr(acct("1010"), "1000"), cr(self.cash, "1000"))

        flows = generate_cash_flow_statement(start_date="2024-02-20", end_date="2024-02-20")
        self.assertEqual(flows["operating_activities"], [])
        self.assertEqual(flows["net_cash_flow"], Decimal("0.00"))

    def test_explicit_category_wins(self):
        post_manual(
            date(2024, 2, 15),
            "Loan paid to supplier",
            dr(acct("2100"), "100"),
            cr(self.cash, "100"),
            cash_flow_category=JournalEntry.CASH_FLOW_OPERATING,
        )
        flows = generate_cash_flow_statement(start_date="2024-02-15", end_date="2024-02-15")
        self.assertEqual(len(flows["operating_activities"]), 1)
        self.assertEqual(flows["financing_activities"], [])

    def test_injected_classifier(self):
        flows = generate_cash_flow_statement(
            start_date="2024-01-01",
            end_date="2024-02-29",
            classifier=lambda entry: "financing",
        )
        self.assertEqual(flows["operating_activities"], [])
        self.assertEqual(flows["net_financing_cash"], Decimal("7800.00"))

    @override_settings(LEDGER_CASH_FLOW_CLASSIFIER="accounting.tests.test_statements.everything_investing")
    def test_classifier_from_settings(self):
        flows = generate_cash_flow_statement(start_date="2024-01-01", end_date="2024-02-29")
        self.assertEqual(len(flows["investing_activities"]), 4)

    def test_reads_are_idempotent(self):
        for generate, kwargs in (
            (generate_balance_sheet, {"as_of_date": "2024-02-29"}),
            (generate_income_statement, {"start_date": "2024-01-01", "end_date": "2024-02-29"}),
            (generate_cash_flow_statement, {"start_date": "2024-01-01", "end_date": "2024-02-29"}),
        ):
            self.assertEqual(generate(**kwargs), generate(**kwargs))

    def test_trial_balance(self):
        report = get_trial_balance(as_of_date=date(2024, 2, 29))
        self.assertTrue(report["is_balanced"])
        self.assertEqual(report["total_debit"], Decimal("12800.00"))
        self.assertEqual([r["code"] for r in report["accounts"]], ["1000", "1500", "3000", "4000", "6100"])


class ClassifierTests(TestCase):
    def _entry(self, transaction_type, description, category=None):
        return SimpleNamespace(
            transaction_type=transaction_type,
            description=description,
            cash_flow_category=category,
        )

    def test_keyword_rules(self):
        cases = [
            ("sale", "Equipment sale", "operating"),
            ("expense", "Office loan fees", "operating"),
            ("purchase", "New equipment", "investing"),
            ("purchase", "Stock replenishment", "operating"),
            ("manual", "Bank loan received", "financing"),
            ("manual", "Dividend paid", "financing"),
            ("manual", "Asset purchase - van", "investing"),
            ("manual", "Petty cash top-up", "operating"),
        ]
        for transaction_type, description, expected in cases:
            with self.subTest(description=description):
                self.assertEqual(classify_by_keywords(self._entry(transaction_type, description)), expected)

    def test_category_first(self):
        entry = self._entry("manual", "Bank loan received", category="operating")
        self.assertEqual(classify_by_category(entry), "operating")
        self.assertEqual(default_classifier(entry), "operating")
        self.assertIsNone(classify_by_category(self._entry("manual", "x")))
