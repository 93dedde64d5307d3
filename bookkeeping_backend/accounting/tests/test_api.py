# accounting/tests/test_api.py

from datetime import date

from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models.journal import JournalEntry
from accounting.tests.helpers import acct, post_manual, cr, dr, seed_chart
from users.models import User


class AccountingApiTests(TestCase):
    """
    Thin HTTP adapter tests.

    GUARANTEES:
    - Domain errors map to {"detail", "code"} with the right status
    - Reads need authentication; writes need accountant/admin
    """

    def setUp(self):
        seed_chart()
        self.client = APIClient()
        self.accountant = User.objects.create_user(
            email="acc@example.com", password="pass12345", role=User.ROLE_ACCOUNTANT
        )
        self.viewer = User.objects.create_user(email="viewer@example.com", password="pass12345")
        self.client.force_authenticate(self.accountant)

    def test_requires_authentication(self):
        anon = APIClient()
        res = anon.get("/api/accounting/accounts/")
        self.assertEqual(res.status_code, 401)

    def test_viewer_can_read_but_not_write(self):
        client = APIClient()
        client.force_authenticate(self.viewer)

        self.assertEqual(client.get("/api/accounting/accounts/").status_code, 200)
        res = client.post(
            "/api/accounting/accounts/",
            {"code": "7000", "name": "Misc", "account_type": "expense"},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_create_and_list_accounts(self):
        res = self.client.post(
            "/api/accounting/accounts/",
            {"code": "7000", "name": "Misc", "account_type": "expense"},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["normal_side"], "debit")

        dup = self.client.post(
            "/api/accounting/accounts/",
            {"code": "7000", "name": "Again", "account_type": "expense"},
            format="json",
        )
        self.assertEqual(dup.status_code, 409)
        self.assertEqual(dup.data["code"], "conflict")

        res = self.client.get("/api/accounting/accounts/", {"account_type": "expense"})
        self.assertIn("7000", [a["code"] for a in res.data])

        self.assertEqual(self.client.get("/api/accounting/accounts/999999/").status_code, 404)

    def test_manual_entry_lifecycle(self):
        payload = {
            "date": "2024-01-05",
            "description": "Owner capital",
            "lines": [
                {"account_id": acct("1000").pk, "debit_amount": "100.00"},
                {"account_id": acct("3000").pk, "credit_amount": "60.00"},
                {"account_id": acct("4000").pk, "credit_amount": "40.00"},
            ],
        }
        res = self.client.post("/api/accounting/journal-entries/", payload, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["status"], "draft")
        self.assertEqual(len(res.data["lines"]), 3)
        entry_id = res.data["id"]

        res = self.client.post(f"/api/accounting/journal-entries/{entry_id}/post/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "posted")

        res = self.client.post(f"/api/accounting/journal-entries/{entry_id}/cancel/")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "invalid_status_transition")

        res = self.client.post(f"/api/accounting/journal-entries/{entry_id}/reverse/", {}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["reverses"], entry_id)

        detail = self.client.get(f"/api/accounting/journal-entries/{entry_id}/")
        self.assertEqual(detail.data["reversed_by"], res.data["id"])

    def test_unbalanced_entry_is_400(self):
        payload = {
            "date": "2024-01-05",
            "description": "Broken",
            "lines": [
                {"account_id": acct("1000").pk, "debit_amount": "100.00"},
                {"account_id": acct("3000").pk, "credit_amount": "50.00"},
            ],
        }
        res = self.client.post("/api/accounting/journal-entries/", payload, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "unbalanced")
        self.assertFalse(JournalEntry.objects.exists())

    def test_journal_entry_filters(self):
        post_manual(date(2024, 1, 1), "January", dr(acct("1000"), "1"), cr(acct("3000"), "1"))
        post_manual(date(2024, 2, 1), "February", dr(acct("1000"), "1"), cr(acct("3000"), "1"))

        res = self.client.get("/api/accounting/journal-entries/", {"date_from": "2024-02-01"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual([e["description"] for e in res.data["results"]], ["February"])

    def test_expense_endpoint(self):
        res = self.client.post(
            "/api/accounting/expenses/",
            {"description": "Rent", "amount": "500.00", "date": "2024-01-10", "account_id": acct("1200").pk},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "invalid_account_type")

        res = self.client.post(
            "/api/accounting/expenses/",
            {"description": "Rent", "amount": "500.00", "date": "2024-01-10", "account_id": acct("6100").pk},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["amount"], "500.00")
        self.assertTrue(res.data["entry_number"].startswith("JE-"))

        listing = self.client.get("/api/accounting/expenses/")
        self.assertEqual(listing.data["count"], 1)

    def test_missing_chart_is_503(self):
        cash = acct("1000")
        cash.is_active = False
        cash.save(update_fields=["is_active", "updated_at"])

        res = self.client.post(
            "/api/accounting/expenses/",
            {"description": "Rent", "amount": "5.00", "date": "2024-01-10", "account_id": acct("6100").pk},
            format="json",
        )
        self.assertEqual(res.status_code, 503)
        self.assertEqual(res.data["code"], "missing_account")

    def test_reports(self):
        post_manual(date(2024, 1, 1), "Owner capital", dr(acct("1000"), "250"), cr(acct("3000"), "250"))

        sheet = self.client.get("/api/accounting/balance-sheet/", {"as_of_date": "2024-01-31"})
        self.assertEqual(sheet.status_code, 200)
        self.assertEqual(sheet.data["total_assets"], "250.00")
        self.assertTrue(sheet.data["is_balanced"])

        income = self.client.get(
            "/api/accounting/income-statement/", {"start_date": "2024-01-31", "end_date": "2024-01-01"}
        )
        self.assertEqual(income.status_code, 400)
        self.assertEqual(income.data["code"], "period_invalid")

        flows = self.client.get(
            "/api/accounting/cash-flow-statement/", {"start_date": "2024-01-01", "end_date": "2024-01-31"}
        )
        self.assertEqual(flows.status_code, 200)
        self.assertEqual(flows.data["net_financing_cash"], "250.00")

        trial = self.client.get("/api/accounting/trial-balance/")
        self.assertEqual(trial.status_code, 200)
        self.assertTrue(trial.data["is_balanced"])
