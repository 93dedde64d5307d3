"""
======================================================
PATH: purchases/tests/test_purchase_service.py
======================================================
PURCHASE POSTING TESTS

GUARANTEES:
- A purchase posts Dr Inventory / Dr Tax Receivable / Cr Accounts Payable
- Stock increases and the latest unit cost is stamped on the product
- A supplier invoice number can only be recorded once per supplier
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import ConflictError, InvalidEntryError, NotFoundError
from accounting.tests.helpers import seed_chart
from parties.models import Supplier
from products.models import Product
from purchases.models import PurchaseLineItem, PurchaseTransaction
from purchases.services.purchase_service import post_purchase
from users.models import User


class PurchasePostingTests(TestCase):
    def setUp(self):
        seed_chart()
        self.supplier = Supplier.objects.create(name="Wholesale Co")
        self.other_supplier = Supplier.objects.create(name="Parts Ltd")
        self.product = Product.objects.create(
            name="Widget A",
            sku="WID-A",
            unit_price=Decimal("25.00"),
            cost_price=Decimal("15.00"),
            stock_quantity=2,
        )

    def _purchase(self, invoice_number="SUP-001", supplier=None, **kwargs):
        return post_purchase(
            supplier_id=(supplier or self.supplier).id,
            date=kwargs.pop("date", date(2024, 3, 2)),
            invoice_number=invoice_number,
            items=kwargs.pop("items", [{"product_id": self.product.id, "quantity": 10, "unit_cost": "18.00"}]),
            **kwargs,
        )

    def _lines(self, entry):
        return {
            line.account.code: (line.debit_amount, line.credit_amount)
            for line in entry.lines.select_related("account")
        }

    def test_zero_tax_purchase(self):
        purchase = self._purchase(tax_rate="0")

        self.assertEqual(purchase.subtotal, Decimal("180.00"))
        self.assertEqual(purchase.tax_amount, Decimal("0.00"))
        self.assertEqual(purchase.total_amount, Decimal("180.00"))
        self.assertEqual(purchase.status, PurchaseTransaction.STATUS_POSTED)

        lines = self._lines(purchase.journal_entry)
        self.assertEqual(set(lines), {"1200", "2100"})
        self.assertEqual(lines["1200"], (Decimal("180.00"), Decimal("0.00")))
        self.assertEqual(lines["2100"], (Decimal("0.00"), Decimal("180.00")))
        self.assertEqual(purchase.journal_entry.transaction_type, JournalEntry.TYPE_PURCHASE)
        self.assertEqual(purchase.journal_entry.reference, "SUP-001")

    def test_taxed_purchase_debits_tax_receivable(self):
        purchase = self._purchase(tax_rate="0.11")

        self.assertEqual(purchase.tax_amount, Decimal("19.80"))
        self.assertEqual(purchase.total_amount, Decimal("199.80"))

        lines = self._lines(purchase.journal_entry)
        self.assertEqual(lines["1300"], (Decimal("19.80"), Decimal("0.00")))
        self.assertEqual(lines["2100"], (Decimal("0.00"), Decimal("199.80")))

    def test_stock_and_cost_are_updated(self):
        self._purchase()

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 12)
        self.assertEqual(self.product.cost_price, Decimal("18.00"))

        item = PurchaseLineItem.objects.get()
        self.assertEqual(item.unit_cost, Decimal("18.00"))
        self.assertEqual(item.line_total, Decimal("180.00"))

    def test_missing_unit_cost_uses_latest_cost(self):
        purchase = self._purchase(items=[{"product_id": self.product.id, "quantity": 2}], tax_rate="0")
        self.assertEqual(purchase.subtotal, Decimal("30.00"))

    def test_duplicate_invoice_for_same_supplier(self):
        self._purchase()

        with self.assertRaises(ConflictError):
            self._purchase()

        self.assertEqual(PurchaseTransaction.objects.count(), 1)
        self.assertEqual(JournalEntry.objects.count(), 1)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 12)

    def test_same_invoice_number_for_other_supplier(self):
        self._purchase()
        other = self._purchase(supplier=self.other_supplier)
        self.assertEqual(other.invoice_number, "SUP-001")

    def test_rejections_before_any_write(self):
        with self.assertRaises(InvalidEntryError):
            self._purchase(invoice_number="   ")
        with self.assertRaises(NotFoundError):
            post_purchase(
                supplier_id=uuid.uuid4(),
                date=date(2024, 3, 2),
                invoice_number="X-1",
                items=[{"product_id": self.product.id, "quantity": 1, "unit_cost": "1.00"}],
            )
        with self.assertRaises(NotFoundError):
            self._purchase(items=[{"product_id": uuid.uuid4(), "quantity": 1, "unit_cost": "1.00"}])
        with self.assertRaises(InvalidEntryError):
            self._purchase(items=[{"product_id": self.product.id, "quantity": 1, "unit_cost": "0"}])

        self.assertEqual(JournalEntry.objects.count(), 0)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 2)


class PurchaseApiTests(TestCase):
    def setUp(self):
        seed_chart()
        self.client = APIClient()
        self.client.force_authenticate(
            User.objects.create_user(email="acc@example.com", password="pass12345", role=User.ROLE_ACCOUNTANT)
        )
        self.supplier = Supplier.objects.create(name="Wholesale Co")
        self.product = Product.objects.create(
            name="Widget A",
            sku="WID-A",
            unit_price=Decimal("25.00"),
            cost_price=Decimal("15.00"),
        )

    def test_create_then_conflict(self):
        payload = {
            "supplier_id": str(self.supplier.id),
            "invoice_number": "SUP-9",
            "date": "2024-03-02",
            "tax_rate": "0",
            "items": [{"product_id": str(self.product.id), "quantity": 4, "unit_cost": "20.00"}],
        }

        res = self.client.post("/api/purchases/transactions/", payload, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["total_amount"], "80.00")
        self.assertEqual(res.data["supplier_name"], "Wholesale Co")

        dup = self.client.post("/api/purchases/transactions/", payload, format="json")
        self.assertEqual(dup.status_code, 409)
        self.assertEqual(dup.data["code"], "conflict")

        listing = self.client.get("/api/purchases/transactions/", {"invoice_number": "sup-9"})
        self.assertEqual(listing.data["count"], 1)
