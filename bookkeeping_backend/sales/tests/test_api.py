# sales/tests/test_api.py

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models.journal import JournalEntry
from accounting.tests.helpers import seed_chart
from parties.models import Customer
from products.models import Product
from users.models import User


class SalesApiTests(TestCase):
    """
    GUARANTEES:
    - POST creates a posted sale and returns it with its items
    - Stock shortages map to 400 {"code": "insufficient_stock"}
    - Viewers can list but not post
    """

    def setUp(self):
        seed_chart()
        self.client = APIClient()
        self.accountant = User.objects.create_user(
            email="acc@example.com", password="pass12345", role=User.ROLE_ACCOUNTANT
        )
        self.client.force_authenticate(self.accountant)

        self.customer = Customer.objects.create(name="Acme Retail")
        self.product = Product.objects.create(
            name="Widget A",
            sku="WID-A",
            unit_price=Decimal("25.00"),
            cost_price=Decimal("15.00"),
            stock_quantity=10,
        )

    def _payload(self, quantity=5):
        return {
            "customer_id": str(self.customer.id),
            "date": "2024-03-01",
            "tax_rate": "0.11",
            "items": [
                {"product_id": str(self.product.id), "quantity": quantity, "unit_price": "25.00"},
            ],
        }

    def test_create_sale(self):
        res = self.client.post("/api/sales/transactions/", self._payload(), format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["invoice_number"], "INV-0000001")
        self.assertEqual(res.data["total_amount"], "138.75")
        self.assertEqual(res.data["customer_name"], "Acme Retail")
        self.assertEqual(len(res.data["items"]), 1)
        self.assertIsNotNone(res.data["entry_number"])

        detail = self.client.get(f"/api/sales/transactions/{res.data['id']}/")
        self.assertEqual(detail.status_code, 200)

        listing = self.client.get("/api/sales/transactions/", {"customer": str(self.customer.id)})
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(listing.data["count"], 1)

    def test_insufficient_stock(self):
        res = self.client.post("/api/sales/transactions/", self._payload(quantity=11), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "insufficient_stock")
        self.assertEqual(JournalEntry.objects.count(), 0)

    def test_unknown_customer_is_404(self):
        payload = self._payload()
        payload["customer_id"] = "00000000-0000-0000-0000-000000000000"
        res = self.client.post("/api/sales/transactions/", payload, format="json")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["code"], "not_found")

    def test_empty_items_rejected_by_serializer(self):
        payload = self._payload()
        payload["items"] = []
        res = self.client.post("/api/sales/transactions/", payload, format="json")
        self.assertEqual(res.status_code, 400)

    def test_viewer_cannot_post(self):
        viewer = User.objects.create_user(email="viewer@example.com", password="pass12345")
        client = APIClient()
        client.force_authenticate(viewer)

        self.assertEqual(client.get("/api/sales/transactions/").status_code, 200)
        res = client.post("/api/sales/transactions/", self._payload(), format="json")
        self.assertEqual(res.status_code, 403)

    def test_unknown_sale_is_404(self):
        res = self.client.get("/api/sales/transactions/999999/")
        self.assertEqual(res.status_code, 404)
