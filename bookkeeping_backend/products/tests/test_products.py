# products/tests/test_products.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Product

User = get_user_model()


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - Products can be created safely
    - SKU uniqueness is enforced
    - Pricing is sane
    """

    def test_product_creation(self):
        """A valid product should be created successfully."""
        product = Product.objects.create(
            name="Widget A",
            sku="wid-a",
            unit_price=Decimal("25.00"),
            cost_price=Decimal("15.00"),
            unit="pcs",
        )

        self.assertEqual(product.name, "Widget A")
        self.assertEqual(product.sku, "WID-A")
        self.assertEqual(product.stock_quantity, 0)

    def test_sku_must_be_unique(self):
        """SKU duplication must be rejected."""
        Product.objects.create(
            name="Widget B",
            sku="WID-B",
            unit_price=Decimal("20.00"),
            cost_price=Decimal("10.00"),
        )

        with self.assertRaises(IntegrityError):
            Product.objects.create(
                name="Widget B Duplicate",
                sku="WID-B",
                unit_price=Decimal("22.00"),
                cost_price=Decimal("10.00"),
            )

    def test_zero_price_is_rejected(self):
        with self.assertRaises(ValidationError):
            Product.objects.create(
                name="Freebie",
                sku="FREE",
                unit_price=Decimal("0.00"),
                cost_price=Decimal("1.00"),
            )

    def test_low_stock_flag(self):
        product = Product.objects.create(
            name="Widget C",
            sku="WID-C",
            unit_price=Decimal("5.00"),
            cost_price=Decimal("2.00"),
            stock_quantity=3,
            minimum_stock=5,
        )
        self.assertTrue(product.is_low_stock)

    def test_product_string_representation(self):
        """__str__ should be human readable."""
        product = Product.objects.create(
            name="Gadget",
            sku="GAD-1",
            unit_price=Decimal("50.00"),
            cost_price=Decimal("30.00"),
        )

        self.assertIn("Gadget", str(product))


class ProductApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="acc@example.com", password="pass1234", role="accountant"
        )
        self.client.force_authenticate(user=self.user)

    def test_create_and_list(self):
        res = self.client.post(
            "/api/products/",
            {
                "sku": "wid-a",
                "name": "Widget A",
                "unit_price": "25.00",
                "cost_price": "15.00",
                "stock_quantity": 10,
                "unit": "pcs",
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["sku"], "WID-A")

        res = self.client.get("/api/products/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    def test_duplicate_sku_is_400(self):
        Product.objects.create(
            name="Widget A",
            sku="WID-A",
            unit_price=Decimal("25.00"),
            cost_price=Decimal("15.00"),
        )
        res = self.client.post(
            "/api/products/",
            {"sku": "WID-A", "name": "Again", "unit_price": "1.00", "cost_price": "1.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_low_stock_alert(self):
        Product.objects.create(
            name="Low", sku="LOW", unit_price=Decimal("5.00"), cost_price=Decimal("2.00"),
            stock_quantity=1, minimum_stock=2,
        )
        Product.objects.create(
            name="Plenty", sku="PLENTY", unit_price=Decimal("5.00"), cost_price=Decimal("2.00"),
            stock_quantity=50, minimum_stock=2,
        )

        res = self.client.get("/api/products/alerts/low-stock/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([row["sku"] for row in res.data["results"]], ["LOW"])
