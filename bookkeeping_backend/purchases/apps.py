# purchases/apps.py

"""
PURCHASES APP CONFIG

Supplier invoices posted to the ledger with a stock receipt.
"""

from django.apps import AppConfig


class PurchasesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "purchases"
    verbose_name = "Purchases"
