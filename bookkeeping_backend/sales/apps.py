# sales/apps.py

"""
SALES APP CONFIG

Credit sales to customers, posted to the ledger with a stock decrement.
"""

from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sales"
    verbose_name = "Sales"
