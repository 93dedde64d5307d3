# accounting/apps.py

"""
ACCOUNTING APP CONFIG

Chart of accounts, double-entry journal, posting rules and statements.
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"
