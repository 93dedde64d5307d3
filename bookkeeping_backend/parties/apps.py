# parties/apps.py

"""
PARTIES APP CONFIG

Customer and supplier directory consulted by the posting services.
"""

from django.apps import AppConfig


class PartiesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "parties"
    verbose_name = "Customers & Suppliers"
