# accounting/services/cash_flow_classifiers.py

"""
CASH-FLOW CLASSIFIERS

A classifier is any callable(entry) -> "operating" | "investing" | "financing"
(or None to defer). `entry` is a JournalEntry.

settings.LEDGER_CASH_FLOW_CLASSIFIER may name a dotted path to a custom
classifier; otherwise default_classifier is used.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.utils.module_loading import import_string

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import AccountingConfigurationError

logger = logging.getLogger(__name__)

OPERATING = JournalEntry.CASH_FLOW_OPERATING
INVESTING = JournalEntry.CASH_FLOW_INVESTING
FINANCING = JournalEntry.CASH_FLOW_FINANCING

INVESTING_PURCHASE_KEYWORDS = ("equipment", "asset", "investment")
FINANCING_MANUAL_KEYWORDS = ("loan", "equity", "dividend", "financing", "capital")
INVESTING_MANUAL_KEYWORDS = ("equipment", "investment", "asset purchase")


def _contains_any(text: str, keywords) -> bool:
    return any(word in text for word in keywords)


def classify_by_category(entry) -> str | None:
    """Explicit tag set when the entry was posted."""
    return getattr(entry, "cash_flow_category", None) or None


def classify_by_keywords(entry) -> str:
    """
    Transaction type first, then description keywords.

    - sale, expense: operating
    - purchase: investing for equipment/asset/investment, else operating
    - manual: financing for loan/equity/dividend/financing/capital,
      investing for equipment/investment/"asset purchase", else operating
    """
    transaction_type = getattr(entry, "transaction_type", "")
    desc = (getattr(entry, "description", "") or "").lower()

    if transaction_type == JournalEntry.TYPE_PURCHASE:
        return INVESTING if _contains_any(desc, INVESTING_PURCHASE_KEYWORDS) else OPERATING

    if transaction_type == JournalEntry.TYPE_MANUAL:
        if _contains_any(desc, FINANCING_MANUAL_KEYWORDS):
            return FINANCING
        if _contains_any(desc, INVESTING_MANUAL_KEYWORDS):
            return INVESTING
        return OPERATING

    return OPERATING


def default_classifier(entry) -> str:
    return classify_by_category(entry) or classify_by_keywords(entry)


def get_configured_classifier():
    path = (getattr(settings, "LEDGER_CASH_FLOW_CLASSIFIER", "") or "").strip()
    if not path:
        return default_classifier

    try:
        return import_string(path)
    except ImportError as exc:
        logger.critical("Cannot load LEDGER_CASH_FLOW_CLASSIFIER %r: %s", path, exc)
        raise AccountingConfigurationError(f"Invalid LEDGER_CASH_FLOW_CLASSIFIER: {path}") from exc
