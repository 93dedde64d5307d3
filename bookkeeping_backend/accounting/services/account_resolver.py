# PATH: accounting/services/account_resolver.py

"""
PATH: accounting/services/account_resolver.py

ACCOUNT RESOLVER (AUTHORITATIVE)

This module answers ONE question:
"Which account should be used for this purpose?"

Semantic keys map to account codes through DEFAULT_CODES, overridable per
deployment with settings.LEDGER_ACCOUNT_CODES, e.g.:

    LEDGER_ACCOUNT_CODES = {"CASH": "1010"}

Design goals:
- deterministic
- hard-fail on missing setup (so we don't post to wrong accounts)

A missing or inactive well-known account raises MissingAccountError: a
configuration fault, logged at CRITICAL, never a per-request validation error.
Run `manage.py seed_standard_chart` to create the defaults.
"""

from __future__ import annotations

import logging

from django.conf import settings

from accounting.models.account import Account
from accounting.services.exceptions import MissingAccountError

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# SEMANTIC KEYS
# ------------------------------------------------------------

CASH = "CASH"
ACCOUNTS_RECEIVABLE = "ACCOUNTS_RECEIVABLE"
INVENTORY = "INVENTORY"
TAX_RECEIVABLE = "TAX_RECEIVABLE"
ACCOUNTS_PAYABLE = "ACCOUNTS_PAYABLE"
TAX_PAYABLE = "TAX_PAYABLE"
SALES_REVENUE = "SALES_REVENUE"

DEFAULT_CODES = {
    CASH: "1000",
    ACCOUNTS_RECEIVABLE: "1100",
    INVENTORY: "1200",
    TAX_RECEIVABLE: "1300",
    ACCOUNTS_PAYABLE: "2100",
    TAX_PAYABLE: "2300",
    SALES_REVENUE: "4000",
}

# Expected type per key; a mapping that points at the wrong type is a setup error.
EXPECTED_TYPES = {
    CASH: Account.ASSET,
    ACCOUNTS_RECEIVABLE: Account.ASSET,
    INVENTORY: Account.ASSET,
    TAX_RECEIVABLE: Account.ASSET,
    ACCOUNTS_PAYABLE: Account.LIABILITY,
    TAX_PAYABLE: Account.LIABILITY,
    SALES_REVENUE: Account.REVENUE,
}


def _codes() -> dict:
    overrides = getattr(settings, "LEDGER_ACCOUNT_CODES", None) or {}
    codes = dict(DEFAULT_CODES)
    for key, code in overrides.items():
        codes[str(key).strip().upper()] = str(code).strip()
    return codes


def _missing(message: str) -> MissingAccountError:
    logger.critical("Ledger configuration fault: %s", message)
    return MissingAccountError(message)


def resolve_code(semantic_key: str) -> str:
    semantic_key = (semantic_key or "").strip().upper()
    code = (_codes().get(semantic_key) or "").strip()
    if not code:
        raise _missing(
            f"Missing mapping for semantic key '{semantic_key}'. "
            "Add it to LEDGER_ACCOUNT_CODES."
        )
    return code


def get_well_known_account(semantic_key: str) -> Account:
    code = resolve_code(semantic_key)

    account = Account.objects.filter(code=code, is_active=True).first()
    if account is None:
        raise _missing(
            f"Account with code={code} ({semantic_key}) not found or inactive. "
            "Run `manage.py seed_standard_chart` (or add the account) and ensure is_active=True."
        )

    expected = EXPECTED_TYPES.get(semantic_key.strip().upper())
    if expected and account.account_type != expected:
        raise _missing(
            f"Account {code} is mapped to {semantic_key} but has type "
            f"'{account.account_type}' (expected '{expected}')."
        )

    return account


def get_well_known_accounts(*semantic_keys: str) -> dict:
    """
    Resolve several keys at once: {semantic_key: Account}.
    """
    return {key: get_well_known_account(key) for key in semantic_keys}


# ------------------------------------------------------------
# PUBLIC RESOLVERS
# ------------------------------------------------------------


def get_cash_account() -> Account:
    return get_well_known_account(CASH)

