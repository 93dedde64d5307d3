# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.

Two families:
- AccountingValidationError: bad input for one request (rejected before
  anything is written, or rolled back with the posting).
- AccountingConfigurationError: the ledger is not set up correctly
  (e.g. a well-known account is missing). Fatal, not retryable.

`code` is the machine-readable value returned in API error payloads.
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""

    code = "accounting_error"


# ============================================================
# PER-REQUEST VALIDATION
# ============================================================


class AccountingValidationError(AccountingServiceError):
    code = "invalid"


class NotFoundError(AccountingValidationError):
    """Referenced account, party, product or entry does not exist."""

    code = "not_found"


class ConflictError(AccountingValidationError):
    """Duplicate code / unique constraint violation."""

    code = "conflict"


class InvalidEntryError(AccountingValidationError):
    """Structural journal or payload violation."""

    code = "invalid_entry"


class UnbalancedEntryError(AccountingValidationError):
    """Debits and credits differ by more than the tolerance."""

    code = "unbalanced"


class InvalidAccountTypeError(AccountingValidationError):
    code = "invalid_account_type"


class InsufficientStockError(AccountingValidationError):
    code = "insufficient_stock"


class PeriodInvalidError(AccountingValidationError):
    """Report period ends before it starts (or dates are malformed)."""

    code = "period_invalid"


class InvalidStatusTransitionError(AccountingValidationError):
    code = "invalid_status_transition"


# ============================================================
# CONFIGURATION (FATAL)
# ============================================================


class AccountingConfigurationError(AccountingServiceError):
    code = "configuration_error"


class MissingAccountError(AccountingConfigurationError):
    """A required well-known account (AR, Cash, ...) is absent or inactive."""

    code = "missing_account"
