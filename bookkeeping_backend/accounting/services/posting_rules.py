# accounting/services/posting_rules.py

"""
POSTING RULES (AUTHORITATIVE)

Defines HOW a business event maps to accounting intent.

A closed set of rule variants shares one interface:
- account_keys            well-known accounts the rule needs
- build_lines(accounts)   debit/credit lines (pure, no DB access)
- apply_side_effects()    stock movement that must commit with the entry

| Rule     | Debit                                    | Credit                          |
|----------|------------------------------------------|---------------------------------|
| Sale     | Accounts Receivable (total)              | Sales Revenue (subtotal),       |
|          |                                          | Tax Payable (tax, if > 0)       |
| Purchase | Inventory (subtotal), Tax Receivable     | Accounts Payable (total)        |
|          | (tax, if > 0)                            |                                 |
| Expense  | the expense account (amount)             | Cash (amount)                   |

THIS MODULE DOES NOT:
- Enforce debit == credit math (the journal engine does)
- Open its own transaction (execute_posting_rule runs inside the caller's)
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import ClassVar

from django.conf import settings

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.services import account_resolver
from accounting.services.exceptions import InvalidEntryError
from accounting.services.journal_entry_service import post_journal_entry, quantize_money
from products.services.inventory import adjust_stock

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
DEFAULT_TAX_RATE = Decimal("0.11")


def _q2(amount: Decimal, label: str = "amount") -> Decimal:
    return quantize_money(amount or ZERO, label=label)


def get_default_tax_rate() -> Decimal:
    raw = getattr(settings, "LEDGER_DEFAULT_TAX_RATE", None)
    if raw in (None, ""):
        return DEFAULT_TAX_RATE
    try:
        return Decimal(str(raw))
    except (InvalidOperation, ValueError, TypeError):
        logger.warning("Invalid LEDGER_DEFAULT_TAX_RATE %r; using %s", raw, DEFAULT_TAX_RATE)
        return DEFAULT_TAX_RATE


# ============================================================
# AMOUNT HELPERS
# ============================================================


@dataclass(frozen=True)
class PostingItem:
    product_id: str
    quantity: int
    unit_amount: Decimal
    line_total: Decimal


def _positive_quantity(value) -> int:
    if isinstance(value, bool):
        raise InvalidEntryError("quantity must be a whole number")
    try:
        as_decimal = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidEntryError("quantity must be a whole number") from exc
    if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
        raise InvalidEntryError("quantity must be a whole number")
    qty = int(as_decimal)
    if qty <= 0:
        raise InvalidEntryError("quantity must be greater than zero")
    return qty


def _positive_amount(value, *, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidEntryError(f"{field_name} must be a valid decimal") from exc
    if not amount.is_finite():
        raise InvalidEntryError(f"{field_name} must be a valid decimal")
    amount = _q2(amount, field_name)
    if amount <= ZERO:
        raise InvalidEntryError(f"{field_name} must be greater than zero")
    return amount


def compute_line_totals(items, price_field: str) -> tuple[list[PostingItem], Decimal]:
    """
    items: [{"product_id", "quantity", <price_field>}, ...]

    Returns (posting items, subtotal). Each line total is rounded to cents
    before summing.
    """
    if not items:
        raise InvalidEntryError("At least one line item is required")

    out: list[PostingItem] = []
    subtotal = ZERO
    for item in items:
        if not isinstance(item, dict):
            raise InvalidEntryError("Each line item must be an object")
        product_id = item.get("product_id")
        if not product_id:
            raise InvalidEntryError("product_id is required")

        qty = _positive_quantity(item.get("quantity"))
        unit_amount = _positive_amount(item.get(price_field), field_name=price_field)
        line_total = _q2(unit_amount * qty, "line total")

        out.append(
            PostingItem(
                product_id=str(product_id),
                quantity=qty,
                unit_amount=unit_amount,
                line_total=line_total,
            )
        )
        subtotal += line_total

    return out, _q2(subtotal, "subtotal")


def normalize_tax_rate(tax_rate) -> Decimal:
    if tax_rate is None or tax_rate == "":
        return get_default_tax_rate()
    try:
        rate = Decimal(str(tax_rate))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidEntryError("tax_rate must be a valid decimal") from exc
    if not rate.is_finite() or rate < ZERO:
        raise InvalidEntryError("tax_rate cannot be negative")
    return rate


def compute_tax(subtotal: Decimal, tax_rate) -> Decimal:
    return _q2(Decimal(subtotal) * normalize_tax_rate(tax_rate), "tax amount")


# ============================================================
# RULE VARIANTS
# ============================================================


@dataclass(frozen=True)
class PostingRule:
    transaction_type: ClassVar[str] = ""
    account_keys: ClassVar[tuple[str, ...]] = ()

    def build_lines(self, accounts: dict) -> list[dict]:
        raise NotImplementedError

    def apply_side_effects(self) -> None:
        return None


def _debit(account: Account, amount: Decimal, description: str | None = None) -> dict:
    return {"account_id": account.pk, "debit_amount": amount, "credit_amount": ZERO, "description": description}


def _credit(account: Account, amount: Decimal, description: str | None = None) -> dict:
    return {"account_id": account.pk, "debit_amount": ZERO, "credit_amount": amount, "description": description}


def _quantities_by_product(items) -> "OrderedDict[str, int]":
    # Sorted so concurrent postings touch product rows in the same order.
    totals: dict[str, int] = {}
    for item in items:
        totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity
    return OrderedDict(sorted(totals.items()))


@dataclass(frozen=True)
class SalePostingRule(PostingRule):
    items: tuple
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    transaction_type: ClassVar[str] = JournalEntry.TYPE_SALE
    account_keys: ClassVar[tuple[str, ...]] = (
        account_resolver.ACCOUNTS_RECEIVABLE,
        account_resolver.SALES_REVENUE,
        account_resolver.TAX_PAYABLE,
    )

    def build_lines(self, accounts: dict) -> list[dict]:
        lines = [
            _debit(accounts[account_resolver.ACCOUNTS_RECEIVABLE], self.total_amount),
            _credit(accounts[account_resolver.SALES_REVENUE], self.subtotal),
        ]
        if self.tax_amount > ZERO:
            lines.append(_credit(accounts[account_resolver.TAX_PAYABLE], self.tax_amount))
        return lines

    def apply_side_effects(self) -> None:
        for product_id, qty in _quantities_by_product(self.items).items():
            adjust_stock(product_id, -qty)


@dataclass(frozen=True)
class PurchasePostingRule(PostingRule):
    items: tuple
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    transaction_type: ClassVar[str] = JournalEntry.TYPE_PURCHASE
    account_keys: ClassVar[tuple[str, ...]] = (
        account_resolver.INVENTORY,
        account_resolver.TAX_RECEIVABLE,
        account_resolver.ACCOUNTS_PAYABLE,
    )

    def build_lines(self, accounts: dict) -> list[dict]:
        lines = [_debit(accounts[account_resolver.INVENTORY], self.subtotal)]
        if self.tax_amount > ZERO:
            lines.append(_debit(accounts[account_resolver.TAX_RECEIVABLE], self.tax_amount))
        lines.append(_credit(accounts[account_resolver.ACCOUNTS_PAYABLE], self.total_amount))
        return lines

    def apply_side_effects(self) -> None:
        for item in sorted(self.items, key=lambda it: it.product_id):
            adjust_stock(item.product_id, item.quantity, unit_cost=item.unit_amount)


@dataclass(frozen=True)
class ExpensePostingRule(PostingRule):
    expense_account: Account
    cash_account: Account
    amount: Decimal

    transaction_type: ClassVar[str] = JournalEntry.TYPE_EXPENSE

    def build_lines(self, accounts: dict) -> list[dict]:
        return [
            _debit(self.expense_account, self.amount),
            _credit(self.cash_account, self.amount),
        ]


# ============================================================
# EXECUTION
# ============================================================


def execute_posting_rule(
    rule: PostingRule,
    *,
    date,
    description: str,
    reference: str | None,
    transaction_type: str | None = None,
    author=None,
    cash_flow_category: str | None = None,
) -> JournalEntry:
    """
    Resolve accounts, post the entry (status=posted), then apply side effects.

    Must run inside the caller's transaction.atomic(): a failing side effect
    (e.g. InsufficientStockError) rolls back the entry with everything else.
    """
    accounts = account_resolver.get_well_known_accounts(*rule.account_keys)
    lines = rule.build_lines(accounts)

    entry = post_journal_entry(
        date=date,
        description=description,
        lines=lines,
        transaction_type=transaction_type or rule.transaction_type,
        author=author,
        reference=reference,
        status=JournalEntry.STATUS_POSTED,
        cash_flow_category=cash_flow_category,
    )

    rule.apply_side_effects()
    return entry
