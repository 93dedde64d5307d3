# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from accounting.models.account import Account
from accounting.models.business import PostedTransaction
from accounting.models.expense import ExpenseTransaction
from accounting.models.journal import JournalEntry, JournalLine
from accounting.models.sequence import SequenceCounter

__all__ = [
    "Account",
    "JournalEntry",
    "JournalLine",
    "SequenceCounter",
    "PostedTransaction",
    "ExpenseTransaction",
]
