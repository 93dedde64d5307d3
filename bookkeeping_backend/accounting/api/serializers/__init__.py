from .accounts import AccountCreateSerializer, AccountSerializer
from .expenses import ExpenseCreateSerializer, ExpenseTransactionSerializer
from .journal_entries import (
    JournalEntrySerializer,
    JournalLineSerializer,
    ManualJournalEntryCreateSerializer,
    ReverseEntrySerializer,
)
from .reports import (
    BalanceSheetSerializer,
    CashFlowStatementSerializer,
    IncomeStatementSerializer,
    TrialBalanceSerializer,
)

__all__ = [
    "AccountCreateSerializer",
    "AccountSerializer",
    "BalanceSheetSerializer",
    "CashFlowStatementSerializer",
    "ExpenseCreateSerializer",
    "ExpenseTransactionSerializer",
    "IncomeStatementSerializer",
    "JournalEntrySerializer",
    "JournalLineSerializer",
    "ManualJournalEntryCreateSerializer",
    "ReverseEntrySerializer",
    "TrialBalanceSerializer",
]
