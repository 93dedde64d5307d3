# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounting.api.views.accounts import (
    AccountDeactivateView,
    AccountDetailView,
    AccountListCreateView,
)
from accounting.api.views.expenses import ExpenseListCreateView
from accounting.api.views.journal_entries import JournalEntryViewSet
from accounting.api.views.reports import (
    BalanceSheetView,
    CashFlowStatementView,
    IncomeStatementView,
    TrialBalanceView,
)

router = DefaultRouter()
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")

urlpatterns = [
    # Router endpoints
    path("", include(router.urls)),
    # Chart of accounts
    path("accounts/", AccountListCreateView.as_view(), name="accounts"),
    path("accounts/<int:pk>/", AccountDetailView.as_view(), name="account-detail"),
    path(
        "accounts/<int:pk>/deactivate/",
        AccountDeactivateView.as_view(),
        name="account-deactivate",
    ),
    # Posting actions
    path("expenses/", ExpenseListCreateView.as_view(), name="expenses"),
    # Reports
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("income-statement/", IncomeStatementView.as_view(), name="income-statement"),
    path("cash-flow-statement/", CashFlowStatementView.as_view(), name="cash-flow-statement"),
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
]
