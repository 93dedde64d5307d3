# purchases/api/urls.py

from django.urls import path

from purchases.api.views import (
    PurchaseTransactionDetailView,
    PurchaseTransactionListCreateView,
)

urlpatterns = [
    path(
        "transactions/",
        PurchaseTransactionListCreateView.as_view(),
        name="purchase-transactions",
    ),
    path(
        "transactions/<int:pk>/",
        PurchaseTransactionDetailView.as_view(),
        name="purchase-transaction-detail",
    ),
]
