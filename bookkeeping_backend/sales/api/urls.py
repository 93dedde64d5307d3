# sales/api/urls.py

from django.urls import path

from sales.api.views import SalesTransactionDetailView, SalesTransactionListCreateView

urlpatterns = [
    path("transactions/", SalesTransactionListCreateView.as_view(), name="sales-transactions"),
    path(
        "transactions/<int:pk>/",
        SalesTransactionDetailView.as_view(),
        name="sales-transaction-detail",
    ),
]
