# parties/api/urls.py

from django.urls import path

from parties.api.views import CustomerListCreateView, SupplierListCreateView

urlpatterns = [
    path("customers/", CustomerListCreateView.as_view(), name="party-customers"),
    path("suppliers/", SupplierListCreateView.as_view(), name="party-suppliers"),
]
