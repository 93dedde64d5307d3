# sales/api/filters.py

import django_filters

from sales.models import SalesTransaction


class SalesTransactionFilter(django_filters.FilterSet):
    customer = django_filters.UUIDFilter(field_name="customer_id")
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    invoice_number = django_filters.CharFilter(field_name="invoice_number", lookup_expr="iexact")

    class Meta:
        model = SalesTransaction
        fields = ["status"]
