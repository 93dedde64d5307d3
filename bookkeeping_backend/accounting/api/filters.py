# accounting/api/filters.py

import django_filters

from accounting.models.journal import JournalEntry


class JournalEntryFilter(django_filters.FilterSet):
    """
    /api/accounting/journal-entries/?status=posted&transaction_type=sale
    /api/accounting/journal-entries/?date_from=2024-01-01&date_to=2024-01-31
    """

    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    reference = django_filters.CharFilter(field_name="reference", lookup_expr="iexact")
    account = django_filters.NumberFilter(field_name="lines__account_id", distinct=True)

    class Meta:
        model = JournalEntry
        fields = ["status", "transaction_type", "cash_flow_category"]
