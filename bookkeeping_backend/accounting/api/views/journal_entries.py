# accounting/api/views/journal_entries.py

"""
PATH: accounting/api/views/journal_entries.py

JOURNAL ENTRIES API

GET  /api/accounting/journal-entries/            list (filterable, paginated)
POST /api/accounting/journal-entries/            manual entry (draft)
GET  /api/accounting/journal-entries/<id>/       entry + lines
POST /api/accounting/journal-entries/<id>/post/      draft -> posted
POST /api/accounting/journal-entries/<id>/cancel/    draft -> cancelled
POST /api/accounting/journal-entries/<id>/reverse/   posted -> new contra entry

There is no update or delete: posted history is only corrected by reversal.
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from accounting.api.errors import domain_error_response
from accounting.api.filters import JournalEntryFilter
from accounting.api.serializers.journal_entries import (
    JournalEntrySerializer,
    ManualJournalEntryCreateSerializer,
    ReverseEntrySerializer,
)
from accounting.models.journal import JournalEntry
from accounting.services.exceptions import AccountingServiceError
from accounting.services.journal_entry_service import post_manual_journal_entry
from accounting.services.journal_lifecycle import cancel_entry, post_draft_entry, reverse_entry
from users.permissions import CanPostOrReadOnly


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, GenericViewSet):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = JournalEntrySerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = JournalEntryFilter

    queryset = (
        JournalEntry.objects.select_related("created_by", "reversal")
        .prefetch_related("lines__account")
        .order_by("-date", "-entry_number")
    )

    def _entry_response(self, entry, http_status=status.HTTP_200_OK):
        entry = self.get_queryset().get(pk=entry.pk)
        return Response(JournalEntrySerializer(entry).data, status=http_status)

    @extend_schema(
        request=ManualJournalEntryCreateSerializer,
        responses={201: JournalEntrySerializer, 400: dict, 404: dict},
    )
    def create(self, request, *args, **kwargs):
        s = ManualJournalEntryCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            entry = post_manual_journal_entry(
                date=data["date"],
                description=data["description"],
                lines=[dict(line) for line in data["lines"]],
                reference=data.get("reference"),
                author=request.user,
                cash_flow_category=data.get("cash_flow_category"),
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)

        return self._entry_response(entry, status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: JournalEntrySerializer, 400: dict, 404: dict})
    @action(detail=True, methods=["post"], url_path="post")
    def post_entry(self, request, pk=None):
        try:
            entry = post_draft_entry(pk)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return self._entry_response(entry)

    @extend_schema(request=None, responses={200: JournalEntrySerializer, 400: dict, 404: dict})
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        try:
            entry = cancel_entry(pk)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return self._entry_response(entry)

    @extend_schema(request=ReverseEntrySerializer, responses={201: JournalEntrySerializer, 400: dict, 404: dict})
    @action(detail=True, methods=["post"])
    def reverse(self, request, pk=None):
        s = ReverseEntrySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            reversal = reverse_entry(
                pk,
                date=s.validated_data.get("date"),
                author=request.user,
                description=s.validated_data.get("description") or None,
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return self._entry_response(reversal, status.HTTP_201_CREATED)
