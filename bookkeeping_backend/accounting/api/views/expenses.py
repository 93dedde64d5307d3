# PATH: accounting/api/views/expenses.py

"""
PATH: accounting/api/views/expenses.py

EXPENSES API

GET  /api/accounting/expenses/   (paginated)
POST /api/accounting/expenses/
    - Dr <expense account> / Cr Cash, posted immediately
    - Creates ExpenseTransaction + JournalEntry atomically
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from accounting.api.errors import domain_error_response
from accounting.api.serializers.expenses import (
    ExpenseCreateSerializer,
    ExpenseTransactionSerializer,
)
from accounting.models.expense import ExpenseTransaction
from accounting.services.exceptions import AccountingServiceError
from accounting.services.expense_service import post_expense
from users.permissions import CanPostOrReadOnly


class ExpenseListCreateView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = ExpenseCreateSerializer

    def get_queryset(self):
        return ExpenseTransaction.objects.select_related(
            "account",
            "supplier",
            "journal_entry",
        ).order_by("-date", "-created_at")

    @extend_schema(
        tags=["accounting"],
        responses=ExpenseTransactionSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = self.get_queryset()
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ExpenseTransactionSerializer(page, many=True).data)
        return Response(ExpenseTransactionSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=ExpenseCreateSerializer,
        responses={201: ExpenseTransactionSerializer, 400: dict, 404: dict, 503: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            expense = post_expense(
                description=data["description"],
                amount=data["amount"],
                date=data["date"],
                account_id=data["account_id"],
                supplier_id=data.get("supplier_id"),
                reference=data.get("reference"),
                author=request.user,
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)

        return Response(ExpenseTransactionSerializer(expense).data, status=status.HTTP_201_CREATED)
