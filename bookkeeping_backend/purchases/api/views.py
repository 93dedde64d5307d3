# purchases/api/views.py

"""
PURCHASES API

GET  /api/purchases/transactions/        (paginated, ?supplier=&date_from=&date_to=&invoice_number=)
POST /api/purchases/transactions/
    - Dr Inventory / Dr Tax Receivable / Cr Accounts Payable
    - Increments stock and updates each product's latest cost
GET  /api/purchases/transactions/<id>/
"""

import django_filters
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.errors import domain_error_response
from accounting.services.exceptions import AccountingServiceError
from purchases.api.serializers import PurchaseCreateSerializer, PurchaseTransactionSerializer
from purchases.models import PurchaseTransaction
from purchases.services.purchase_service import get_purchase, post_purchase
from users.permissions import CanPostOrReadOnly


class PurchaseTransactionFilter(django_filters.FilterSet):
    supplier = django_filters.UUIDFilter(field_name="supplier_id")
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    invoice_number = django_filters.CharFilter(field_name="invoice_number", lookup_expr="iexact")

    class Meta:
        model = PurchaseTransaction
        fields = ["status"]


class PurchaseTransactionListCreateView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = PurchaseCreateSerializer
    filterset_class = PurchaseTransactionFilter

    def get_queryset(self):
        return (
            PurchaseTransaction.objects.select_related("supplier", "journal_entry")
            .prefetch_related("items", "items__product")
            .order_by("-date", "-created_at")
        )

    @extend_schema(tags=["purchases"], responses=PurchaseTransactionSerializer(many=True))
    def get(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(PurchaseTransactionSerializer(page, many=True).data)
        return Response(PurchaseTransactionSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["purchases"],
        request=PurchaseCreateSerializer,
        responses={201: PurchaseTransactionSerializer, 400: dict, 404: dict, 409: dict, 503: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            purchase = post_purchase(
                supplier_id=data["supplier_id"],
                date=data["date"],
                due_date=data.get("due_date"),
                invoice_number=data["invoice_number"],
                tax_rate=data.get("tax_rate"),
                items=[dict(item) for item in data["items"]],
                author=request.user,
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)

        return Response(
            PurchaseTransactionSerializer(get_purchase(purchase.pk)).data,
            status=status.HTTP_201_CREATED,
        )


class PurchaseTransactionDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["purchases"], responses={200: PurchaseTransactionSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        try:
            purchase = get_purchase(pk)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(PurchaseTransactionSerializer(purchase).data, status=status.HTTP_200_OK)
