# sales/api/views.py

"""
PATH: sales/api/views.py

SALES API

GET  /api/sales/transactions/            (paginated, ?customer=&date_from=&date_to=&invoice_number=&status=)
POST /api/sales/transactions/
    - Dr Accounts Receivable / Cr Sales Revenue / Cr Tax Payable
    - Decrements stock; rejected atomically when stock is insufficient
GET  /api/sales/transactions/<id>/
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.errors import domain_error_response
from accounting.services.exceptions import AccountingServiceError
from sales.api.filters import SalesTransactionFilter
from sales.api.serializers import SaleCreateSerializer, SalesTransactionSerializer
from sales.models import SalesTransaction
from sales.services.sale_service import get_sale, post_sale
from users.permissions import CanPostOrReadOnly


class SalesTransactionListCreateView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = SaleCreateSerializer
    filterset_class = SalesTransactionFilter

    def get_queryset(self):
        return (
            SalesTransaction.objects.select_related("customer", "journal_entry")
            .prefetch_related("items", "items__product")
            .order_by("-date", "-created_at")
        )

    @extend_schema(
        tags=["sales"],
        responses=SalesTransactionSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(SalesTransactionSerializer(page, many=True).data)
        return Response(SalesTransactionSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["sales"],
        request=SaleCreateSerializer,
        responses={201: SalesTransactionSerializer, 400: dict, 404: dict, 503: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            sale = post_sale(
                customer_id=data["customer_id"],
                date=data["date"],
                due_date=data.get("due_date"),
                tax_rate=data.get("tax_rate"),
                items=[dict(item) for item in data["items"]],
                author=request.user,
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)

        return Response(SalesTransactionSerializer(get_sale(sale.pk)).data, status=status.HTTP_201_CREATED)


class SalesTransactionDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["sales"], responses={200: SalesTransactionSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        try:
            sale = get_sale(pk)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(SalesTransactionSerializer(sale).data, status=status.HTTP_200_OK)
