# accounting/api/views/accounts.py

"""
PATH: accounting/api/views/accounts.py

CHART OF ACCOUNTS API

GET  /api/accounting/accounts/?account_type=&is_active=&parent=&search=
POST /api/accounting/accounts/
GET  /api/accounting/accounts/<id>/
POST /api/accounting/accounts/<id>/deactivate/

Reads: any authenticated user. Writes: admin / accountant.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from accounting.api.errors import domain_error_response
from accounting.api.serializers.accounts import AccountCreateSerializer, AccountSerializer
from accounting.services.account_registry import (
    create_account,
    deactivate_account,
    get_account,
    list_accounts,
)
from accounting.services.exceptions import AccountingServiceError
from users.permissions import CanPostOrReadOnly


def _parse_bool(raw):
    if raw is None or raw == "":
        return None
    return str(raw).strip().lower() in ("1", "true", "yes")


class AccountListCreateView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = AccountCreateSerializer

    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter(name="account_type", type=str, required=False),
            OpenApiParameter(name="is_active", type=bool, required=False),
            OpenApiParameter(name="parent", type=int, required=False),
            OpenApiParameter(name="search", type=str, required=False, description="Code or name contains"),
        ],
        responses=AccountSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qp = request.query_params
        try:
            accounts = list_accounts(
                account_type=qp.get("account_type") or None,
                is_active=_parse_bool(qp.get("is_active")),
                parent_id=qp.get("parent") or None,
                search=qp.get("search") or None,
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)

        return Response(AccountSerializer(accounts, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=AccountCreateSerializer,
        responses={201: AccountSerializer, 400: dict, 409: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            account = create_account(
                code=data["code"],
                name=data["name"],
                account_type=data["account_type"],
                parent_id=data.get("parent_id"),
                is_cash_equivalent=data.get("is_cash_equivalent", False),
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)

        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)


class AccountDetailView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = AccountSerializer

    @extend_schema(tags=["accounting"], responses={200: AccountSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        try:
            account = get_account(pk)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)


class AccountDeactivateView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    serializer_class = AccountSerializer

    @extend_schema(tags=["accounting"], request=None, responses={200: AccountSerializer, 404: dict})
    def post(self, request, pk, *args, **kwargs):
        try:
            account = deactivate_account(pk)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)
