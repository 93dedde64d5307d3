# accounting/api/views/reports.py

"""
PATH: accounting/api/views/reports.py

FINANCIAL STATEMENT API VIEWS (READ-ONLY)

GET /api/accounting/balance-sheet/?as_of_date=YYYY-MM-DD        (default: today)
GET /api/accounting/income-statement/?start_date=&end_date=
GET /api/accounting/cash-flow-statement/?start_date=&end_date=
GET /api/accounting/trial-balance/?as_of_date=

Statements are computed on demand from posted entries; nothing is cached.
"""

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.errors import domain_error_response
from accounting.api.serializers.reports import (
    BalanceSheetSerializer,
    CashFlowStatementSerializer,
    IncomeStatementSerializer,
    TrialBalanceSerializer,
)
from accounting.services.balance_service import get_trial_balance, parse_report_date
from accounting.services.balance_sheet_service import generate_balance_sheet
from accounting.services.cash_flow_service import generate_cash_flow_statement
from accounting.services.exceptions import AccountingServiceError
from accounting.services.income_statement_service import generate_income_statement

AS_OF_DATE_PARAM = OpenApiParameter(
    name="as_of_date",
    type=OpenApiTypes.DATE,
    required=False,
    description="Cutoff date (YYYY-MM-DD), inclusive. Defaults to today.",
)

PERIOD_PARAMS = [
    OpenApiParameter(name="start_date", type=OpenApiTypes.DATE, required=True),
    OpenApiParameter(name="end_date", type=OpenApiTypes.DATE, required=True),
]


class BalanceSheetView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], parameters=[AS_OF_DATE_PARAM], responses={200: BalanceSheetSerializer})
    def get(self, request):
        as_of_date = request.query_params.get("as_of_date") or timezone.localdate()
        try:
            report = generate_balance_sheet(as_of_date=as_of_date)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(BalanceSheetSerializer(report).data, status=status.HTTP_200_OK)


class IncomeStatementView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], parameters=PERIOD_PARAMS, responses={200: IncomeStatementSerializer})
    def get(self, request):
        try:
            report = generate_income_statement(
                start_date=request.query_params.get("start_date"),
                end_date=request.query_params.get("end_date"),
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(IncomeStatementSerializer(report).data, status=status.HTTP_200_OK)


class CashFlowStatementView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], parameters=PERIOD_PARAMS, responses={200: CashFlowStatementSerializer})
    def get(self, request):
        try:
            report = generate_cash_flow_statement(
                start_date=request.query_params.get("start_date"),
                end_date=request.query_params.get("end_date"),
            )
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(CashFlowStatementSerializer(report).data, status=status.HTTP_200_OK)


class TrialBalanceView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], parameters=[AS_OF_DATE_PARAM], responses={200: TrialBalanceSerializer})
    def get(self, request):
        try:
            as_of_date = parse_report_date(
                request.query_params.get("as_of_date") or timezone.localdate(),
                field_name="as_of_date",
            )
            report = get_trial_balance(as_of_date=as_of_date)
        except AccountingServiceError as exc:
            return domain_error_response(exc)
        return Response(TrialBalanceSerializer(report).data, status=status.HTTP_200_OK)
