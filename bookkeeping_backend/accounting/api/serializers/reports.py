# accounting/api/serializers/reports.py

"""
Read-only shapes for the financial statements. Money is emitted as decimal
strings (COERCE_DECIMAL_TO_STRING) so no precision is lost in JSON.
"""

from rest_framework import serializers


def _money(**kwargs):
    return serializers.DecimalField(max_digits=17, decimal_places=2, **kwargs)


class StatementRowSerializer(serializers.Serializer):
    account_id = serializers.IntegerField(allow_null=True)
    code = serializers.CharField(allow_null=True)
    account_name = serializers.CharField()
    balance = _money()


class BalanceSheetSerializer(serializers.Serializer):
    as_of_date = serializers.DateField()
    assets = StatementRowSerializer(many=True)
    liabilities = StatementRowSerializer(many=True)
    equity = StatementRowSerializer(many=True)
    total_assets = _money()
    total_liabilities = _money()
    total_equity = _money()
    total_liabilities_and_equity = _money()
    is_balanced = serializers.BooleanField()


class IncomeRowSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    code = serializers.CharField()
    account_name = serializers.CharField()
    amount = _money()


class IncomeStatementSerializer(serializers.Serializer):
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    revenues = IncomeRowSerializer(many=True)
    expenses = IncomeRowSerializer(many=True)
    total_revenue = _money()
    total_expenses = _money()
    net_income = _money()


class CashActivitySerializer(serializers.Serializer):
    entry_id = serializers.IntegerField()
    entry_number = serializers.CharField()
    date = serializers.DateField()
    transaction_type = serializers.CharField()
    description = serializers.CharField()
    amount = _money()


class CashFlowStatementSerializer(serializers.Serializer):
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    operating_activities = CashActivitySerializer(many=True)
    investing_activities = CashActivitySerializer(many=True)
    financing_activities = CashActivitySerializer(many=True)
    net_operating_cash = _money()
    net_investing_cash = _money()
    net_financing_cash = _money()
    net_cash_flow = _money()


class TrialBalanceRowSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    code = serializers.CharField()
    account_name = serializers.CharField()
    account_type = serializers.CharField()
    debit = _money()
    credit = _money()
    balance = _money()


class TrialBalanceSerializer(serializers.Serializer):
    as_of_date = serializers.DateField(allow_null=True)
    accounts = TrialBalanceRowSerializer(many=True)
    total_debit = _money()
    total_credit = _money()
    is_balanced = serializers.BooleanField()
