# accounting/api/serializers/expenses.py

from rest_framework import serializers

from accounting.models.expense import ExpenseTransaction


class ExpenseTransactionSerializer(serializers.ModelSerializer):
    """
    Output serializer (DB truth) - clean, stable contract.
    """

    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)
    supplier_name = serializers.CharField(source="supplier.name", read_only=True, default=None)
    entry_number = serializers.CharField(source="journal_entry.entry_number", read_only=True, default=None)
    amount = serializers.DecimalField(source="total_amount", max_digits=15, decimal_places=2, read_only=True)

    class Meta:
        model = ExpenseTransaction
        fields = [
            "id",
            "date",
            "description",
            "reference",
            "amount",
            "account",
            "account_code",
            "account_name",
            "supplier",
            "supplier_name",
            "status",
            "journal_entry",
            "entry_number",
            "created_at",
        ]
        read_only_fields = fields


class ExpenseCreateSerializer(serializers.Serializer):
    """
    Input serializer (Swagger-visible).
    """

    description = serializers.CharField()
    amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    date = serializers.DateField()
    account_id = serializers.IntegerField()
    supplier_id = serializers.UUIDField(required=False, allow_null=True)
    reference = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)

    def validate_amount(self, value):
        if value is None:
            raise serializers.ValidationError("amount is required")
        if value <= 0:
            raise serializers.ValidationError("amount must be > 0")
        return value
