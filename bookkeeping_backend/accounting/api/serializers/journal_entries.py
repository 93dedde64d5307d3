# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.models.journal import JournalEntry, JournalLine


class JournalLineSerializer(serializers.ModelSerializer):
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)

    class Meta:
        model = JournalLine
        fields = (
            "id",
            "account",
            "account_code",
            "account_name",
            "debit_amount",
            "credit_amount",
            "description",
        )
        read_only_fields = fields


class JournalEntrySerializer(serializers.ModelSerializer):
    """
    Output serializer (DB truth): header + lines + totals.
    """

    lines = JournalLineSerializer(many=True, read_only=True)
    total_debit = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)
    total_credit = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)
    created_by = serializers.EmailField(source="created_by.email", read_only=True, default=None)
    reversed_by = serializers.SerializerMethodField()

    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "entry_number",
            "date",
            "description",
            "reference",
            "transaction_type",
            "status",
            "cash_flow_category",
            "reverses",
            "reversed_by",
            "created_by",
            "created_at",
            "updated_at",
            "total_debit",
            "total_credit",
            "lines",
        )
        read_only_fields = fields

    def get_reversed_by(self, obj) -> int | None:
        try:
            return obj.reversal.pk
        except JournalEntry.DoesNotExist:
            return None


class JournalLineInputSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    debit_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, default=0)
    credit_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, default=0)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class ManualJournalEntryCreateSerializer(serializers.Serializer):
    """
    Input serializer for manual adjustments (created as draft).

    Balance and account checks happen in the journal service so the error
    order is the same for API and internal callers.
    """

    date = serializers.DateField()
    description = serializers.CharField()
    reference = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    cash_flow_category = serializers.ChoiceField(
        choices=JournalEntry.CASH_FLOW_CATEGORIES,
        required=False,
        allow_null=True,
    )
    lines = JournalLineInputSerializer(many=True)


class ReverseEntrySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
