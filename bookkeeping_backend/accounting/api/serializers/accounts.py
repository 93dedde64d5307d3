# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account
from accounting.services.account_registry import resolve_normal_side


class AccountSerializer(serializers.ModelSerializer):
    """
    Read serializer. normal_side is derived from account_type.
    """

    normal_side = serializers.SerializerMethodField()

    class Meta:
        model = Account
        fields = (
            "id",
            "code",
            "name",
            "account_type",
            "normal_side",
            "parent",
            "is_active",
            "is_cash_equivalent",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_normal_side(self, obj) -> str:
        return resolve_normal_side(obj.account_type)


class AccountCreateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=20)
    name = serializers.CharField(max_length=150)
    account_type = serializers.ChoiceField(choices=Account.ACCOUNT_TYPES)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    is_cash_equivalent = serializers.BooleanField(required=False, default=False)
