# purchases/api/serializers.py

from rest_framework import serializers

from purchases.models import PurchaseLineItem, PurchaseTransaction


class PurchaseLineItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)

    class Meta:
        model = PurchaseLineItem
        fields = ["id", "product", "product_name", "sku", "quantity", "unit_cost", "line_total"]
        read_only_fields = fields


class PurchaseTransactionSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source="supplier.name", read_only=True)
    entry_number = serializers.CharField(source="journal_entry.entry_number", read_only=True, default=None)
    items = PurchaseLineItemSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseTransaction
        fields = [
            "id",
            "invoice_number",
            "date",
            "due_date",
            "supplier",
            "supplier_name",
            "subtotal",
            "tax_amount",
            "total_amount",
            "status",
            "journal_entry",
            "entry_number",
            "items",
            "created_at",
        ]
        read_only_fields = fields


class PurchaseItemCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_cost = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)


class PurchaseCreateSerializer(serializers.Serializer):
    supplier_id = serializers.UUIDField()
    invoice_number = serializers.CharField(max_length=64)
    date = serializers.DateField()
    due_date = serializers.DateField(required=False, allow_null=True)
    tax_rate = serializers.DecimalField(
        max_digits=6,
        decimal_places=4,
        required=False,
        allow_null=True,
        min_value=0,
    )
    items = PurchaseItemCreateSerializer(many=True, allow_empty=False)

    def validate(self, attrs):
        due_date = attrs.get("due_date")
        if due_date and due_date < attrs["date"]:
            raise serializers.ValidationError({"due_date": "due_date cannot be before date"})
        return attrs
