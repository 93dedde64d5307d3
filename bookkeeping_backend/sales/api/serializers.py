# sales/api/serializers.py

from rest_framework import serializers

from sales.models import SalesLineItem, SalesTransaction


class SalesLineItemSerializer(serializers.ModelSerializer):
    """
    Sale line item (read-only).
    """

    product_name = serializers.CharField(source="product.name", read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)

    class Meta:
        model = SalesLineItem
        fields = [
            "id",
            "product",
            "product_name",
            "sku",
            "quantity",
            "unit_price",
            "line_total",
        ]
        read_only_fields = fields


class SalesTransactionSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    entry_number = serializers.CharField(source="journal_entry.entry_number", read_only=True, default=None)
    items = SalesLineItemSerializer(many=True, read_only=True)

    class Meta:
        model = SalesTransaction
        fields = [
            "id",
            "invoice_number",
            "date",
            "due_date",
            "customer",
            "customer_name",
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


class SaleItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        required=False,
        allow_null=True,
        help_text="Defaults to the product's current selling price",
    )


class SaleCreateSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()
    date = serializers.DateField()
    due_date = serializers.DateField(required=False, allow_null=True)
    tax_rate = serializers.DecimalField(
        max_digits=6,
        decimal_places=4,
        required=False,
        allow_null=True,
        min_value=0,
    )
    items = SaleItemInputSerializer(many=True, allow_empty=False)

    def validate(self, attrs):
        due_date = attrs.get("due_date")
        if due_date and due_date < attrs["date"]:
            raise serializers.ValidationError({"due_date": "due_date cannot be before date"})
        return attrs
