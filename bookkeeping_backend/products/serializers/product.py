# products/serializers/product.py

"""
PRODUCT SERIALIZER

Stock is read-only here: it only moves through sales and purchases.
An opening stock_quantity may be supplied on create.
"""

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "description",
            "unit_price",
            "cost_price",
            "stock_quantity",
            "minimum_stock",
            "unit",
            "is_low_stock",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "is_low_stock",
            "created_at",
            "updated_at",
        ]

    def validate_sku(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("SKU is required")
        qs = Product.objects.filter(sku=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("SKU already exists")
        return value

    def validate_unit_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("Unit price must be greater than zero")
        return value

    def validate_cost_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("Cost price must be greater than zero")
        return value

    def update(self, instance, validated_data):
        # Stock moves only through posted transactions.
        validated_data.pop("stock_quantity", None)
        return super().update(instance, validated_data)
