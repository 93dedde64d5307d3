# products/views/product.py

"""
PRODUCT VIEWSET

Thin catalog endpoints: list/create/retrieve/update plus a low-stock alert.
No delete: products referenced by posted line items must survive.
"""

from django.db.models import F, Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from products.models import Product
from products.serializers.product import ProductSerializer
from users.permissions import CanPostOrReadOnly


@extend_schema(tags=["products"])
class ProductViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    GET  /api/products/?q=<search>&include_inactive=true
    POST /api/products/
    GET  /api/products/alerts/low-stock/
    """

    serializer_class = ProductSerializer
    permission_classes = [CanPostOrReadOnly]

    def get_queryset(self):
        qs = Product.objects.all()

        include_inactive = (
            self.request.query_params.get("include_inactive") or ""
        ).strip().lower() in ("1", "true", "yes")
        if not include_inactive:
            qs = qs.filter(is_active=True)

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(sku__icontains=q))

        return qs.order_by("-created_at")

    @extend_schema(
        parameters=[
            OpenApiParameter(name="q", type=str, location=OpenApiParameter.QUERY, required=False),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    # -----------------------------
    # Alerts: Low stock
    # -----------------------------
    @action(detail=False, methods=["get"], url_path="alerts/low-stock")
    def low_stock_alerts(self, request):
        qs = self.get_queryset().filter(stock_quantity__lte=F("minimum_stock"))
        data = self.get_serializer(qs, many=True).data
        return Response({"count": len(data), "results": data})
