# products/urls.py

"""
PRODUCTS URLS

Mounted under /api/products/ (empty router prefix):
    /api/products/
    /api/products/<uuid>/
    /api/products/alerts/low-stock/
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import ProductViewSet

router = SimpleRouter()
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
