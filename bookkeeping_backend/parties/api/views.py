# parties/api/views.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from parties.api.serializers import CustomerSerializer, SupplierSerializer
from parties.models import Customer, Supplier
from users.permissions import CanPostOrReadOnly


class _PartyListCreateView(GenericAPIView):
    permission_classes = [CanPostOrReadOnly]
    pagination_class = None

    def get_queryset(self):
        qs = self.serializer_class.Meta.model.objects.filter(is_active=True)
        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(name__icontains=search)
        return qs.order_by("name")

    def get(self, request):
        s = self.get_serializer(self.get_queryset(), many=True)
        return Response(s.data, status=status.HTTP_200_OK)

    def post(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        party = s.save()
        return Response(self.get_serializer(party).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["parties"])
class CustomerListCreateView(_PartyListCreateView):
    serializer_class = CustomerSerializer
    queryset = Customer.objects.all()


@extend_schema(tags=["parties"])
class SupplierListCreateView(_PartyListCreateView):
    serializer_class = SupplierSerializer
    queryset = Supplier.objects.all()
