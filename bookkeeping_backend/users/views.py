# users/views.py
"""
USER VIEWS

GET  /api/users/       (admin only, paginated, ?role=)
POST /api/users/       (admin only) create an admin, accountant or read-only user
GET  /api/users/me/    current user

Tokens are issued by /api/auth/jwt/create/; there is no self-registration.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.permissions import IsAdmin
from users.serializers import UserCreateSerializer, UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


# ---------------- LIST / CREATE ----------------
class UserListCreateView(GenericAPIView):
    permission_classes = [IsAdmin]
    serializer_class = UserCreateSerializer

    def get_queryset(self):
        qs = User.objects.order_by("email")
        role = (self.request.query_params.get("role") or "").strip()
        if role:
            qs = qs.filter(role=role)
        return qs

    @extend_schema(
        tags=["users"],
        parameters=[OpenApiParameter("role", str, description="admin, accountant or user")],
        responses=UserSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = self.get_queryset()
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(UserSerializer(page, many=True).data)
        return Response(UserSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["users"],
        request=UserCreateSerializer,
        responses={201: UserSerializer, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = s.save()

        logger.info("User created: %s (%s) by %s", user.email, user.role, request.user.email)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


# ---------------- CURRENT USER ----------------
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["users"],
        responses={200: UserSerializer},
        description="Get current authenticated user profile",
    )
    def get(self, request):
        return Response(
            {
                "authenticated": True,
                "user": UserSerializer(request.user).data,
            },
            status=status.HTTP_200_OK,
        )
