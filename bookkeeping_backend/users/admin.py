# users/admin.py

"""
USERS ADMIN

Staff manage ledger access here:
- admin: everything an accountant can do, plus managing users
- accountant: posts entries, sales, purchases and expenses
- user: read-only reports and listings

"Can post" mirrors User.can_post_entries, the same check the API applies
to every write.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("role", "email")
    list_display = (
        "email",
        "first_name",
        "last_name",
        "role",
        "can_post",
        "is_active",
        "created_at",
    )
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "first_name", "last_name")
    readonly_fields = ("created_at", "updated_at", "last_login")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("first_name", "last_name")}),
        ("Ledger access", {"fields": ("role", "is_active")}),
        (
            "Django admin",
            {
                "classes": ("collapse",),
                "fields": (
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        ("Activity", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "password1",
                    "password2",
                    "first_name",
                    "last_name",
                    "role",
                ),
            },
        ),
    )

    @admin.display(boolean=True, description="Can post")
    def can_post(self, obj):
        return obj.can_post_entries
