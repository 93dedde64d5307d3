"""
======================================================
PATH: parties/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Customer + Supplier
"""

from __future__ import annotations

import uuid

from django.db import migrations, models


def _party_fields():
    return [
        (
            "id",
            models.UUIDField(
                default=uuid.uuid4,
                editable=False,
                primary_key=True,
                serialize=False,
            ),
        ),
        ("name", models.CharField(max_length=200)),
        ("phone", models.CharField(blank=True, default="", max_length=50)),
        ("email", models.EmailField(blank=True, default="", max_length=254)),
        ("address", models.TextField(blank=True, default="")),
        ("is_active", models.BooleanField(default=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=_party_fields(),
            options={
                "ordering": ["name"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["name"], name="parties_cus_name_7d1c2a_idx"),
                    models.Index(fields=["is_active"], name="parties_cus_is_acti_4b8e91_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Supplier",
            fields=_party_fields(),
            options={
                "ordering": ["name"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["name"], name="parties_sup_name_0e5f3b_idx"),
                    models.Index(fields=["is_active"], name="parties_sup_is_acti_9a2d6c_idx"),
                ],
            },
        ),
    ]
