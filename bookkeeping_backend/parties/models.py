# parties/models.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models


class Party(models.Model):
    """
    Shared counterparty fields.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "name is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class Customer(Party):
    """
    Customer master (sales counterparty).
    """

    class Meta(Party.Meta):
        indexes = [
            models.Index(fields=["name"], name="parties_cus_name_7d1c2a_idx"),
            models.Index(fields=["is_active"], name="parties_cus_is_acti_4b8e91_idx"),
        ]


class Supplier(Party):
    """
    Supplier master (purchase and expense counterparty).
    """

    class Meta(Party.Meta):
        indexes = [
            models.Index(fields=["name"], name="parties_sup_name_0e5f3b_idx"),
            models.Index(fields=["is_active"], name="parties_sup_is_acti_9a2d6c_idx"),
        ]
