# accounting/models/sequence.py

from django.db import models


class SequenceCounter(models.Model):
    """
    Named monotonic counter (journal entry numbers, sales invoice numbers).

    Only accounting.services.sequences touches this table, always under
    select_for_update() inside the posting transaction.
    """

    key = models.CharField(max_length=64, unique=True)
    last_value = models.BigIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Sequence Counter"
        verbose_name_plural = "Sequence Counters"

    def __str__(self):
        return f"{self.key}={self.last_value}"
