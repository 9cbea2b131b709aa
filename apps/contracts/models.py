from django.conf import settings
from django.db import models

from apps.contracts.payload import ContractPayload


class Contract(models.Model):
    """A saved contract. Rows are created and deleted, never edited."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='contracts',
    )
    title = models.CharField(max_length=255)
    data_json = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    pdf_url = models.CharField(max_length=500, null=True, blank=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def payload(self):
        return ContractPayload(self.data_json)
