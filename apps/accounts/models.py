from django.conf import settings
from django.db import models

from apps.accounts.plans import PlanTier


class Subscription(models.Model):
    """Plan tier held by a user"""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='subscription',
    )
    plan = models.CharField(max_length=20, choices=PlanTier.choices(), default=PlanTier.FREE.value)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user} - {self.plan}"
