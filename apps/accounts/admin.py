from django.contrib import admin

from apps.accounts.models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ('user', 'plan', 'created_at')
    list_filter = ('plan',)
