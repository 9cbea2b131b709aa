"""
URL configuration for ContratoPronto project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Main apps
    path('', include('apps.contracts.urls')),
    path('auth/', include('apps.accounts.urls')),
    path('api/', include('apps.api.urls')),
]
