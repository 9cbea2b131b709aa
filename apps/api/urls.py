"""
API URL Configuration
"""
from django.urls import path
from . import views

app_name = 'api'

urlpatterns = [
    path('', views.health_check, name='health_check'),
    path('contract-types/', views.contract_types, name='contract_types'),
    path('plans/', views.plans, name='plans'),
    path('preview/', views.preview, name='preview'),
    path('contracts/', views.contracts, name='contracts'),
    path('plan-status/', views.plan_status, name='plan_status'),
]
