"""
Contract URL Configuration
"""
from django.urls import path
from . import views

app_name = 'contracts'

urlpatterns = [
    path('', views.index, name='index'),
    path('demo/', views.demo, name='demo'),
    path('dashboard/', views.dashboard, name='dashboard'),
    path('create-contract/', views.create_contract, name='create'),
    path('contracts/<int:contract_id>/delete/', views.delete_contract, name='delete'),
    path('contracts/<int:contract_id>/download/html/', views.download_html, name='download_html'),
    path('contracts/<int:contract_id>/download/pdf/', views.download_pdf, name='download_pdf'),
]
