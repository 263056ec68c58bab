"""
URL patterns da API de autenticação.

Montadas em ``/api/auth/`` por ``src/config/urls.py``.
"""

from django.urls import path

from . import api_views

app_name = 'auth_api'

urlpatterns = [
    path('login', api_views.LoginAPIView.as_view(), name='login'),
    path('session', api_views.SessaoAPIView.as_view(), name='session'),
]
