"""
URL patterns da API de Eventos.

Montadas em ``/api/`` por ``src/config/urls.py``.
"""

from django.urls import path, re_path

from . import api_views

app_name = 'eventos'

urlpatterns = [
    # =========================================================================
    # Eventos
    # =========================================================================

    path('events', api_views.EventoAPIListView.as_view(), name='list'),

    # Filtros (antes do <pk> para não conflitar)
    path('events/date/<str:data>', api_views.EventosPorDataView.as_view(), name='by_date'),
    path('events/status/<str:status>', api_views.EventosPorStatusView.as_view(), name='by_status'),

    path('events/<str:pk>', api_views.EventoAPIDetailView.as_view(), name='detail'),
    path('events/<str:pk>/sheet', api_views.EnviarPlanilhaView.as_view(), name='sheet'),

    # =========================================================================
    # Extração com IA
    # =========================================================================

    path('ai/extract-from-image', api_views.ExtrairDeImagemView.as_view(), name='extract_image'),
    path('ai/extract-from-text', api_views.ExtrairDeTextoView.as_view(), name='extract_text'),

    re_path(r'^.*$', api_views.rota_nao_encontrada, name='not_found'),
]
