"""
URL Configuration para Allure Eventos.

Estrutura:
- / - Informações da API
- /health - Health check do banco
- /admin/ - Django Admin
- /api/auth/ - Login e sessão
- /api/ - Eventos e extração com IA (demais rotas → 404 JSON)
"""

from django.contrib import admin
from django.urls import include, path

from src.adapters.django_app.eventos.api_views import HealthView, InfoView

urlpatterns = [
    path('', InfoView.as_view(), name='info'),
    path('health', HealthView.as_view(), name='health'),

    # Django Admin
    path('admin/', admin.site.urls),

    # API (auth antes do catch-all de /api/)
    path('api/auth/', include('src.adapters.django_app.auth.urls')),
    path('api/', include('src.adapters.django_app.eventos.urls')),
]
