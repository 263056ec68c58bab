"""
Configuração do projeto Allure Eventos.

Módulos:
- settings: Configurações Django
- urls: Rotas principais
- wsgi: WSGI application
- celery: Configuração Celery para tarefas assíncronas
- container: Dependency Injection Container
"""

# Importar app Celery para que seja carregado com Django
from .celery import app as celery_app

__all__ = ('celery_app',)
