"""
Fixtures para testes com Django.

- Cliente HTTP de teste
- Factory de EventoModel
- Payload válido de criação
"""

import json

import pytest


@pytest.fixture
def api_client():
    """Django test client com helpers JSON."""
    from django.test import Client

    class JsonClient(Client):
        def post_json(self, path, data, **extra):
            return self.post(path, json.dumps(data), content_type='application/json', **extra)

        def put_json(self, path, data, **extra):
            return self.put(path, json.dumps(data), content_type='application/json', **extra)

    return JsonClient()


@pytest.fixture
def evento_model_factory():
    """Factory para criar EventoModel direto no banco."""
    from src.adapters.django_app.eventos.models import EventoModel

    def create_evento(**kwargs):
        defaults = {
            'nome': 'Show de Teste',
            'artista': 'Banda Teste',
            'data': '24-09-2025',
            'hora_inicio': '20:00',
            'status': 'disponivel',
            'ingressos': '{}',
        }
        defaults.update(kwargs)
        return EventoModel.objects.create(**defaults)

    return create_evento


@pytest.fixture
def payload_evento():
    """Corpo JSON válido para POST /api/events."""
    return {
        'nome': 'Noite de Samba',
        'artista': 'Grupo Exemplo',
        'data': '24-09-2025',
        'horaInicio': '20:00',
        'horaTermino': '23:59',
        'status': 'disponivel',
        'endereco': 'Allure Music Hall',
        'descricao': 'Roda de samba',
        'ingressos': {
            'setores_mesa': [
                {'id': 'mesa-1', 'nome': 'Mesa Setor A', 'preco': 400, 'descricao': '4 lugares'},
            ],
            'camarotes_premium': [
                {'id': 'vip-1', 'nome': 'Camarote VIP', 'preco': 1500.5, 'descricao': '10 pessoas'},
            ],
            'pista': [],
        },
    }


@pytest.fixture
def container():
    """Container DI recém-criado (reset automático entre testes)."""
    from src.config.container import get_container
    return get_container()
