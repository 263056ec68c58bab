"""
Configurações globais do Pytest para Allure Eventos.

Este arquivo é carregado automaticamente pelo pytest e:
- Configura o Django (SQLite em memória, Celery eager)
- Garante container DI limpo a cada teste
"""

import pytest


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='test-secret-key',
            ALLOWED_HOSTS=['*'],
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.admin',
                'django.contrib.auth',
                'django.contrib.contenttypes',
                'django.contrib.sessions',
                'django.contrib.messages',
                'src.adapters.django_app.eventos',
            ],
            MIDDLEWARE=[
                'django.contrib.sessions.middleware.SessionMiddleware',
                'django.middleware.common.CommonMiddleware',
                'django.contrib.auth.middleware.AuthenticationMiddleware',
                'django.contrib.messages.middleware.MessageMiddleware',
            ],
            TEMPLATES=[
                {
                    'BACKEND': 'django.template.backends.django.DjangoTemplates',
                    'APP_DIRS': True,
                    'OPTIONS': {
                        'context_processors': [
                            'django.template.context_processors.request',
                            'django.contrib.auth.context_processors.auth',
                            'django.contrib.messages.context_processors.messages',
                        ],
                    },
                },
            ],
            ROOT_URLCONF='src.config.urls',
            APPEND_SLASH=False,
            PASSWORD_HASHERS=['django.contrib.auth.hashers.MD5PasswordHasher'],
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='America/Cuiaba',

            # Celery: tarefas executam no próprio processo
            CELERY_TASK_ALWAYS_EAGER=True,
            CELERY_TASK_EAGER_PROPAGATES=True,
            CELERY_BROKER_URL='memory://',
            CELERY_RESULT_BACKEND='cache+memory://',
            EVENT_PUBLISHER_MODE='sync',

            # Domínio
            EVENTOS_SOFT_DELETE=True,
            EVENTOS_API_URL='http://testserver',
            OPENAI_API_KEY='',
            OPENAI_MODEL='gpt-4o',
            OPENAI_TIMEOUT=5,
            AI_MAX_IMAGE_BYTES=1024 * 1024,
            GOOGLE_SCRIPT_URL='',
            PLANILHA_TIMEOUT=5,
            PLANILHA_ATRASO_SIMULACAO=0,
            PLANILHA_ENVIAR_AO_CRIAR=False,
            AUTH_TOKEN_MAX_AGE=3600,
            API_REQUIRE_AUTH=False,
        )
        django.setup()


@pytest.fixture(autouse=True)
def reset_container():
    """
    Reset do container DI entre testes.

    Overrides e singletons de um teste não vazam para o próximo.
    """
    from src.config.container import reset_container as _reset

    _reset()
    yield
    _reset()
