"""
Testes da autenticação da API.

Testa:
- Tokens assinados (emissão, adulteração, expiração)
- Conferência de credenciais contra usuários do Django
- POST /api/auth/login e GET /api/auth/session
- Escritas protegidas com API_REQUIRE_AUTH
"""

import pytest
from django.contrib.auth import get_user_model

from src.adapters.django_app.auth.credenciais import DjangoVerificadorCredenciais
from src.adapters.django_app.auth.tokens import SignedTokenEmissor
from src.core.auth.entities import Credenciais, UsuarioAutenticado
from src.core.shared.exceptions import AuthError

USUARIO = UsuarioAutenticado(id='1', email='admin@allure.com.br', nome='Admin', papel='admin')


@pytest.fixture
def admin(db):
    return get_user_model().objects.create_user(
        username='admin@allure.com.br',
        email='admin@allure.com.br',
        password='segredo',
        first_name='Equipe',
        last_name='Allure',
        is_staff=True,
    )


def _bearer(token):
    return {'HTTP_AUTHORIZATION': f'Bearer {token}'}


class TestSignedTokenEmissor:

    def test_emitir_e_validar(self):
        emissor = SignedTokenEmissor(max_age=60)

        token, expira_em = emissor.emitir(USUARIO)

        assert emissor.validar(token) == USUARIO
        assert expira_em.tzinfo is not None

    def test_token_adulterado(self):
        emissor = SignedTokenEmissor()
        token, _ = emissor.emitir(USUARIO)

        with pytest.raises(AuthError) as exc_info:
            emissor.validar(token[:-2] + 'xx')

        assert str(exc_info.value) == 'Token inválido'

    def test_salt_diferente(self):
        token, _ = SignedTokenEmissor(salt='outro').emitir(USUARIO)

        with pytest.raises(AuthError):
            SignedTokenEmissor().validar(token)

    def test_token_expirado(self):
        emissor = SignedTokenEmissor(max_age=-1)
        token, _ = emissor.emitir(USUARIO)

        with pytest.raises(AuthError) as exc_info:
            emissor.validar(token)

        assert str(exc_info.value) == 'Sessão expirada'


class TestDjangoVerificadorCredenciais:

    def test_credenciais_validas(self, admin):
        usuario = DjangoVerificadorCredenciais().verificar(
            Credenciais('ADMIN@allure.com.br', 'segredo')
        )

        assert usuario == UsuarioAutenticado(
            id=str(admin.pk),
            email='admin@allure.com.br',
            nome='Equipe Allure',
            papel='admin',
        )

    def test_senha_errada(self, admin):
        assert DjangoVerificadorCredenciais().verificar(Credenciais('admin@allure.com.br', 'x')) is None

    @pytest.mark.django_db
    def test_usuario_inexistente(self):
        assert DjangoVerificadorCredenciais().verificar(Credenciais('ninguem@allure.com.br', 'x')) is None


@pytest.mark.django_db
class TestLoginAPI:

    def test_login(self, api_client, admin):
        response = api_client.post_json('/api/auth/login', {'email': 'admin@allure.com.br', 'password': 'segredo'})

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'Login realizado'
        assert body['data']['token']
        assert body['data']['usuario']['role'] == 'admin'

    def test_login_senha_errada(self, api_client, admin):
        response = api_client.post_json('/api/auth/login', {'email': 'admin@allure.com.br', 'password': 'x'})

        assert response.status_code == 401
        assert response.json()['error'] == 'Email ou senha incorretos'

    def test_login_sem_email(self, api_client):
        response = api_client.post_json('/api/auth/login', {'password': 'x'})
        assert response.status_code == 400

    def test_sessao(self, api_client, admin):
        login = api_client.post_json('/api/auth/login', {'email': 'admin@allure.com.br', 'password': 'segredo'})
        token = login.json()['data']['token']

        response = api_client.get('/api/auth/session', **_bearer(token))

        assert response.status_code == 200
        assert response.json()['data']['email'] == 'admin@allure.com.br'

    def test_sessao_sem_token(self, api_client):
        response = api_client.get('/api/auth/session')

        assert response.status_code == 401
        assert response.json()['error'] == 'Token não informado'


@pytest.mark.django_db
class TestEscritaProtegida:

    @pytest.fixture(autouse=True)
    def exigir_auth(self, settings):
        settings.API_REQUIRE_AUTH = True

    def test_escrita_sem_token(self, api_client, payload_evento):
        response = api_client.post_json('/api/events', payload_evento)

        assert response.status_code == 401
        assert response.json() == {'success': False, 'error': 'Token não informado'}

    def test_escrita_com_token_invalido(self, api_client, payload_evento):
        response = api_client.post_json('/api/events', payload_evento, **_bearer('lixo'))
        assert response.status_code == 401

    def test_escrita_com_token_registra_usuario(self, api_client, payload_evento, container):
        token, _ = container.emissor_tokens().emitir(USUARIO)

        response = api_client.post_json('/api/events', payload_evento, **_bearer(token))

        assert response.status_code == 201
        assert response.json()['data']['usuario'] == 'Admin'

    def test_leitura_continua_aberta(self, api_client):
        assert api_client.get('/api/events').status_code == 200

    def test_login_nao_exige_token(self, api_client, admin):
        response = api_client.post_json('/api/auth/login', {'email': 'admin@allure.com.br', 'password': 'segredo'})
        assert response.status_code == 200
