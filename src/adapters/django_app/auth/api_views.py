"""
API de autenticação.

Endpoints:
- POST /api/auth/login - ``{"email", "password"}`` → sessão com token
- GET /api/auth/session - Usuário do token ``Authorization: Bearer``
"""

from django.http import HttpRequest, JsonResponse

from src.adapters.django_app.shared.api import BaseAPIView, get_bearer_token, json_response
from src.core.auth.entities import Credenciais


class LoginAPIView(BaseAPIView):
    """POST /api/auth/login"""

    def autenticar(self, request: HttpRequest) -> None:
        pass

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            credenciais = Credenciais.from_payload(self.parse_body(request))
            sessao = self.get_service('autenticar_usuario_service').execute(credenciais)
            return json_response(success=True, message="Login realizado", data=sessao.to_dict())
        except Exception as e:
            return self.handle_exception(e)


class SessaoAPIView(BaseAPIView):
    """GET /api/auth/session"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            usuario = self.get_service('validar_sessao_service').execute(get_bearer_token(request))
            return json_response(success=True, data=usuario.to_dict())
        except Exception as e:
            return self.handle_exception(e)
