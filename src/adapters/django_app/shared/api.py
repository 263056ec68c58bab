"""
Base das views JSON da API.

Formato:
- Entrada: JSON (exceto upload de imagem, multipart)
- Saída: ``{success, message?, data?, error?}``

Mapeamento de erros:
- ValidationError → 400
- AuthError → 401
- EntityNotFoundError → 404
- BusinessRuleViolationError → 422
- ConfiguracaoError / ServicoExternoError → 500 com a mensagem
- Erro inesperado → 500 "Erro interno do servidor" (+ ``message`` em DEBUG)
"""

import json
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.config.container import get_container
from src.core.auth.entities import UsuarioAutenticado
from src.core.shared.exceptions import (
    AuthError,
    BusinessRuleViolationError,
    ConfiguracaoError,
    DomainException,
    EntityNotFoundError,
    ServicoExternoError,
    ValidationError,
)

logger = logging.getLogger(__name__)

METODOS_ESCRITA = {"POST", "PUT", "PATCH", "DELETE"}


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  message: str = None, status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        message: Mensagem informativa
        status: HTTP status code
        meta: Metadados adicionais (ex.: campo inválido)
    """
    response = {'success': success}

    if message is not None:
        response['message'] = message

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status, json_dumps_params={'ensure_ascii': False})


def parse_json_body(request: HttpRequest) -> Dict[str, Any]:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: JSON inválido ou corpo que não é objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"JSON inválido: {e}")

    if not isinstance(data, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")
    return data


def get_bearer_token(request: HttpRequest) -> str:
    """Token do header ``Authorization: Bearer <token>`` (ou vazio)."""
    header = request.headers.get('Authorization', '')
    prefixo, _, token = header.partition(' ')
    if prefixo.lower() != 'bearer':
        return ''
    return token.strip()


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Autenticação opcional das escritas (API_REQUIRE_AUTH)
    - Tratamento de erros padronizado
    """

    usuario_api: Optional[UsuarioAutenticado] = None

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        try:
            self.autenticar(request)
        except Exception as e:
            return self.handle_exception(e)
        return super().dispatch(request, *args, **kwargs)

    def autenticar(self, request: HttpRequest) -> None:
        """
        Exige token válido nas escritas quando API_REQUIRE_AUTH=True.

        Raises:
            AuthError: Token ausente, inválido ou expirado
        """
        if request.method not in METODOS_ESCRITA:
            return
        if not getattr(settings, 'API_REQUIRE_AUTH', False):
            return
        self.usuario_api = self.get_service('validar_sessao_service').execute(
            get_bearer_token(request)
        )

    def get_container(self):
        """Retorna container de DI."""
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict[str, Any]:
        return parse_json_body(request)

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Args:
            e: Exceção capturada
        """
        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                error=str(e),
                status=400,
                meta={'field': e.field},
            )

        if isinstance(e, AuthError):
            return json_response(success=False, error=str(e), status=401)

        if isinstance(e, EntityNotFoundError):
            return json_response(success=False, error=str(e), status=404)

        if isinstance(e, BusinessRuleViolationError):
            return json_response(
                success=False,
                error=str(e),
                status=422,
                meta={'rule': e.rule},
            )

        if isinstance(e, (ConfiguracaoError, ServicoExternoError)):
            logger.error(f"Falha de integração: {e}")
            return json_response(success=False, error=str(e), status=500)

        if isinstance(e, DomainException):
            return json_response(success=False, error=str(e), status=400)

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            message=str(e) if settings.DEBUG else None,
            status=500,
        )
