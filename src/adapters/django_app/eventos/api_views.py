"""
API Views JSON para o domínio de Eventos.

Endpoints:
- GET /api/events - Listar eventos ativos
- POST /api/events - Criar evento
- GET /api/events/<id> - Obter evento
- PUT /api/events/<id> - Atualizar evento (parcial)
- DELETE /api/events/<id> - Remover evento
- GET /api/events/date/<data> - Eventos do dia (dd-mm-yyyy)
- GET /api/events/status/<status> - Eventos por status
- POST /api/events/<id>/sheet - Enviar evento para a planilha
- POST /api/ai/extract-from-image - Extrair dados de imagem (multipart ``image``)
- POST /api/ai/extract-from-text - Extrair dados de texto (``{"text": ...}``)
- GET /health - Health check do banco
- GET / - Informações da API
"""

import logging
import time
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt

from src.adapters.django_app.shared.api import BaseAPIView, json_response
from src.core.eventos.dtos import AtualizarEventoInputDTO, CriarEventoInputDTO
from src.core.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)

VERSAO_API = '1.0.0'


def parse_evento_id(pk: Any) -> int:
    """
    Raises:
        ValidationError: ID não numérico
    """
    try:
        return int(pk)
    except (TypeError, ValueError):
        raise ValidationError("ID inválido", field="id")


# =============================================================================
# Evento API Views
# =============================================================================

class EventoAPIListView(BaseAPIView):
    """
    GET /api/events - Lista eventos ativos (mais recentes primeiro)
    POST /api/events - Cria evento
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            eventos = self.get_service('listar_eventos_service').execute()
            return json_response(success=True, data=[e.to_dict() for e in eventos])
        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Body JSON:
        {
            "nome": "string (obrigatório)",
            "artista": "string (obrigatório)",
            "data": "dd-mm-yyyy (obrigatório)",
            "horaInicio": "HH:mm (obrigatório)",
            "horaTermino", "fusoHorario", "status", "statusPersonalizado",
            "endereco", "descricao": opcionais,
            "ingressos": {"categoria": [{"id", "nome", "preco", "descricao"}]}
        }
        """
        try:
            data = self.parse_body(request)
            usuario = self.usuario_api.nome if self.usuario_api else None

            output = self.get_service('criar_evento_service').execute(
                CriarEventoInputDTO.from_payload(data, usuario=usuario)
            )

            logger.info(f"API: Evento criado: {output.id}")

            return json_response(
                success=True,
                message="Evento criado com sucesso",
                data=output.to_dict(),
                status=201,
            )
        except Exception as e:
            return self.handle_exception(e)


class EventoAPIDetailView(BaseAPIView):
    """
    GET /api/events/<id> - Obter evento
    PUT /api/events/<id> - Atualizar campos informados
    DELETE /api/events/<id> - Remover evento
    """

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            evento = self.get_service('obter_evento_service').execute(parse_evento_id(pk))
            return json_response(success=True, data=evento.to_dict())
        except Exception as e:
            return self.handle_exception(e)

    def put(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            evento_id = parse_evento_id(pk)
            data = self.parse_body(request)

            output = self.get_service('atualizar_evento_service').execute(
                AtualizarEventoInputDTO.from_payload(evento_id, data)
            )

            return json_response(
                success=True,
                message="Evento atualizado com sucesso",
                data=output.to_dict(),
            )
        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            evento_id = parse_evento_id(pk)
            self.get_service('remover_evento_service').execute(evento_id)

            logger.info(f"API: Evento {evento_id} removido")

            return json_response(success=True, message="Evento deletado com sucesso")
        except Exception as e:
            return self.handle_exception(e)


class EventosPorDataView(BaseAPIView):
    """GET /api/events/date/<data> - Eventos do dia, por horário de início."""

    def get(self, request: HttpRequest, data: str) -> JsonResponse:
        try:
            eventos = self.get_service('listar_eventos_service').execute(data=data)
            return json_response(success=True, data=[e.to_dict() for e in eventos])
        except Exception as e:
            return self.handle_exception(e)


class EventosPorStatusView(BaseAPIView):
    """GET /api/events/status/<status> - Eventos com o status informado."""

    def get(self, request: HttpRequest, status: str) -> JsonResponse:
        try:
            eventos = self.get_service('listar_eventos_service').execute(status=status)
            return json_response(success=True, data=[e.to_dict() for e in eventos])
        except Exception as e:
            return self.handle_exception(e)


class EnviarPlanilhaView(BaseAPIView):
    """
    POST /api/events/<id>/sheet

    Resposta: ``ResultadoEnvio.to_dict()``. O status HTTP é 200
    mesmo quando o envio falhou; ``success``/``estado`` informam.
    """

    def post(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            resultado = self.get_service('enviar_evento_planilha_service').execute(
                parse_evento_id(pk)
            )
            return JsonResponse(resultado.to_dict(), json_dumps_params={'ensure_ascii': False})
        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Extração com IA
# =============================================================================

class ExtrairDeImagemView(BaseAPIView):
    """POST /api/ai/extract-from-image (multipart, campo ``image``)."""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            service = self.get_service('extrair_dados_evento_service')
            imagem = request.FILES.get('image')
            conteudo = content_type = None
            if imagem:
                service.validar_tamanho_imagem(imagem.size)
                conteudo = imagem.read()
                content_type = imagem.content_type

            dados = service.extrair_de_imagem(conteudo, content_type)

            return json_response(
                success=True,
                message="Dados extraídos com sucesso",
                data=dados,
            )
        except Exception as e:
            return self.handle_exception(e)


class ExtrairDeTextoView(BaseAPIView):
    """POST /api/ai/extract-from-text ``{"text": "..."}``."""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)

            dados = self.get_service('extrair_dados_evento_service').extrair_de_texto(
                data.get('text')
            )

            return json_response(
                success=True,
                message="Dados extraídos com sucesso",
                data=dados,
            )
        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Operação
# =============================================================================

class HealthView(BaseAPIView):
    """GET /health - Verifica o acesso ao banco."""

    def get(self, request: HttpRequest) -> JsonResponse:
        inicio = time.monotonic()
        try:
            self.get_service('evento_repository').ping()
        except Exception as e:
            duracao = int((time.monotonic() - inicio) * 1000)
            logger.error(f"[HEALTH] Falha ao conectar no banco ({duracao}ms): {e}")
            return JsonResponse({
                'status': 'error',
                'timestamp': timezone.now().isoformat(),
                'database': 'disconnected',
                'responseTime': f'{duracao}ms',
                'error': str(e),
            }, status=500)

        duracao = int((time.monotonic() - inicio) * 1000)
        logger.debug(f"[HEALTH] Banco conectado ({duracao}ms)")
        return JsonResponse({
            'status': 'ok',
            'timestamp': timezone.now().isoformat(),
            'database': 'connected',
            'responseTime': f'{duracao}ms',
        })


class InfoView(BaseAPIView):
    """GET / - Informações da API."""

    def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({
            'message': 'API Allure Eventos - Backend funcionando',
            'version': VERSAO_API,
            'endpoints': {
                'health': '/health',
                'events': '/api/events',
                'createEvent': 'POST /api/events',
                'getEvent': 'GET /api/events/<id>',
                'updateEvent': 'PUT /api/events/<id>',
                'deleteEvent': 'DELETE /api/events/<id>',
                'sendToSheet': 'POST /api/events/<id>/sheet',
                'extractFromImage': 'POST /api/ai/extract-from-image',
                'extractFromText': 'POST /api/ai/extract-from-text',
                'login': 'POST /api/auth/login',
            },
        })


@csrf_exempt
def rota_nao_encontrada(request: HttpRequest, *args, **kwargs) -> JsonResponse:
    """Resposta para rotas inexistentes sob /api/."""
    return json_response(success=False, error="Rota não encontrada", status=404)
