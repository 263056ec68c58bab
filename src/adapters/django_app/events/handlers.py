"""
Event Handlers - Processadores de Eventos de Domínio.

Executados pelo Celery quando ``EVENT_PUBLISHER_MODE=celery``; no
modo ``sync`` o ``on_evento_criado`` roda no próprio processo.

Handlers:
- handle_evento_criado: envia o evento novo à planilha (se habilitado)
- handle_evento_atualizado / handle_evento_removido: registro em log
- dispatch_domain_event: roteia pelo tipo do evento

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>(self, event_data: dict) -> None:
        ...
"""

from typing import Any, Dict, Optional
import logging

from celery import shared_task
from django.conf import settings

from src.core.planilha.submissao import EstadoEnvio
from src.core.shared.events import DomainEvent
from src.core.shared.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class PlanilhaIndisponivel(Exception):
    """Planilha inacessível; o envio deve ser tentado de novo."""


def sincronizar_evento_com_planilha(evento_id: Any) -> Optional[Dict[str, Any]]:
    """
    Envia o evento persistido para a planilha.

    Returns:
        ``ResultadoEnvio.to_dict()``, ou None se o evento não existe mais
    """
    from src.config.container import get_container

    service = get_container().enviar_evento_planilha_service()
    try:
        resultado = service.execute(int(evento_id))
    except EntityNotFoundError:
        logger.warning(f"[HANDLER] Evento {evento_id} não existe mais; envio ignorado")
        return None

    if resultado.estado is EstadoEnvio.RECUPERADO_LOCALMENTE:
        raise PlanilhaIndisponivel(resultado.message)
    return resultado.to_dict()


def on_evento_criado(event: DomainEvent) -> None:
    """Handler síncrono (modo ``sync``)."""
    try:
        sincronizar_evento_com_planilha(event.aggregate_id)
    except PlanilhaIndisponivel as e:
        logger.warning(f"[HANDLER] Planilha indisponível para evento {event.aggregate_id}: {e}")


# =============================================================================
# Event Handlers - Eventos
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_evento_criado(self, event_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Handler para EventoCriadoEvent.

    Ações:
    - Enviar evento à planilha quando PLANILHA_ENVIAR_AO_CRIAR=True
    - Reagendar quando a planilha está inacessível
    """
    evento_id = event_data.get('aggregate_id')
    dados = event_data.get('data', {})

    logger.info(
        f"[HANDLER] EventoCriado: {evento_id} | "
        f"{dados.get('nome')} - {dados.get('artista')} ({dados.get('data')})"
    )

    if not getattr(settings, 'PLANILHA_ENVIAR_AO_CRIAR', False):
        return None

    try:
        return sincronizar_evento_com_planilha(evento_id)
    except PlanilhaIndisponivel as e:
        raise self.retry(exc=e)


@shared_task(bind=True, acks_late=True)
def handle_evento_atualizado(self, event_data: Dict[str, Any]) -> None:
    """Handler para EventoAtualizadoEvent."""
    dados = event_data.get('data', {})
    logger.info(
        f"[HANDLER] EventoAtualizado: {event_data.get('aggregate_id')} | "
        f"campos={dados.get('campos_alterados', [])}"
    )


@shared_task(bind=True, acks_late=True)
def handle_evento_removido(self, event_data: Dict[str, Any]) -> None:
    """Handler para EventoRemovidoEvent."""
    dados = event_data.get('data', {})
    logger.info(
        f"[HANDLER] EventoRemovido: {event_data.get('aggregate_id')} | "
        f"remocao={dados.get('remocao')}"
    )


# =============================================================================
# Dispatcher
# =============================================================================

EVENT_HANDLERS = {
    'EventoCriadoEvent': handle_evento_criado,
    'EventoAtualizadoEvent': handle_evento_atualizado,
    'EventoRemovidoEvent': handle_evento_removido,
}


@shared_task(bind=True, acks_late=True)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Roteia um evento serializado para o handler do seu tipo.

    Args:
        event_type: Nome da classe do evento
        event_data: ``DomainEvent.to_dict()``
    """
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.warning(f"[DISPATCH] Sem handler para {event_type}")
        return
    handler.delay(event_data)
