"""
Event Publishers - Publicadores de Eventos de Domínio.

Implementações:
- LoggingEventPublisher: loga e executa handlers locais (modo ``sync``)
- CeleryEventPublisher: despacha para workers (modo ``celery``)
- InMemoryEventPublisher: para testes
"""

from typing import Callable, Dict, List
import json
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


class _HandlerRegistry:
    """Handlers síncronos por tipo de evento."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}

    def register_handler(self, event_type: str, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def _dispatch_to_handlers(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Erro em handler para {event.event_type}: {e}", exc_info=True)


class LoggingEventPublisher(_HandlerRegistry, EventPublisher):
    """
    Publisher que loga eventos e roda handlers no próprio processo.

    Usado em desenvolvimento e quando não há broker.
    """

    def __init__(self, log_level: int = logging.INFO):
        super().__init__()
        self._log_level = log_level

    def publish(self, event: DomainEvent) -> None:
        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event.to_dict(), default=str, ensure_ascii=False)}"
        )
        self._dispatch_to_handlers(event)


class CeleryEventPublisher(EventPublisher):
    """Publisher que envia eventos para o Celery."""

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )

        from src.adapters.django_app.events.handlers import dispatch_domain_event

        try:
            dispatch_domain_event.delay(event.event_type, event.to_dict())
        except Exception as e:
            # broker fora do ar não quebra a requisição que já foi confirmada
            logger.error(f"Falha ao publicar evento no Celery: {e}", exc_info=True)


class InMemoryEventPublisher(_HandlerRegistry, EventPublisher):
    """Publisher em memória: guarda os eventos para asserções."""

    def __init__(self):
        super().__init__()
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)
        self._dispatch_to_handlers(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]

    def clear(self) -> None:
        self._published_events.clear()


def get_event_publisher(use_celery: bool = False, enviar_planilha: bool = False) -> EventPublisher:
    """
    Factory do publisher configurado.

    Args:
        use_celery: Despachar eventos para workers Celery
        enviar_planilha: No modo síncrono, enviar evento criado à planilha
    """
    if use_celery:
        return CeleryEventPublisher()

    publisher = LoggingEventPublisher()
    if enviar_planilha:
        from src.adapters.django_app.events.handlers import on_evento_criado

        publisher.register_handler("EventoCriadoEvent", on_evento_criado)
    return publisher
