"""
Unit of Work - Implementação Django.

Envolve as operações de um use case em ``transaction.atomic`` e só
publica os Domain Events depois que o bloco atômico confirma. Dentro
de uma transação externa (ex.: testes), o bloco vira um savepoint.
"""

from typing import List, Optional
import logging

from django.db import transaction

from src.core.shared.interfaces import EventPublisher, UnitOfWork
from src.core.shared.events import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Example:
        with DjangoUnitOfWork(event_publisher=publisher) as uow:
            repo.add(evento)
            uow.publish_event(EventoCriadoEvent(...))
        # Commit + eventos publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            repo.add(evento)
            raise ValidationError("...")
        # Rollback, eventos descartados
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        super().__init__()
        self._event_publisher = event_publisher
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Confirma o bloco atômico e publica os eventos.

        Raises:
            Exception: Se o commit falhar (eventos são descartados)
        """
        if self._atomic is None:
            return
        atomic, self._atomic = self._atomic, None
        try:
            atomic.__exit__(None, None, None)
        except Exception as e:
            logger.error(f"Commit failed: {e}")
            self._rolled_back = True
            self.clear_events()
            raise

        self._committed = True
        logger.debug("Transaction committed")
        self._publish_events()

    def rollback(self) -> None:
        if self._atomic is None:
            return
        atomic, self._atomic = self._atomic, None
        erro = RuntimeError("Unit of Work rollback")
        atomic.__exit__(RuntimeError, erro, None)
        self._rolled_back = True
        self.clear_events()
        logger.debug("Transaction rolled back")

    def _publish_events(self) -> None:
        """
        Publica eventos pendentes.

        Falha de publicação é logada e não desfaz a operação já
        confirmada.
        """
        eventos: List[DomainEvent] = self.collect_events()
        self.clear_events()
        for event in eventos:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )
            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception as e:
                    logger.error(f"Failed to publish event: {e}", exc_info=True)

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self):
        super().__init__()
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        pass

    def commit(self) -> None:
        self._committed = True
        self._published_events.extend(self._events)
        self.clear_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events
