"""
Interfaces (Ports) compartilhadas entre Core e Adapters.

- UnitOfWork: transação + fila de eventos publicada após commit
- EventPublisher: entrega de Domain Events (log, Celery, memória)

Core define interfaces; Adapters implementam.
"""

from abc import ABC, abstractmethod
from typing import List

from .events import DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Pattern: Context Manager
        with uow:
            repo.add(evento)
            uow.publish_event(EventoCriadoEvent(...))
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Eventos só são publicados após commit bem-sucedido; em rollback
    são descartados.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    @abstractmethod
    def _begin_transaction(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """Persiste as mudanças e publica os eventos enfileirados."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Desfaz as mudanças e descarta os eventos."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """Enfileira evento para publicação após commit."""
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        return list(self._events)

    def clear_events(self) -> None:
        self._events.clear()


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Example:
        class CeleryEventPublisher(EventPublisher):
            def publish(self, event):
                dispatch_domain_event.delay(event.event_type, event.to_dict())
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError
