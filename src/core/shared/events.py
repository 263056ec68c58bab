"""
Domain Events - base para comunicação desacoplada.

Eventos são enfileirados no Unit of Work e publicados só depois do
commit. Handlers (síncronos ou Celery) reagem a eles, por exemplo
enviando o evento recém-criado para a planilha.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, ClassVar
import uuid


@dataclass(frozen=False)
class DomainEvent(ABC):
    """
    Classe base abstrata para Domain Events.

    Nomeados no passado (EventoCriado, não CriarEvento) e tratados
    como fatos imutáveis.

    Attributes:
        event_id: Identificador único do evento
        aggregate_id: ID do agregado que gerou o evento
        occurred_at: Momento em que o evento ocorreu
        version: Versão do schema do evento

    Example:
        @dataclass
        class EventoCriadoEvent(DomainEvent):
            nome: str = ""

            @property
            def aggregate_type(self) -> str:
                return "Evento"
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    aggregate_id: str = ""
    occurred_at: datetime = field(default_factory=datetime.now)
    version: int = 1

    _event_type: ClassVar[str] = ""

    def __post_init__(self):
        if not self.aggregate_id:
            raise ValueError("aggregate_id é obrigatório")
        self.aggregate_id = str(self.aggregate_id)

    @property
    @abstractmethod
    def aggregate_type(self) -> str:
        """Tipo do agregado que gerou o evento (ex: "Evento")."""
        ...

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializa evento para dicionário.

        Formato usado no transporte via Celery e no log estruturado.
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        base_fields = {"event_id", "aggregate_id", "occurred_at", "version"}
        return {
            key: value
            for key, value in self.__dict__.items()
            if key not in base_fields and not key.startswith("_")
        }

    def __repr__(self) -> str:
        return (
            f"{self.event_type}("
            f"event_id={self.event_id[:8]}..., "
            f"aggregate_id={self.aggregate_id}, "
            f"occurred_at={self.occurred_at.isoformat()}"
            f")"
        )
