"""
Domain Events do agregado Evento.

- EventoCriadoEvent: evento cadastrado (pode disparar envio à planilha)
- EventoAtualizadoEvent: atualização parcial aplicada
- EventoRemovidoEvent: remoção lógica ou física
"""

from dataclasses import dataclass, field
from typing import List

from src.core.shared.events import DomainEvent


@dataclass(repr=False)
class EventoCriadoEvent(DomainEvent):
    """
    Disparado quando um evento é cadastrado.

    Attributes:
        nome: Nome do evento
        artista: Artista/banda
        data: Data (dd-mm-yyyy)
        status: Status efetivo
        total_ingressos: Quantidade de ingressos no catálogo
    """

    nome: str = ""
    artista: str = ""
    data: str = ""
    status: str = ""
    total_ingressos: int = 0

    @property
    def aggregate_type(self) -> str:
        return "Evento"


@dataclass(repr=False)
class EventoAtualizadoEvent(DomainEvent):
    """Disparado após atualização parcial; lista os campos gravados."""

    campos_alterados: List[str] = field(default_factory=list)

    @property
    def aggregate_type(self) -> str:
        return "Evento"


@dataclass(repr=False)
class EventoRemovidoEvent(DomainEvent):
    """Disparado após remoção. ``remocao`` é "logica" ou "fisica"."""

    remocao: str = "logica"

    @property
    def aggregate_type(self) -> str:
        return "Evento"
