"""
Data Transfer Objects (DTOs) do Domínio de Eventos.

O JSON da API usa camelCase (``horaInicio``, ``statusPersonalizado``);
a entidade usa snake_case. A conversão acontece só aqui.

- Input DTOs: dados de entrada vindos da API/formulário
- Output DTOs: representação de saída (``to_dict`` = JSON da API)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.core.shared.exceptions import ValidationError

from .entities import (
    EventoEntity,
    EventoStatus,
    FUSO_HORARIO_PADRAO,
    USUARIO_PADRAO,
    catalogo_to_dict,
)


# Nome no JSON → campo da entidade (campos editáveis)
CAMPOS_API = {
    "nome": "nome",
    "artista": "artista",
    "data": "data",
    "horaInicio": "hora_inicio",
    "horaTermino": "hora_termino",
    "fusoHorario": "fuso_horario",
    "status": "status",
    "statusPersonalizado": "status_personalizado",
    "endereco": "endereco",
    "descricao": "descricao",
    "ingressos": "ingressos",
}


def _texto(valor: Any) -> str:
    return valor if isinstance(valor, str) else ""


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarEventoInputDTO:
    """
    DTO de entrada para criar evento.

    ``ingressos`` fica no formato JSON ({categoria: [dict]}); a
    conversão para ``Ingresso`` é feita pelo use case.
    """

    nome: str
    artista: str
    data: str
    hora_inicio: str
    hora_termino: str = ""
    fuso_horario: str = FUSO_HORARIO_PADRAO
    status: str = EventoStatus.DISPONIVEL.value
    status_personalizado: Optional[str] = None
    endereco: str = ""
    descricao: str = ""
    ingressos: Dict[str, Any] = field(default_factory=dict)
    usuario: str = USUARIO_PADRAO

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], usuario: str = None) -> "CriarEventoInputDTO":
        """Constrói o DTO a partir do corpo JSON da API."""
        return cls(
            nome=_texto(payload.get("nome")),
            artista=_texto(payload.get("artista")),
            data=_texto(payload.get("data")),
            hora_inicio=_texto(payload.get("horaInicio")),
            hora_termino=_texto(payload.get("horaTermino")),
            fuso_horario=_texto(payload.get("fusoHorario")) or FUSO_HORARIO_PADRAO,
            status=_texto(payload.get("status")) or EventoStatus.DISPONIVEL.value,
            status_personalizado=_texto(payload.get("statusPersonalizado")) or None,
            endereco=_texto(payload.get("endereco")),
            descricao=_texto(payload.get("descricao")),
            ingressos=payload.get("ingressos") or {},
            usuario=usuario or _texto(payload.get("usuario")) or USUARIO_PADRAO,
        )

    def to_dict(self) -> dict:
        return {
            "nome": self.nome,
            "artista": self.artista,
            "data": self.data,
            "horaInicio": self.hora_inicio,
            "horaTermino": self.hora_termino,
            "fusoHorario": self.fuso_horario,
            "status": self.status,
            "statusPersonalizado": self.status_personalizado,
            "endereco": self.endereco,
            "descricao": self.descricao,
            "ingressos": self.ingressos,
            "usuario": self.usuario,
        }


@dataclass(frozen=True)
class AtualizarEventoInputDTO:
    """
    DTO de entrada para atualização parcial.

    Attributes:
        evento_id: ID do evento
        campos: Apenas os campos informados (nomes da entidade).
            Vazio significa "nada a alterar".
    """

    evento_id: int
    campos: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, evento_id: int, payload: Dict[str, Any]) -> "AtualizarEventoInputDTO":
        """
        Mantém só as chaves conhecidas presentes no corpo.

        Raises:
            ValidationError: Se o corpo não for um objeto JSON
        """
        if not isinstance(payload, dict):
            raise ValidationError("Corpo da requisição deve ser um objeto JSON")
        campos = {
            CAMPOS_API[chave]: valor
            for chave, valor in payload.items()
            if chave in CAMPOS_API
        }
        return cls(evento_id=evento_id, campos=campos)


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass(frozen=True)
class EventoOutputDTO:
    """DTO de saída com todos os dados do evento (formato da API)."""

    id: int
    nome: str
    artista: str
    data: str
    hora_inicio: str
    hora_termino: str
    fuso_horario: str
    status: str
    status_personalizado: Optional[str]
    status_efetivo: str
    endereco: str
    descricao: str
    ingressos: Dict[str, List[Dict[str, Any]]]
    data_cadastro: Optional[datetime]
    data_atualizacao: Optional[datetime]
    usuario: str
    ativo: bool

    @classmethod
    def from_entity(cls, entity: EventoEntity) -> "EventoOutputDTO":
        return cls(
            id=entity.id,
            nome=entity.nome,
            artista=entity.artista,
            data=entity.data,
            hora_inicio=entity.hora_inicio,
            hora_termino=entity.hora_termino,
            fuso_horario=entity.fuso_horario,
            status=entity.status.value,
            status_personalizado=entity.status_personalizado,
            status_efetivo=entity.status_efetivo,
            endereco=entity.endereco,
            descricao=entity.descricao,
            ingressos=catalogo_to_dict(entity.ingressos),
            data_cadastro=entity.data_cadastro,
            data_atualizacao=entity.data_atualizacao,
            usuario=entity.usuario,
            ativo=entity.ativo,
        )

    def to_dict(self) -> dict:
        """Converte para o JSON da API (camelCase)."""
        return {
            "id": self.id,
            "nome": self.nome,
            "artista": self.artista,
            "data": self.data,
            "horaInicio": self.hora_inicio,
            "horaTermino": self.hora_termino,
            "fusoHorario": self.fuso_horario,
            "status": self.status,
            "statusPersonalizado": self.status_personalizado,
            "statusEfetivo": self.status_efetivo,
            "endereco": self.endereco,
            "descricao": self.descricao,
            "ingressos": self.ingressos,
            "dataCadastro": self.data_cadastro.isoformat() if self.data_cadastro else None,
            "dataAtualizacao": self.data_atualizacao.isoformat() if self.data_atualizacao else None,
            "usuario": self.usuario,
            "ativo": self.ativo,
        }

