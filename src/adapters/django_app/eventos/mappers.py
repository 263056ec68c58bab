"""
Mappers entre EventoEntity (Core) e EventoModel (Django).

Responsabilidades:
- to_model(): Entity → Model
- to_entity(): Model → Entity
- to_columns(): alterações parciais da entidade → colunas do UPDATE
- Catálogo de ingressos ↔ texto JSON na fronteira do armazenamento
"""

from typing import Any, Dict, List
import json
import logging

from src.core.eventos.entities import (
    Catalogo,
    EventoEntity,
    EventoStatus,
    catalogo_from_dict,
    catalogo_to_dict,
)

from .models import EventoModel

logger = logging.getLogger(__name__)


def ingressos_para_texto(catalogo: Catalogo) -> str:
    return json.dumps(catalogo_to_dict(catalogo), ensure_ascii=False)


def ingressos_de_texto(valor: Any) -> Catalogo:
    """
    Decodifica ``ingressos`` do banco.

    Idempotente: aceita texto JSON ou estrutura já decodificada.
    Conteúdo corrompido vira catálogo vazio (com log).
    """
    if valor in (None, ""):
        return {}
    if isinstance(valor, (str, bytes)):
        try:
            valor = json.loads(valor)
        except ValueError:
            logger.error(f"Ingressos com JSON inválido no banco: {valor[:100]!r}")
            return {}
    return catalogo_from_dict(valor)


class EventoMapper:
    """Mapper stateless entre entidade e model."""

    @staticmethod
    def to_model(entity: EventoEntity) -> EventoModel:
        """Não chama .save() - isso fica com o Repository."""
        return EventoModel(
            id=entity.id,
            nome=entity.nome,
            artista=entity.artista,
            data=entity.data,
            hora_inicio=entity.hora_inicio,
            hora_termino=entity.hora_termino,
            fuso_horario=entity.fuso_horario,
            status=entity.status.value,
            status_personalizado=entity.status_personalizado,
            endereco=entity.endereco,
            descricao=entity.descricao,
            ingressos=ingressos_para_texto(entity.ingressos),
            usuario=entity.usuario,
            ativo=entity.ativo,
        )

    @staticmethod
    def to_entity(model: EventoModel) -> EventoEntity:
        return EventoEntity(
            id=model.id,
            nome=model.nome,
            artista=model.artista,
            data=model.data,
            hora_inicio=model.hora_inicio,
            hora_termino=model.hora_termino or "",
            fuso_horario=model.fuso_horario,
            status=EventoStatus.from_string(model.status),
            status_personalizado=model.status_personalizado,
            endereco=model.endereco or "",
            descricao=model.descricao or "",
            ingressos=ingressos_de_texto(model.ingressos),
            data_cadastro=model.data_cadastro,
            data_atualizacao=model.data_atualizacao,
            usuario=model.usuario,
            ativo=model.ativo,
        )

    @staticmethod
    def to_entity_list(models: List[EventoModel]) -> List[EventoEntity]:
        return [EventoMapper.to_entity(m) for m in models]

    @staticmethod
    def to_columns(alteracoes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Converte alterações validadas em atribuições de coluna.

        Example:
            to_columns({"status": EventoStatus.ESGOTADO})
            # {"status": "esgotado"}
        """
        colunas: Dict[str, Any] = {}
        for campo, valor in alteracoes.items():
            if campo == "status":
                valor = valor.value
            elif campo == "ingressos":
                valor = ingressos_para_texto(valor)
            colunas[campo] = valor
        return colunas
