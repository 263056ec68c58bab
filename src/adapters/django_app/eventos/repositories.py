"""
Repositório Django para persistência de Eventos.

DRIVEN ADAPTER: implementa o EventoRepository definido no Core
usando o ORM. A atualização parcial vira um único
``UPDATE ... SET <só as colunas informadas> WHERE id AND ativo``.
"""

from typing import Any, Dict, List, Optional
import logging

from django.db import connection
from django.utils import timezone

from src.core.eventos.entities import EventoEntity

from .mappers import EventoMapper
from .models import EventoModel

logger = logging.getLogger(__name__)


class DjangoEventoRepository:
    """
    Implementação Django do EventoRepository.

    Args:
        soft_delete: True marca ``ativo=False``; False apaga a linha

    Example:
        repo = DjangoEventoRepository()
        salvo = repo.add(EventoEntity.criar(...))
        repo.update_fields(salvo.id, {"descricao": "Nova"})
    """

    def __init__(self, soft_delete: bool = True):
        self.soft_delete = soft_delete

    def _ativos(self):
        return EventoModel.objects.filter(ativo=True)

    def add(self, evento: EventoEntity) -> EventoEntity:
        model = EventoMapper.to_model(evento)
        model.id = None
        model.ativo = True
        model.save()
        logger.debug(f"Evento salvo: {model.id}")
        return EventoMapper.to_entity(model)

    def get_by_id(self, evento_id: int) -> Optional[EventoEntity]:
        model = self._ativos().filter(id=evento_id).first()
        return EventoMapper.to_entity(model) if model else None

    def list_ativos(self) -> List[EventoEntity]:
        return EventoMapper.to_entity_list(
            self._ativos().order_by('-data_cadastro', '-id')
        )

    def list_by_data(self, data: str) -> List[EventoEntity]:
        return EventoMapper.to_entity_list(
            self._ativos().filter(data=data).order_by('hora_inicio', 'id')
        )

    def list_by_status(self, status: str) -> List[EventoEntity]:
        return EventoMapper.to_entity_list(
            self._ativos().filter(status=status).order_by('-data_cadastro', '-id')
        )

    def update_fields(self, evento_id: int, campos: Dict[str, Any]) -> Optional[EventoEntity]:
        colunas = EventoMapper.to_columns(campos)
        colunas['data_atualizacao'] = timezone.now()

        atualizados = self._ativos().filter(id=evento_id).update(**colunas)
        if not atualizados:
            return None

        logger.debug(f"Evento {evento_id} atualizado: {sorted(campos)}")
        return self.get_by_id(evento_id)

    def delete(self, evento_id: int) -> bool:
        consulta = self._ativos().filter(id=evento_id)
        if self.soft_delete:
            removidos = consulta.update(ativo=False, data_atualizacao=timezone.now())
        else:
            removidos, _ = consulta.delete()
        return removidos > 0

    def ping(self) -> None:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()

    def count(self) -> int:
        return self._ativos().count()
