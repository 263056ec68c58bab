"""
Ports (Interfaces) do Domínio de Eventos.

- EventoRepository: persistência de eventos (apenas ativos são visíveis)
- ExtratorDadosEvento: extração de campos a partir de imagem/texto (IA)

Implementações:
- DjangoEventoRepository (ORM) em src/adapters/django_app/eventos
- InMemoryEventoRepository (testes) neste módulo
- OpenAIEventoExtractor em src/adapters/ai
"""

from dataclasses import replace
from datetime import datetime
from itertools import count
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .entities import EventoEntity


@runtime_checkable
class EventoRepository(Protocol):
    """
    Interface para persistência de Eventos.

    Todas as leituras enxergam apenas eventos ativos. Ausência é
    sinalizada com ``None``/``False``, nunca com exceção.
    """

    def add(self, evento: EventoEntity) -> EventoEntity:
        """
        Persiste evento novo.

        Returns:
            Entidade com ``id`` e timestamps atribuídos pelo armazenamento
        """
        ...

    def get_by_id(self, evento_id: int) -> Optional[EventoEntity]:
        ...

    def list_ativos(self) -> List[EventoEntity]:
        """Eventos ativos, mais recentes primeiro (data_cadastro desc)."""
        ...

    def list_by_data(self, data: str) -> List[EventoEntity]:
        """Eventos ativos de uma data (dd-mm-yyyy), por hora_inicio asc."""
        ...

    def list_by_status(self, status: str) -> List[EventoEntity]:
        """Eventos ativos com o status, data_cadastro desc."""
        ...

    def update_fields(self, evento_id: int, campos: Dict[str, Any]) -> Optional[EventoEntity]:
        """
        Atualização parcial: só os campos informados são gravados.

        Returns:
            Entidade atualizada, ou None se inexistente/inativo
        """
        ...

    def delete(self, evento_id: int) -> bool:
        """
        Remove evento (lógica ou física, conforme a implementação).

        Returns:
            True se algum evento ativo foi removido
        """
        ...

    def ping(self) -> None:
        """Verifica se o armazenamento responde (lança se não)."""
        ...


class ExtratorDadosEvento(Protocol):
    """
    Extrai dados estruturados de um evento via modelo de linguagem.

    Retorna o dicionário "melhor esforço" do modelo (nome, local,
    data, horaInicio, horaFim, status, endereco, descricao, ingressos).

    Raises:
        ConfiguracaoError: Integração sem chave válida
        ServicoExternoError: Falha da API ou resposta ilegível
    """

    def extrair_de_imagem(self, conteudo: bytes, content_type: str) -> Dict[str, Any]:
        ...

    def extrair_de_texto(self, texto: str) -> Dict[str, Any]:
        ...


class InMemoryEventoRepository:
    """
    Implementação em memória do EventoRepository.

    Útil para testes unitários e prototipagem. Não usar em produção!

    Example:
        repo = InMemoryEventoRepository()
        salvo = repo.add(evento)
        assert repo.get_by_id(salvo.id) == salvo
    """

    def __init__(self, soft_delete: bool = True):
        self._eventos: Dict[int, EventoEntity] = {}
        self._ids = count(1)
        self._soft_delete = soft_delete

    def add(self, evento: EventoEntity) -> EventoEntity:
        agora = datetime.now()
        salvo = replace(
            evento,
            id=next(self._ids),
            data_cadastro=agora,
            data_atualizacao=agora,
            ativo=True,
        )
        self._eventos[salvo.id] = salvo
        return salvo

    def get_by_id(self, evento_id: int) -> Optional[EventoEntity]:
        evento = self._eventos.get(evento_id)
        return evento if evento and evento.ativo else None

    def _ativos(self) -> List[EventoEntity]:
        return [e for e in self._eventos.values() if e.ativo]

    def list_ativos(self) -> List[EventoEntity]:
        return sorted(
            self._ativos(),
            key=lambda e: (e.data_cadastro, e.id),
            reverse=True,
        )

    def list_by_data(self, data: str) -> List[EventoEntity]:
        return sorted(
            (e for e in self._ativos() if e.data == data),
            key=lambda e: e.hora_inicio,
        )

    def list_by_status(self, status: str) -> List[EventoEntity]:
        return [e for e in self.list_ativos() if e.status.value == status]

    def update_fields(self, evento_id: int, campos: Dict[str, Any]) -> Optional[EventoEntity]:
        atual = self.get_by_id(evento_id)
        if atual is None:
            return None
        atualizado = replace(atual, data_atualizacao=datetime.now(), **campos)
        self._eventos[evento_id] = atualizado
        return atualizado

    def delete(self, evento_id: int) -> bool:
        if self.get_by_id(evento_id) is None:
            return False
        if self._soft_delete:
            self._eventos[evento_id] = replace(self._eventos[evento_id], ativo=False)
        else:
            del self._eventos[evento_id]
        return True

    def ping(self) -> None:
        pass

    def count(self) -> int:
        return len(self._ativos())
