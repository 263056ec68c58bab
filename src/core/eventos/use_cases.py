"""
Use Cases (Application Services) do Domínio de Eventos.

Use Cases implementados:
- CriarEventoService: Cadastra evento
- ListarEventosService: Lista eventos ativos (com filtro por data/status)
- ObterEventoService: Obtém evento ativo por ID
- AtualizarEventoService: Atualização parcial
- RemoverEventoService: Remoção lógica (padrão) ou física
- ExtrairDadosEventoService: Extração de campos via IA (imagem/texto)

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (repositório, UoW, extrator)
- Erros sempre como exceções de domínio
"""

from typing import Any, Dict, List, Optional
import logging

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import EntityNotFoundError, ValidationError

from .dtos import (
    AtualizarEventoInputDTO,
    CriarEventoInputDTO,
    EventoOutputDTO,
)
from .entities import EventoEntity, EventoStatus, catalogo_from_dict
from .events import EventoAtualizadoEvent, EventoCriadoEvent, EventoRemovidoEvent
from .ports import EventoRepository, ExtratorDadosEvento

logger = logging.getLogger(__name__)

TAMANHO_MAXIMO_IMAGEM = 10 * 1024 * 1024


def _nao_encontrado(evento_id: Any) -> EntityNotFoundError:
    return EntityNotFoundError(
        "Evento não encontrado",
        entity_type="Evento",
        entity_id=evento_id,
    )


class CriarEventoService:
    """
    Use Case: Cadastrar um novo evento.

    Fluxo:
    1. Converter status e catálogo de ingressos
    2. Criar entidade (validações na entidade)
    3. Persistir via repositório (id atribuído pelo armazenamento)
    4. Disparar EventoCriadoEvent (publicado após commit)

    Example:
        service = CriarEventoService(evento_repo, uow)
        output = service.execute(CriarEventoInputDTO(
            nome="Show Teste",
            artista="Banda X",
            data="24-09-2025",
            hora_inicio="20:00",
        ))
        print(output.id)
    """

    def __init__(self, evento_repo: EventoRepository, uow: UnitOfWork):
        self.evento_repo = evento_repo
        self.uow = uow

    def execute(self, input_dto: CriarEventoInputDTO) -> EventoOutputDTO:
        """
        Raises:
            ValidationError: Campos obrigatórios, data, status ou ingressos
        """
        with self.uow:
            try:
                status = EventoStatus.from_string(input_dto.status)
            except ValueError as e:
                raise ValidationError(str(e), field="status")

            evento = EventoEntity.criar(
                nome=input_dto.nome,
                artista=input_dto.artista,
                data=input_dto.data,
                hora_inicio=input_dto.hora_inicio,
                hora_termino=input_dto.hora_termino,
                fuso_horario=input_dto.fuso_horario,
                status=status,
                status_personalizado=input_dto.status_personalizado,
                endereco=input_dto.endereco,
                descricao=input_dto.descricao,
                ingressos=catalogo_from_dict(input_dto.ingressos),
                usuario=input_dto.usuario,
            )

            evento = self.evento_repo.add(evento)

            self.uow.publish_event(
                EventoCriadoEvent(
                    aggregate_id=str(evento.id),
                    nome=evento.nome,
                    artista=evento.artista,
                    data=evento.data,
                    status=evento.status_efetivo,
                    total_ingressos=evento.total_ingressos,
                )
            )

        logger.info(f"Evento criado: {evento.id} ({evento.nome})")
        return EventoOutputDTO.from_entity(evento)


class ListarEventosService:
    """
    Use Case: Listar eventos ativos.

    Sem filtro: todos, mais recentes primeiro.
    Com ``data``: eventos do dia, por horário de início.
    Com ``status``: eventos com o status, mais recentes primeiro.
    """

    def __init__(self, evento_repo: EventoRepository):
        self.evento_repo = evento_repo

    def execute(
        self,
        data: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[EventoOutputDTO]:
        if data:
            eventos = self.evento_repo.list_by_data(data)
        elif status:
            eventos = self.evento_repo.list_by_status(status)
        else:
            eventos = self.evento_repo.list_ativos()
        return [EventoOutputDTO.from_entity(e) for e in eventos]


class ObterEventoService:
    """Use Case: Obter evento ativo por ID."""

    def __init__(self, evento_repo: EventoRepository):
        self.evento_repo = evento_repo

    def execute(self, evento_id: int) -> EventoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Evento inexistente ou inativo
        """
        evento = self.evento_repo.get_by_id(evento_id)
        if evento is None:
            raise _nao_encontrado(evento_id)
        return EventoOutputDTO.from_entity(evento)


class AtualizarEventoService:
    """
    Use Case: Atualização parcial de evento.

    Apenas os campos informados viram atribuições de coluna. Sem
    campos, devolve o evento atual sem tocar no armazenamento.
    Concorrência: a última escrita vence.
    """

    def __init__(self, evento_repo: EventoRepository, uow: UnitOfWork):
        self.evento_repo = evento_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarEventoInputDTO) -> EventoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Evento inexistente ou inativo
            ValidationError: Algum campo informado inválido
        """
        with self.uow:
            existente = self.evento_repo.get_by_id(input_dto.evento_id)
            if existente is None:
                raise _nao_encontrado(input_dto.evento_id)

            if not input_dto.campos:
                return EventoOutputDTO.from_entity(existente)

            alteracoes = existente.validar_alteracoes(input_dto.campos)
            atualizado = self.evento_repo.update_fields(input_dto.evento_id, alteracoes)
            if atualizado is None:
                raise _nao_encontrado(input_dto.evento_id)

            self.uow.publish_event(
                EventoAtualizadoEvent(
                    aggregate_id=str(atualizado.id),
                    campos_alterados=sorted(alteracoes),
                )
            )

        logger.info(
            f"Evento atualizado: {atualizado.id} | campos={sorted(alteracoes)}"
        )
        return EventoOutputDTO.from_entity(atualizado)


class RemoverEventoService:
    """
    Use Case: Remover evento.

    O tipo de remoção (lógica ``ativo=False`` ou física) é decidido
    pelo repositório configurado.
    """

    def __init__(self, evento_repo: EventoRepository, uow: UnitOfWork, soft_delete: bool = True):
        self.evento_repo = evento_repo
        self.uow = uow
        self.soft_delete = soft_delete

    def execute(self, evento_id: int) -> None:
        """
        Raises:
            EntityNotFoundError: Evento inexistente ou já removido
        """
        with self.uow:
            if not self.evento_repo.delete(evento_id):
                raise _nao_encontrado(evento_id)

            self.uow.publish_event(
                EventoRemovidoEvent(
                    aggregate_id=str(evento_id),
                    remocao="logica" if self.soft_delete else "fisica",
                )
            )

        logger.info(f"Evento removido: {evento_id}")


class ExtrairDadosEventoService:
    """
    Use Case: Extrair dados de evento com IA.

    Valida a entrada e delega ao extrator. O resultado é o JSON
    "melhor esforço" do modelo; a normalização dos ingressos fica
    com quem preenche o formulário (ver ``formulario.py``).
    """

    def __init__(self, extrator: ExtratorDadosEvento, tamanho_maximo: int = TAMANHO_MAXIMO_IMAGEM):
        self.extrator = extrator
        self.tamanho_maximo = tamanho_maximo

    def extrair_de_imagem(self, conteudo: Optional[bytes], content_type: Optional[str]) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: Sem imagem, tipo não suportado ou acima do limite
        """
        if not conteudo:
            raise ValidationError("Nenhuma imagem foi enviada", field="image")
        if not (content_type or "").startswith("image/"):
            raise ValidationError("Apenas imagens são permitidas", field="image")
        self.validar_tamanho_imagem(len(conteudo))

        logger.info(f"Extraindo dados de imagem ({content_type}, {len(conteudo)} bytes)")
        return self.extrator.extrair_de_imagem(conteudo, content_type)

    def validar_tamanho_imagem(self, tamanho: int) -> None:
        """Rejeita upload acima do limite antes de ler o conteúdo."""
        if tamanho > self.tamanho_maximo:
            limite_mb = self.tamanho_maximo // (1024 * 1024)
            raise ValidationError(
                f"Imagem excede o limite de {limite_mb}MB",
                field="image",
            )

    def extrair_de_texto(self, texto: Any) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: Texto ausente ou não textual
        """
        if not isinstance(texto, str) or not texto.strip():
            raise ValidationError("Texto não foi fornecido", field="text")

        logger.info(f"Extraindo dados de texto ({len(texto)} caracteres)")
        return self.extrator.extrair_de_texto(texto)
