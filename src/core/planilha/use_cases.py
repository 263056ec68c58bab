"""
Use Cases da integração com a planilha.

- EnviarEventoParaPlanilhaService: envia um evento já cadastrado
"""

import logging

from src.core.eventos.dtos import EventoOutputDTO
from src.core.eventos.ports import EventoRepository
from src.core.shared.exceptions import EntityNotFoundError

from .submissao import ResultadoEnvio, SubmissaoPlanilhaService

logger = logging.getLogger(__name__)


class EnviarEventoParaPlanilhaService:
    """
    Use Case: enviar evento persistido para a planilha.

    Usado pelo endpoint ``POST /api/events/<id>/sheet`` e pelo handler
    de ``EventoCriadoEvent`` quando o envio automático está ativo.
    """

    def __init__(self, evento_repo: EventoRepository, submissao: SubmissaoPlanilhaService):
        self.evento_repo = evento_repo
        self.submissao = submissao

    def execute(self, evento_id: int) -> ResultadoEnvio:
        """
        Raises:
            EntityNotFoundError: Evento inexistente ou inativo
        """
        evento = self.evento_repo.get_by_id(evento_id)
        if evento is None:
            raise EntityNotFoundError(
                "Evento não encontrado",
                entity_type="Evento",
                entity_id=evento_id,
            )
        return self.submissao.submeter(EventoOutputDTO.from_entity(evento).to_dict())
