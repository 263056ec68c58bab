"""
Testes Unitários para Use Cases do Domínio de Eventos.

Usa o repositório e o Unit of Work em memória: nenhum banco
envolvido.

Coverage:
- CriarEventoService
- ListarEventosService (todos, por data, por status)
- ObterEventoService
- AtualizarEventoService (atualização parcial)
- RemoverEventoService (lógica e física)
- ExtrairDadosEventoService (validação de entrada)
"""

from unittest.mock import Mock

import pytest

from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from src.core.eventos.dtos import AtualizarEventoInputDTO, CriarEventoInputDTO
from src.core.eventos.entities import EventoStatus
from src.core.eventos.events import (
    EventoAtualizadoEvent,
    EventoCriadoEvent,
    EventoRemovidoEvent,
)
from src.core.eventos.ports import InMemoryEventoRepository
from src.core.eventos.use_cases import (
    AtualizarEventoService,
    CriarEventoService,
    ExtrairDadosEventoService,
    ListarEventosService,
    ObterEventoService,
    RemoverEventoService,
)
from src.core.shared.exceptions import EntityNotFoundError, ValidationError


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def repo():
    return InMemoryEventoRepository()


@pytest.fixture
def uow():
    return InMemoryUnitOfWork()


@pytest.fixture
def criar(repo, uow):
    """Cria evento pelo use case, com defaults sobrescrevíveis."""
    service = CriarEventoService(repo, uow)

    def _criar(**kwargs):
        dados = dict(
            nome="Show Teste",
            artista="Banda X",
            data="24-09-2025",
            hora_inicio="20:00",
        )
        dados.update(kwargs)
        return service.execute(CriarEventoInputDTO(**dados))

    return _criar


INGRESSOS = {
    "setores_mesa": [{"id": "m1", "nome": "Mesa A", "preco": 400, "descricao": "4 lugares"}],
    "camarotes_premium": [{"id": "v1", "nome": "VIP", "preco": 1500, "descricao": ""}],
}


# =============================================================================
# CriarEventoService
# =============================================================================

class TestCriarEventoService:

    def test_cria_e_atribui_id(self, criar, repo):
        output = criar(ingressos=INGRESSOS)

        assert output.id == 1
        assert output.ativo is True
        assert output.ingressos == INGRESSOS
        assert repo.count() == 1

    def test_publica_evento_criado(self, criar, uow):
        output = criar(ingressos=INGRESSOS)

        assert uow.committed
        assert len(uow.published_events) == 1
        evento = uow.published_events[0]
        assert isinstance(evento, EventoCriadoEvent)
        assert evento.aggregate_id == str(output.id)
        assert evento.total_ingressos == 2

    def test_status_em_texto_livre(self, criar):
        output = criar(status="Esgotado")
        assert output.status == "esgotado"

    def test_status_invalido(self, criar, uow):
        with pytest.raises(ValidationError) as exc_info:
            criar(status="adiado")

        assert exc_info.value.field == "status"
        assert uow.rolled_back
        assert uow.published_events == []

    def test_personalizado(self, criar):
        output = criar(status="personalizado", status_personalizado="Adiado")

        assert output.status == "personalizado"
        assert output.status_efetivo == "Adiado"

    def test_campos_obrigatorios(self, criar, repo):
        with pytest.raises(ValidationError):
            criar(nome="", artista="")

        assert repo.count() == 0

    def test_preco_em_texto_rejeitado(self, criar):
        with pytest.raises(ValidationError):
            criar(ingressos={"setores_mesa": [{"nome": "Mesa", "preco": "150"}]})


# =============================================================================
# Listar / Obter
# =============================================================================

class TestListarEventosService:

    def test_mais_recentes_primeiro(self, criar, repo):
        primeiro = criar(nome="Primeiro")
        segundo = criar(nome="Segundo")

        eventos = ListarEventosService(repo).execute()

        assert [e.id for e in eventos] == [segundo.id, primeiro.id]

    def test_por_data_ordenado_por_inicio(self, criar, repo):
        criar(nome="Tarde", hora_inicio="22:00")
        criar(nome="Cedo", hora_inicio="18:00")
        criar(nome="Outro dia", data="25-09-2025")

        eventos = ListarEventosService(repo).execute(data="24-09-2025")

        assert [e.nome for e in eventos] == ["Cedo", "Tarde"]

    def test_por_status(self, criar, repo):
        criar(nome="A", status="esgotado")
        criar(nome="B")

        eventos = ListarEventosService(repo).execute(status="esgotado")

        assert [e.nome for e in eventos] == ["A"]

    def test_status_desconhecido_lista_vazia(self, criar, repo):
        criar()
        assert ListarEventosService(repo).execute(status="adiado") == []


class TestObterEventoService:

    def test_obter(self, criar, repo):
        output = criar()
        assert ObterEventoService(repo).execute(output.id).nome == "Show Teste"

    def test_inexistente(self, repo):
        with pytest.raises(EntityNotFoundError):
            ObterEventoService(repo).execute(99)


# =============================================================================
# AtualizarEventoService
# =============================================================================

class TestAtualizarEventoService:

    def test_atualizacao_parcial_preserva_demais_campos(self, criar, repo, uow):
        output = criar(ingressos=INGRESSOS)

        atualizado = AtualizarEventoService(repo, uow).execute(
            AtualizarEventoInputDTO(evento_id=output.id, campos={"status": "esgotado"})
        )

        assert atualizado.status == "esgotado"
        assert atualizado.nome == output.nome
        assert atualizado.data == output.data
        assert atualizado.ingressos == output.ingressos

    def test_publica_campos_alterados(self, criar, repo, uow):
        output = criar()

        AtualizarEventoService(repo, uow).execute(
            AtualizarEventoInputDTO(output.id, {"descricao": "Nova", "artista": "Banda Y"})
        )

        evento = uow.published_events[-1]
        assert isinstance(evento, EventoAtualizadoEvent)
        assert evento.campos_alterados == ["artista", "descricao"]

    def test_sem_campos_nao_toca_armazenamento(self, criar, uow):
        repo = Mock(wraps=InMemoryEventoRepository())
        output = CriarEventoService(repo, uow).execute(CriarEventoInputDTO(
            nome="Show", artista="Banda", data="24-09-2025", hora_inicio="20:00",
        ))

        resultado = AtualizarEventoService(repo, uow).execute(
            AtualizarEventoInputDTO(evento_id=output.id)
        )

        assert resultado.id == output.id
        repo.update_fields.assert_not_called()

    def test_inexistente(self, repo, uow):
        with pytest.raises(EntityNotFoundError):
            AtualizarEventoService(repo, uow).execute(
                AtualizarEventoInputDTO(42, {"nome": "X"})
            )

    def test_campo_invalido_nao_grava(self, criar, repo, uow):
        output = criar()

        with pytest.raises(ValidationError):
            AtualizarEventoService(repo, uow).execute(
                AtualizarEventoInputDTO(output.id, {"nome": "Novo", "data": "99-99-2025"})
            )

        assert repo.get_by_id(output.id).nome == "Show Teste"


# =============================================================================
# RemoverEventoService
# =============================================================================

class TestRemoverEventoService:

    def test_remocao_logica(self, criar, repo, uow):
        output = criar()

        RemoverEventoService(repo, uow).execute(output.id)

        assert repo.get_by_id(output.id) is None
        assert repo.count() == 0
        evento = uow.published_events[-1]
        assert isinstance(evento, EventoRemovidoEvent)
        assert evento.remocao == "logica"

    def test_remocao_fisica(self, uow):
        repo = InMemoryEventoRepository(soft_delete=False)
        output = CriarEventoService(repo, uow).execute(CriarEventoInputDTO(
            nome="Show", artista="Banda", data="24-09-2025", hora_inicio="20:00",
        ))

        RemoverEventoService(repo, uow, soft_delete=False).execute(output.id)

        assert uow.published_events[-1].remocao == "fisica"
        assert repo.get_by_id(output.id) is None

    def test_inexistente(self, repo, uow):
        with pytest.raises(EntityNotFoundError):
            RemoverEventoService(repo, uow).execute(7)

    def test_remover_duas_vezes(self, criar, repo, uow):
        output = criar()
        service = RemoverEventoService(repo, uow)
        service.execute(output.id)

        with pytest.raises(EntityNotFoundError):
            service.execute(output.id)


# =============================================================================
# ExtrairDadosEventoService
# =============================================================================

class TestExtrairDadosEventoService:

    @pytest.fixture
    def extrator(self):
        extrator = Mock()
        extrator.extrair_de_imagem.return_value = {"nome": "Show"}
        extrator.extrair_de_texto.return_value = {"artista": "Banda"}
        return extrator

    def test_imagem(self, extrator):
        service = ExtrairDadosEventoService(extrator)

        assert service.extrair_de_imagem(b"png", "image/png") == {"nome": "Show"}
        extrator.extrair_de_imagem.assert_called_once_with(b"png", "image/png")

    @pytest.mark.parametrize("conteudo, content_type", [
        (None, "image/png"),
        (b"", "image/png"),
        (b"pdf", "application/pdf"),
        (b"x", None),
    ])
    def test_imagem_invalida(self, extrator, conteudo, content_type):
        with pytest.raises(ValidationError):
            ExtrairDadosEventoService(extrator).extrair_de_imagem(conteudo, content_type)

        extrator.extrair_de_imagem.assert_not_called()

    def test_imagem_acima_do_limite(self, extrator):
        service = ExtrairDadosEventoService(extrator, tamanho_maximo=4)

        with pytest.raises(ValidationError):
            service.extrair_de_imagem(b"12345", "image/jpeg")

    def test_validar_tamanho_imagem(self, extrator):
        service = ExtrairDadosEventoService(extrator, tamanho_maximo=4)

        service.validar_tamanho_imagem(4)
        with pytest.raises(ValidationError) as exc_info:
            service.validar_tamanho_imagem(5)

        assert exc_info.value.field == "image"

    def test_texto(self, extrator):
        service = ExtrairDadosEventoService(extrator)

        assert service.extrair_de_texto("Show da Banda dia 24") == {"artista": "Banda"}

    @pytest.mark.parametrize("texto", [None, "", "   ", 10])
    def test_texto_invalido(self, extrator, texto):
        with pytest.raises(ValidationError):
            ExtrairDadosEventoService(extrator).extrair_de_texto(texto)


def test_status_enum_nos_eventos_listados(criar, repo):
    criar(status="cancelado")
    assert ListarEventosService(repo).execute()[0].status == EventoStatus.CANCELADO.value
