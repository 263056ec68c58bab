"""
Testes do controlador de estado do formulário de evento.

Coverage:
- Estado inicial e reset
- aplicar_dados_extraidos(): mescla parcial do resultado da IA
- Categorias personalizadas e ingressos
- Edição de evento persistido
- montar_payload() / submeter()
"""

from unittest.mock import Mock

import pytest

from src.core.eventos.categorias import (
    CAMAROTES_EMPRESARIAIS,
    CAMAROTES_PREMIUM,
    SETORES_MESA,
)
from src.core.eventos.formulario import (
    ENDERECO_PADRAO,
    FormularioEvento,
    data_para_envio,
    data_para_formulario,
)
from src.core.shared.exceptions import BusinessRuleViolationError, ValidationError


@pytest.fixture
def form():
    return FormularioEvento()


def _chaves_validas(form):
    padrao = {SETORES_MESA, CAMAROTES_PREMIUM, CAMAROTES_EMPRESARIAIS}
    return all(
        chave in padrao or chave in form.categorias_personalizadas
        for chave in form.ingressos
    )


class TestEstadoInicial:

    def test_valores_padrao(self, form):
        assert form.campos["endereco"] == ENDERECO_PADRAO
        assert form.campos["fusoHorario"] == "GMT-4"
        assert form.campos["nome"] == ""
        assert form.categorias == [SETORES_MESA, CAMAROTES_PREMIUM, CAMAROTES_EMPRESARIAIS]
        assert form.modo_edicao is False
        assert form.enviando is False

    def test_resetar(self, form):
        form.definir_campo("nome", "Show")
        form.adicionar_categoria("Pista")

        form.resetar()

        assert form.campos["nome"] == ""
        assert "pista" not in form.ingressos
        assert form.categorias_personalizadas == []

    def test_campo_desconhecido(self, form):
        with pytest.raises(ValidationError):
            form.definir_campo("preco", "10")

    def test_mostrar_status_personalizado(self, form):
        form.definir_campo("status", "personalizado")
        assert form.mostrar_status_personalizado


class TestAplicarDadosExtraidos:

    def test_mescla_apenas_campos_preenchidos(self, form):
        form.definir_campo("artista", "Banda Digitada")

        aplicados = form.aplicar_dados_extraidos({
            "nome": "Noite de Samba",
            "artista": "",
            "data": "24-09-2025",
            "horaInicio": "20:00",
            "horaFim": "23:59",
            "endereco": None,
        })

        assert form.campos["nome"] == "Noite de Samba"
        assert form.campos["artista"] == "Banda Digitada"
        assert form.campos["data"] == "2025-09-24"
        assert form.campos["horaTermino"] == "23:59"
        assert form.campos["endereco"] == ENDERECO_PADRAO
        assert set(aplicados) == {"nome", "data", "horaInicio", "horaTermino"}

    def test_data_ilegivel_mantem_valor(self, form):
        form.definir_campo("data", "2025-10-01")
        form.aplicar_dados_extraidos({"data": "sábado que vem"})
        assert form.campos["data"] == "2025-10-01"

    def test_status_conhecido(self, form):
        form.aplicar_dados_extraidos({"status": "Esgotado"})
        assert form.campos["status"] == "esgotado"

    def test_status_livre_vira_personalizado(self, form):
        form.aplicar_dados_extraidos({"status": "Últimos lugares"})

        assert form.campos["status"] == "personalizado"
        assert form.campos["statusPersonalizado"] == "Últimos lugares"
        assert form.mostrar_status_personalizado

    def test_ingressos_substituem_catalogo(self, form):
        form.adicionar_ingresso(SETORES_MESA, "Mesa antiga", 10)

        form.aplicar_dados_extraidos({
            "ingressos": {
                "Camarotes": [{"nome": "Camarote 1", "preco": "R$ 1.500,00"}],
                "Pista": [{"nome": "Inteira", "preco": "80"}],
            }
        })

        assert form.ingressos[SETORES_MESA] == []
        assert form.ingressos[CAMAROTES_PREMIUM][0].preco == 1500
        assert [i.nome for i in form.ingressos["pista"]] == ["Inteira"]
        assert form.categorias_personalizadas == ["pista"]
        assert _chaves_validas(form)

    def test_sem_ingressos_mantem_catalogo(self, form):
        form.adicionar_ingresso(SETORES_MESA, "Mesa", 10)
        form.aplicar_dados_extraidos({"nome": "Show", "ingressos": []})
        assert len(form.ingressos[SETORES_MESA]) == 1

    def test_resposta_que_nao_e_objeto(self, form):
        assert form.aplicar_dados_extraidos(["x"]) == []


class TestCategoriasEIngressos:

    def test_adicionar_categoria(self, form):
        chave = form.adicionar_categoria("Área Kids")

        assert chave == "area_kids"
        assert form.ingressos["area_kids"] == []
        assert form.categorias_personalizadas == ["area_kids"]

    def test_adicionar_categoria_existente(self, form):
        form.adicionar_categoria("Pista")
        form.adicionar_categoria("pista")
        assert form.categorias_personalizadas == ["pista"]

    def test_adicionar_categoria_vazia(self, form):
        with pytest.raises(ValidationError):
            form.adicionar_categoria("  ")

    def test_remover_categoria_remove_ingressos(self, form):
        form.adicionar_categoria("Pista")
        form.adicionar_ingresso("pista", "Inteira", "80")

        form.remover_categoria("pista")

        assert "pista" not in form.ingressos
        assert form.categorias_personalizadas == []
        assert _chaves_validas(form)

    def test_categoria_padrao_nao_pode_ser_removida(self, form):
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            form.remover_categoria(SETORES_MESA)

        assert exc_info.value.rule == "categoria_padrao"
        assert SETORES_MESA in form.ingressos

    def test_adicionar_ingresso(self, form):
        ingresso = form.adicionar_ingresso(CAMAROTES_PREMIUM, "VIP", "R$ 1.200,00", "10 pessoas")

        assert ingresso.preco == 1200
        assert form.ingressos[CAMAROTES_PREMIUM] == [ingresso]

    def test_adicionar_ingresso_categoria_desconhecida(self, form):
        with pytest.raises(ValidationError):
            form.adicionar_ingresso("pista", "Inteira", 80)

    def test_atualizar_ingresso(self, form):
        ingresso = form.adicionar_ingresso(SETORES_MESA, "Mesa", 100)

        atualizado = form.atualizar_ingresso(SETORES_MESA, ingresso.id, preco="250,50", nome="Mesa A")

        assert atualizado.id == ingresso.id
        assert atualizado.nome == "Mesa A"
        assert atualizado.preco == 250.5
        assert form.ingressos[SETORES_MESA] == [atualizado]

    def test_atualizar_ingresso_inexistente(self, form):
        with pytest.raises(ValidationError):
            form.atualizar_ingresso(SETORES_MESA, "nao-existe", nome="X")

    def test_remover_ingresso(self, form):
        primeiro = form.adicionar_ingresso(SETORES_MESA, "Mesa 1", 100)
        segundo = form.adicionar_ingresso(SETORES_MESA, "Mesa 2", 100)

        form.remover_ingresso(SETORES_MESA, primeiro.id)

        assert form.ingressos[SETORES_MESA] == [segundo]


class TestEdicao:

    EVENTO = {
        "id": 5,
        "nome": "Show",
        "artista": "Banda",
        "data": "24-09-2025",
        "horaInicio": "20:00",
        "status": "personalizado",
        "statusPersonalizado": "Adiado",
        "ingressos": {
            "setores_mesa": [{"id": "m1", "nome": "Mesa", "preco": 100, "descricao": ""}],
            "pista": [{"id": "p1", "nome": "Pista", "preco": 50, "descricao": ""}],
        },
    }

    def test_carregar_para_edicao(self, form):
        form.carregar_para_edicao(self.EVENTO)

        assert form.modo_edicao
        assert form.evento_em_edicao_id == 5
        assert form.campos["data"] == "2025-09-24"
        assert form.campos["statusPersonalizado"] == "Adiado"
        assert form.categorias_personalizadas == ["pista"]
        assert form.ingressos[CAMAROTES_PREMIUM] == []
        assert _chaves_validas(form)

    def test_cancelar_edicao(self, form):
        form.carregar_para_edicao(self.EVENTO)
        form.cancelar_edicao()

        assert not form.modo_edicao
        assert form.campos["nome"] == ""

    def test_payload_em_edicao_tem_id(self, form):
        form.carregar_para_edicao(self.EVENTO)
        payload = form.montar_payload()

        assert payload["id"] == 5
        assert payload["data"] == "24-09-2025"
        assert payload["statusPersonalizado"] == "Adiado"
        assert payload["ingressos"]["pista"][0]["preco"] == 50


class TestSubmissao:

    def test_payload(self, form):
        form.definir_campo("nome", "Show")
        form.definir_campo("data", "2025-09-24")
        form.definir_campo("statusPersonalizado", "Sobra")

        payload = form.montar_payload()

        assert payload["data"] == "24-09-2025"
        assert payload["statusPersonalizado"] is None
        assert payload["ingressos"] == {
            SETORES_MESA: [],
            CAMAROTES_PREMIUM: [],
            CAMAROTES_EMPRESARIAIS: [],
        }
        assert "id" not in payload

    def test_submeter_envia_payload(self, form):
        enviar = Mock(return_value="ok")
        form.definir_campo("nome", "Show")

        assert form.submeter(enviar) == "ok"
        assert enviar.call_args[0][0]["nome"] == "Show"
        assert form.enviando is False

    def test_um_envio_por_vez(self, form):
        def enviar(payload):
            with pytest.raises(BusinessRuleViolationError) as exc_info:
                form.submeter(Mock())
            assert exc_info.value.rule == "envio_em_andamento"
            return "primeiro"

        assert form.submeter(enviar) == "primeiro"

    def test_libera_envio_apos_erro(self, form):
        with pytest.raises(RuntimeError):
            form.submeter(Mock(side_effect=RuntimeError("rede")))

        assert form.enviando is False


class TestConversaoDatas:

    @pytest.mark.parametrize("valor, esperado", [
        ("24-09-2025", "2025-09-24"),
        ("24/09/2025", "2025-09-24"),
        ("2025-09-24", "2025-09-24"),
        ("", None),
        (None, None),
        ("32-01-2025", None),
    ])
    def test_data_para_formulario(self, valor, esperado):
        assert data_para_formulario(valor) == esperado

    def test_data_para_envio(self):
        assert data_para_envio("2025-09-24") == "24-09-2025"
        assert data_para_envio("") == ""
