"""
Controlador de estado do formulário de evento.

Guarda o estado transitório (não salvo) de um formulário de
cadastro/edição: valores dos campos, catálogo de ingressos em
edição, categorias personalizadas ativas e o envio em andamento.

Invariante do catálogo: toda chave presente é uma das três
categorias padrão ou está registrada em ``categorias_personalizadas``.

O campo ``data`` fica no formato do input de data (yyyy-mm-dd);
o payload enviado usa dd-mm-yyyy.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar
import logging
import uuid

from src.core.shared.exceptions import BusinessRuleViolationError, ValidationError

from .categorias import chave_personalizada, eh_categoria_padrao
from .entities import (
    FORMATO_DATA,
    FUSO_HORARIO_PADRAO,
    Catalogo,
    EventoStatus,
    Ingresso,
    catalogo_from_dict,
    catalogo_to_dict,
    catalogo_vazio,
)
from .extracao import normalizar_ingressos_extraidos, parse_preco

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENDERECO_PADRAO = (
    "Rodovia Arquiteto Helder Cândia, nº 2044 - Ribeirão do Lipa - "
    "Cuiabá- MT / Buffet Leila Malouf LTDA"
)

FORMATO_DATA_INPUT = "%Y-%m-%d"
_FORMATOS_DATA_ACEITOS = (FORMATO_DATA, "%d/%m/%Y", FORMATO_DATA_INPUT)

CAMPOS_FORMULARIO = (
    "nome",
    "artista",
    "data",
    "horaInicio",
    "horaTermino",
    "fusoHorario",
    "status",
    "statusPersonalizado",
    "endereco",
    "descricao",
)

# Campo da resposta da IA → campo do formulário (texto copiado como está)
_CAMPOS_IA = {
    "nome": "nome",
    "artista": "artista",
    "horaInicio": "horaInicio",
    "horaFim": "horaTermino",
    "horaTermino": "horaTermino",
    "fusoHorario": "fusoHorario",
    "endereco": "endereco",
    "descricao": "descricao",
}


def _parse_data(valor: Any) -> Optional[datetime]:
    if not isinstance(valor, str) or not valor.strip():
        return None
    for formato in _FORMATOS_DATA_ACEITOS:
        try:
            return datetime.strptime(valor.strip(), formato)
        except ValueError:
            continue
    return None


def data_para_formulario(valor: Any) -> Optional[str]:
    """dd-mm-yyyy (ou dd/mm/yyyy) → yyyy-mm-dd. None se ilegível."""
    data = _parse_data(valor)
    return data.strftime(FORMATO_DATA_INPUT) if data else None


def data_para_envio(valor: Any) -> str:
    """yyyy-mm-dd → dd-mm-yyyy. Vazio se ilegível."""
    data = _parse_data(valor)
    return data.strftime(FORMATO_DATA) if data else ""


def _preenchido(valor: Any) -> bool:
    if valor is None:
        return False
    if isinstance(valor, str):
        return bool(valor.strip())
    if isinstance(valor, (list, dict)):
        return bool(valor)
    return True


class FormularioEvento:
    """
    Estado de um formulário de evento.

    Example:
        form = FormularioEvento()
        form.aplicar_dados_extraidos(dados_da_ia)
        form.definir_campo("artista", "Banda X")
        resultado = form.submeter(submissao.submeter)
    """

    def __init__(self):
        self.campos: Dict[str, str] = {}
        self.ingressos: Catalogo = {}
        self.categorias_personalizadas: List[str] = []
        self.evento_em_edicao_id: Optional[int] = None
        self.enviando = False
        self.resetar()

    # =========================================================================
    # Estado derivado
    # =========================================================================

    @property
    def mostrar_status_personalizado(self) -> bool:
        return self.campos.get("status") == EventoStatus.PERSONALIZADO.value

    @property
    def modo_edicao(self) -> bool:
        return self.evento_em_edicao_id is not None

    @property
    def categorias(self) -> List[str]:
        return list(self.ingressos.keys())

    # =========================================================================
    # Ciclo de vida
    # =========================================================================

    def resetar(self) -> None:
        """Volta aos valores padrão de um formulário vazio."""
        self.campos = {campo: "" for campo in CAMPOS_FORMULARIO}
        self.campos["fusoHorario"] = FUSO_HORARIO_PADRAO
        self.campos["endereco"] = ENDERECO_PADRAO
        self.ingressos = catalogo_vazio()
        self.categorias_personalizadas = []
        self.evento_em_edicao_id = None

    def carregar_para_edicao(self, evento: Dict[str, Any]) -> None:
        """
        Substitui todo o estado pelo de um evento persistido.

        Args:
            evento: Evento no formato da API (camelCase)
        """
        self.resetar()
        self.evento_em_edicao_id = evento.get("id")

        for campo in CAMPOS_FORMULARIO:
            valor = evento.get(campo)
            if valor is not None:
                self.campos[campo] = str(valor)
        self.campos["data"] = data_para_formulario(evento.get("data")) or ""

        catalogo = catalogo_from_dict(evento.get("ingressos") or {})
        self.ingressos = {**catalogo_vazio(), **catalogo}
        self.categorias_personalizadas = [
            chave for chave in self.ingressos if not eh_categoria_padrao(chave)
        ]
        logger.debug(f"Formulário em edição do evento {self.evento_em_edicao_id}")

    def cancelar_edicao(self) -> None:
        self.resetar()

    # =========================================================================
    # Campos
    # =========================================================================

    def definir_campo(self, campo: str, valor: str) -> None:
        if campo not in CAMPOS_FORMULARIO:
            raise ValidationError(f"Campo desconhecido: {campo}", field=campo)
        self.campos[campo] = valor or ""

    def aplicar_dados_extraidos(self, dados: Dict[str, Any]) -> List[str]:
        """
        Mescla o resultado da IA: só os campos preenchidos são aplicados.

        Ingressos, quando presentes, substituem o catálogo atual
        (categorias padrão vazias + categorias detectadas) e as
        categorias novas passam a ser personalizadas ativas.

        Returns:
            Campos do formulário que foram alterados
        """
        aplicados: List[str] = []
        if not isinstance(dados, dict):
            return aplicados

        for origem, destino in _CAMPOS_IA.items():
            valor = dados.get(origem)
            if _preenchido(valor):
                self.campos[destino] = str(valor).strip()
                aplicados.append(destino)

        data = data_para_formulario(dados.get("data"))
        if data:
            self.campos["data"] = data
            aplicados.append("data")

        if _preenchido(dados.get("status")):
            self._aplicar_status(str(dados["status"]))
            aplicados.append("status")

        normalizacao = normalizar_ingressos_extraidos(dados.get("ingressos"))
        if normalizacao.total:
            self.ingressos = catalogo_vazio()
            for categoria, itens in normalizacao.ingressos.items():
                self.ingressos.setdefault(categoria, []).extend(itens)
            self.categorias_personalizadas = list(normalizacao.categorias_personalizadas)
            aplicados.append("ingressos")

        return list(dict.fromkeys(aplicados))

    def _aplicar_status(self, texto: str) -> None:
        try:
            self.campos["status"] = EventoStatus.from_string(texto).value
        except ValueError:
            self.campos["status"] = EventoStatus.PERSONALIZADO.value
            self.campos["statusPersonalizado"] = texto.strip()

    # =========================================================================
    # Categorias e ingressos
    # =========================================================================

    def adicionar_categoria(self, nome: str) -> str:
        """
        Registra categoria personalizada.

        Returns:
            Chave da categoria (existente ou nova)

        Raises:
            ValidationError: Nome vazio após normalização
        """
        chave = chave_personalizada(nome)
        if not chave:
            raise ValidationError("Nome da categoria é obrigatório", field="categoria")
        if chave not in self.ingressos:
            self.ingressos[chave] = []
            self.categorias_personalizadas.append(chave)
        return chave

    def remover_categoria(self, chave: str) -> None:
        """
        Remove categoria personalizada e seus ingressos juntos.

        Raises:
            BusinessRuleViolationError: Categoria padrão
        """
        if eh_categoria_padrao(chave):
            raise BusinessRuleViolationError(
                "Categorias padrão não podem ser removidas",
                rule="categoria_padrao",
            )
        self.ingressos.pop(chave, None)
        if chave in self.categorias_personalizadas:
            self.categorias_personalizadas.remove(chave)

    def _lista(self, categoria: str) -> List[Ingresso]:
        if categoria not in self.ingressos:
            raise ValidationError(f"Categoria desconhecida: {categoria}", field="categoria")
        return self.ingressos[categoria]

    def adicionar_ingresso(self, categoria: str, nome: str, preco: Any, descricao: str = "") -> Ingresso:
        ingresso = Ingresso(
            id=uuid.uuid4().hex,
            nome=nome or "",
            preco=parse_preco(preco),
            descricao=descricao or "",
        )
        self._lista(categoria).append(ingresso)
        return ingresso

    def atualizar_ingresso(self, categoria: str, ingresso_id: str, **campos: Any) -> Ingresso:
        lista = self._lista(categoria)
        for indice, atual in enumerate(lista):
            if atual.id == ingresso_id:
                dados = {**atual.to_dict(), **campos}
                dados["preco"] = parse_preco(dados.get("preco"))
                lista[indice] = Ingresso.from_dict(dados)
                return lista[indice]
        raise ValidationError(f"Ingresso não encontrado: {ingresso_id}", field="ingressos")

    def remover_ingresso(self, categoria: str, ingresso_id: str) -> None:
        lista = self._lista(categoria)
        lista[:] = [i for i in lista if i.id != ingresso_id]

    # =========================================================================
    # Envio
    # =========================================================================

    def montar_payload(self) -> Dict[str, Any]:
        """Payload do evento (preview e envio), com data em dd-mm-yyyy."""
        payload: Dict[str, Any] = dict(self.campos)
        payload["data"] = data_para_envio(self.campos.get("data"))
        if not self.mostrar_status_personalizado:
            payload["statusPersonalizado"] = None
        payload["ingressos"] = catalogo_to_dict(self.ingressos)
        if self.modo_edicao:
            payload["id"] = self.evento_em_edicao_id
        return payload

    def submeter(self, enviar: Callable[[Dict[str, Any]], T]) -> T:
        """
        Envia o payload com ``enviar``; um envio por vez.

        Raises:
            BusinessRuleViolationError: Já existe envio em andamento
        """
        if self.enviando:
            raise BusinessRuleViolationError(
                "Já existe um envio em andamento",
                rule="envio_em_andamento",
            )
        payload = self.montar_payload()
        self.enviando = True
        try:
            return enviar(payload)
        finally:
            self.enviando = False
