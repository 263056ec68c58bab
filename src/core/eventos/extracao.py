"""
Normalização da saída da IA para o catálogo de ingressos.

O modelo de linguagem devolve ``ingressos`` em formatos variados:

    LISTA            [{"nome": "Mesa VIP", "preco": "R$ 150"}, ...]
    MAPA_DE_LISTAS   {"Camarotes": [{...}, {...}], "Pista": [{...}]}
    MAPA_DE_OBJETOS  {"Camarotes": {...}, "Pista": {...}}

Cada formato tem sua função de normalização; ``detectar_formato``
escolhe qual aplicar. Nenhum ingresso é descartado e preços
ilegíveis viram 0, mantendo o fluxo de extração sem bloqueios.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping
import logging
import math
import re
import uuid

from .categorias import (
    detectar_categoria_ingresso,
    eh_categoria_padrao,
    mapear_chave_categoria,
)
from .entities import Catalogo, Ingresso

logger = logging.getLogger(__name__)

_CARACTERES_PRECO = re.compile(r"[^\d,.\-]")
# vírgula seguida de exatamente três dígitos e depois não-dígito/fim
_VIRGULA_MILHAR = re.compile(r",(?=\d{3}(?:\D|$))")
# maior prefixo numérico, como parseFloat
_PREFIXO_NUMERICO = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")

_CAMPOS_INGRESSO = ("nome", "nomeIngresso", "preco", "descricao", "detalhes")


def parse_preco(valor: Any) -> float:
    """
    Converte preço livre em número.

    Heurística, não um parser estrito de moeda:
    - número passa direto (não finito vira 0)
    - texto perde tudo que não for dígito, vírgula, ponto ou sinal
    - "1.234,56": havendo ponto e vírgula com a vírgula por último,
      os pontos são separadores de milhar
    - vírgula seguida de três dígitos é separador de milhar
    - a vírgula restante vira ponto decimal
    - vale o maior prefixo numérico ("50,00." vira 50, "150-200" vira 150)
    - sem prefixo numérico vira 0

    Example:
        parse_preco("150")          # 150.0
        parse_preco("R$ 1.234,56")  # 1234.56
        parse_preco("abc")          # 0
        parse_preco(200)            # 200
    """
    if isinstance(valor, bool):
        return 0
    if isinstance(valor, (int, float)):
        return valor if math.isfinite(valor) else 0
    if not isinstance(valor, str):
        return 0

    texto = _CARACTERES_PRECO.sub("", valor)
    if "," in texto and "." in texto and texto.rfind(",") > texto.rfind("."):
        texto = texto.replace(".", "")
    texto = _VIRGULA_MILHAR.sub("", texto)
    texto = texto.replace(",", ".")

    prefixo = _PREFIXO_NUMERICO.match(texto)
    if not prefixo:
        return 0
    numero = float(prefixo.group())
    return numero if math.isfinite(numero) else 0


class FormatoIngressos(Enum):
    """Formatos de ``ingressos`` aceitos na resposta da IA."""

    VAZIO = "vazio"
    LISTA = "lista"
    MAPA_DE_LISTAS = "mapa_de_listas"
    MAPA_DE_OBJETOS = "mapa_de_objetos"


@dataclass
class NormalizacaoIngressos:
    """
    Resultado da normalização.

    Attributes:
        ingressos: Catálogo categoria → ingressos
        categorias_personalizadas: Chaves novas (fora das padrão),
            em ordem de descoberta, para o formulário registrar
    """

    ingressos: Catalogo = field(default_factory=dict)
    categorias_personalizadas: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(len(itens) for itens in self.ingressos.values())

    def adicionar(self, categoria: str, ingresso: Ingresso) -> None:
        if categoria not in self.ingressos:
            self.ingressos[categoria] = []
            if not eh_categoria_padrao(categoria):
                self.categorias_personalizadas.append(categoria)
        self.ingressos[categoria].append(ingresso)


def _parece_ingresso(valor: Mapping[str, Any]) -> bool:
    """Um objeto solto com algum campo de ingresso de valor simples; outras chaves não contam."""
    return any(
        campo in valor and not isinstance(valor[campo], (list, dict))
        for campo in _CAMPOS_INGRESSO
    )


def detectar_formato(valor: Any) -> FormatoIngressos:
    if isinstance(valor, list):
        return FormatoIngressos.LISTA if valor else FormatoIngressos.VAZIO
    if isinstance(valor, dict) and valor:
        if _parece_ingresso(valor):
            return FormatoIngressos.LISTA
        if all(isinstance(v, list) for v in valor.values()):
            return FormatoIngressos.MAPA_DE_LISTAS
        return FormatoIngressos.MAPA_DE_OBJETOS
    return FormatoIngressos.VAZIO


def construir_ingresso(origem: Mapping[str, Any]) -> Ingresso:
    """Cria ``Ingresso`` a partir de um objeto da IA, com defaults."""
    origem_id = origem.get("id")
    return Ingresso(
        id=str(origem_id) if origem_id not in (None, "") else str(uuid.uuid4()),
        nome=str(origem.get("nome") or origem.get("nomeIngresso") or ""),
        preco=parse_preco(origem.get("preco")),
        descricao=str(origem.get("descricao") or origem.get("detalhes") or ""),
    )


def _normalizar_lista(itens: List[Any], resultado: NormalizacaoIngressos) -> None:
    for item in itens:
        if not isinstance(item, Mapping):
            logger.debug(f"Item de ingresso ignorado (não é objeto): {item!r}")
            continue
        resultado.adicionar(detectar_categoria_ingresso(item), construir_ingresso(item))


def _normalizar_mapa(mapa: Mapping[str, Any], resultado: NormalizacaoIngressos) -> None:
    # A categoria da chave prevalece sobre a detecção por ingresso.
    # Serve aos dois formatos de mapa: cada chave pode ter lista ou objeto.
    for rotulo, conteudo in mapa.items():
        categoria = mapear_chave_categoria(rotulo)
        itens = conteudo if isinstance(conteudo, list) else [conteudo]
        for item in itens:
            if isinstance(item, Mapping):
                resultado.adicionar(categoria, construir_ingresso(item))


_NORMALIZADORES = {
    FormatoIngressos.LISTA: lambda valor, resultado: _normalizar_lista(
        valor if isinstance(valor, list) else [valor], resultado
    ),
    FormatoIngressos.MAPA_DE_LISTAS: _normalizar_mapa,
    FormatoIngressos.MAPA_DE_OBJETOS: _normalizar_mapa,
    FormatoIngressos.VAZIO: lambda valor, resultado: None,
}


def normalizar_ingressos_extraidos(valor: Any) -> NormalizacaoIngressos:
    """
    Converte ``ingressos`` da IA no catálogo canônico.

    Args:
        valor: Qualquer coisa que veio em ``ingressos`` na resposta

    Returns:
        NormalizacaoIngressos com catálogo e categorias novas
    """
    formato = detectar_formato(valor)
    resultado = NormalizacaoIngressos()
    _NORMALIZADORES[formato](valor, resultado)

    logger.debug(
        f"Ingressos normalizados: formato={formato.value} "
        f"total={resultado.total} "
        f"personalizadas={resultado.categorias_personalizadas}"
    )
    return resultado
