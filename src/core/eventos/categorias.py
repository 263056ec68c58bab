"""
Mapeamento de categorias de ingressos.

Rótulos livres (vindos da IA ou digitados pela equipe) são
convertidos para uma das três chaves padrão ou para uma chave
personalizada derivada do próprio rótulo.

Ordem de desempate (primeira que casar vence):
    "empres"                      → camarotes_empresariais
    "premium" / "vip" / "camarote" → camarotes_premium
    "mesa" / "table"              → setores_mesa

Todas as funções deste módulo são totais: nunca lançam exceção.
"""

import re
import unicodedata
from typing import Any, Dict, Mapping, Optional

SETORES_MESA = "setores_mesa"
CAMAROTES_PREMIUM = "camarotes_premium"
CAMAROTES_EMPRESARIAIS = "camarotes_empresariais"

CATEGORIAS_PADRAO: Dict[str, str] = {
    SETORES_MESA: "Setores de Mesa",
    CAMAROTES_PREMIUM: "Camarotes Premium",
    CAMAROTES_EMPRESARIAIS: "Camarotes Empresariais",
}

CATEGORIA_DEFAULT = SETORES_MESA

_NAO_ALFANUMERICO = re.compile(r"[^a-z0-9]+")

# (categoria, termos) na ordem de prioridade
_REGRAS = (
    (CAMAROTES_EMPRESARIAIS, ("empres",)),
    (CAMAROTES_PREMIUM, ("premium", "vip", "camarote")),
    (SETORES_MESA, ("mesa", "table")),
)


def remover_acentos(texto: str) -> str:
    """Remove diacríticos ("Cândia" → "Candia")."""
    decomposto = unicodedata.normalize("NFKD", texto)
    return "".join(c for c in decomposto if not unicodedata.combining(c))


def normalizar_rotulo(rotulo: Any) -> str:
    """
    Normaliza um rótulo livre para o formato de chave.

    Minúsculas, sem acentos, sequências não alfanuméricas viram ``_``
    e ``_`` nas pontas é removido.

    Example:
        normalizar_rotulo("  Área VIP / Frente ")  # "area_vip_frente"
    """
    if rotulo is None:
        return ""
    texto = remover_acentos(str(rotulo)).lower()
    return _NAO_ALFANUMERICO.sub("_", texto).strip("_")


def _classificar(texto_normalizado: str) -> Optional[str]:
    for categoria, termos in _REGRAS:
        if any(termo in texto_normalizado for termo in termos):
            return categoria
    return None


def mapear_chave_categoria(rotulo: Any) -> str:
    """
    Converte um rótulo de categoria em chave canônica ou personalizada.

    Args:
        rotulo: Rótulo livre (str, None ou qualquer valor)

    Returns:
        Uma das chaves padrão, ou o rótulo normalizado como nova
        chave personalizada. Rótulo vazio/ausente vira
        ``setores_mesa``.

    Example:
        mapear_chave_categoria("Camarote Empresarial")  # camarotes_empresariais
        mapear_chave_categoria("Mesa VIP")              # camarotes_premium
        mapear_chave_categoria("Pista")                 # pista
    """
    normalizado = normalizar_rotulo(rotulo)
    if not normalizado:
        return CATEGORIA_DEFAULT
    return _classificar(normalizado) or normalizado


def detectar_categoria_ingresso(ingresso: Mapping[str, Any]) -> str:
    """
    Descobre a categoria de um ingresso avulso.

    Se o ingresso traz ``categoria``/``category`` explícita, usa o
    mapeador. Caso contrário aplica a mesma heurística sobre nome e
    descrição, caindo em ``setores_mesa`` quando nada casa (nunca cria
    categoria personalizada).
    """
    if not isinstance(ingresso, Mapping):
        return CATEGORIA_DEFAULT

    explicita = ingresso.get("categoria") or ingresso.get("category")
    if explicita:
        return mapear_chave_categoria(explicita)

    partes = [
        ingresso.get("nome") or ingresso.get("nomeIngresso") or "",
        ingresso.get("descricao") or ingresso.get("detalhes") or "",
    ]
    texto = normalizar_rotulo(" ".join(str(p) for p in partes))
    return _classificar(texto) or CATEGORIA_DEFAULT


def eh_categoria_padrao(chave: str) -> bool:
    return chave in CATEGORIAS_PADRAO


def chave_personalizada(nome: Any) -> str:
    """
    Chave de uma categoria criada manualmente pela equipe.

    Diferente de ``mapear_chave_categoria``, não aplica a heurística:
    "Área Mesa Externa" vira ``area_mesa_externa``.
    """
    return normalizar_rotulo(nome)


def rotulo_categoria(chave: str) -> str:
    """
    Rótulo de exibição de uma chave.

    Example:
        rotulo_categoria("camarotes_premium")  # "Camarotes Premium"
        rotulo_categoria("pista_vip")          # "Pista Vip"
    """
    if chave in CATEGORIAS_PADRAO:
        return CATEGORIAS_PADRAO[chave]
    return chave.replace("_", " ").title()
