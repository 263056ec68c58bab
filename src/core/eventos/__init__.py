"""
Domínio de Eventos.

Cadastro de eventos da casa com catálogo de ingressos por categoria,
normalização da extração feita por IA e estado do formulário.

Componentes:
- categorias: mapeamento de rótulos para chaves de categoria
- extracao: normalização dos ingressos vindos da IA e parse de preço
- entities/dtos/ports/use_cases/events: CRUD de eventos
- formulario: estado transitório do formulário de cadastro/edição
"""

from .entities import EventoEntity, EventoStatus, Ingresso
from .categorias import (
    CAMAROTES_EMPRESARIAIS,
    CAMAROTES_PREMIUM,
    CATEGORIAS_PADRAO,
    SETORES_MESA,
    detectar_categoria_ingresso,
    mapear_chave_categoria,
)
from .extracao import normalizar_ingressos_extraidos, parse_preco

__all__ = [
    "EventoEntity",
    "EventoStatus",
    "Ingresso",
    "CATEGORIAS_PADRAO",
    "SETORES_MESA",
    "CAMAROTES_PREMIUM",
    "CAMAROTES_EMPRESARIAIS",
    "mapear_chave_categoria",
    "detectar_categoria_ingresso",
    "normalizar_ingressos_extraidos",
    "parse_preco",
]
