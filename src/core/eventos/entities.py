"""
Entidades do Domínio de Eventos.

Entidades:
- EventoEntity: Agregado principal (um show/evento da casa)
- Ingresso: Item do catálogo de ingressos
- EventoStatus: Estados possíveis de um evento

Regras de Negócio Encapsuladas:
- Campos obrigatórios na criação (nome, artista, data, horaInicio)
- Data no formato dd-mm-yyyy e válida no calendário
- Status "personalizado" exige texto próprio, que vira o status efetivo
- Preço de ingresso numérico e não negativo
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import math
import uuid

from src.core.shared.exceptions import ValidationError

from .categorias import CATEGORIAS_PADRAO, remover_acentos


FORMATO_DATA = "%d-%m-%Y"
FUSO_HORARIO_PADRAO = "GMT-4"
USUARIO_PADRAO = "Sistema"

# Campo da entidade → nome no JSON da API
CAMPOS_OBRIGATORIOS = {
    "nome": "nome",
    "artista": "artista",
    "data": "data",
    "hora_inicio": "horaInicio",
}


class EventoStatus(Enum):
    """Estados possíveis de um evento."""

    DISPONIVEL = "disponivel"
    ESGOTADO = "esgotado"
    CANCELADO = "cancelado"
    PERSONALIZADO = "personalizado"

    @property
    def label(self) -> str:
        labels = {
            EventoStatus.DISPONIVEL: "Disponível",
            EventoStatus.ESGOTADO: "Esgotado",
            EventoStatus.CANCELADO: "Cancelado",
            EventoStatus.PERSONALIZADO: "Personalizado",
        }
        return labels[self]

    @classmethod
    def from_string(cls, value: str) -> "EventoStatus":
        """
        Converte string para enum.

        Aceita nome ou valor, com ou sem acento ("Disponível",
        "DISPONIVEL", "disponivel").

        Raises:
            ValueError: Se valor inválido
        """
        if isinstance(value, cls):
            return value
        normalizado = remover_acentos(str(value or "")).strip().lower()
        for status in cls:
            if status.value == normalizado:
                return status
        raise ValueError(f"Status inválido: {value}")


@dataclass(frozen=True)
class Ingresso:
    """
    Ingresso de uma categoria do catálogo.

    Identidade é o ``id``, única apenas dentro da lista da categoria.
    """

    id: str
    nome: str
    preco: float
    descricao: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ingresso":
        """
        Constrói ingresso a partir do JSON da API.

        Raises:
            ValidationError: Se estrutura ou preço inválidos
        """
        if not isinstance(data, dict):
            raise ValidationError("Ingresso deve ser um objeto", field="ingressos")

        preco = data.get("preco", 0)
        if isinstance(preco, bool) or not isinstance(preco, (int, float)):
            raise ValidationError(
                f"Preço inválido para o ingresso '{data.get('nome', '')}'",
                field="ingressos",
            )
        if not math.isfinite(preco) or preco < 0:
            raise ValidationError(
                "Preço do ingresso deve ser um número não negativo",
                field="ingressos",
            )

        ingresso_id = data.get("id")
        return cls(
            id=str(ingresso_id) if ingresso_id not in (None, "") else str(uuid.uuid4()),
            nome=str(data.get("nome") or ""),
            preco=preco,
            descricao=str(data.get("descricao") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "nome": self.nome,
            "preco": self.preco,
            "descricao": self.descricao,
        }


Catalogo = Dict[str, List[Ingresso]]


def catalogo_from_dict(data: Any) -> Catalogo:
    """
    Converte o JSON ``{categoria: [ingresso, ...]}`` em catálogo.

    Raises:
        ValidationError: Se não for um mapeamento de listas
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(
            "Ingressos deve ser um objeto {categoria: [ingressos]}",
            field="ingressos",
        )
    catalogo: Catalogo = {}
    for categoria, itens in data.items():
        if not isinstance(itens, list):
            raise ValidationError(
                f"Categoria '{categoria}' deve conter uma lista de ingressos",
                field="ingressos",
            )
        catalogo[str(categoria)] = [Ingresso.from_dict(item) for item in itens]
    return catalogo


def catalogo_to_dict(catalogo: Catalogo) -> Dict[str, List[Dict[str, Any]]]:
    return {
        categoria: [ingresso.to_dict() for ingresso in ingressos]
        for categoria, ingressos in catalogo.items()
    }


def catalogo_vazio() -> Catalogo:
    """Catálogo com as três categorias padrão e nenhum ingresso."""
    return {chave: [] for chave in CATEGORIAS_PADRAO}


@dataclass
class EventoEntity:
    """
    Entidade de Domínio: Evento.

    Invariantes:
    - nome, artista, data e hora_inicio não vazios
    - data válida em dd-mm-yyyy
    - status PERSONALIZADO exige status_personalizado
    - id é atribuído pelo armazenamento (None antes de persistir)

    Example:
        evento = EventoEntity.criar(
            nome="Show Teste",
            artista="Banda X",
            data="24-09-2025",
            hora_inicio="20:00",
        )
    """

    id: Optional[int] = None

    nome: str = ""
    artista: str = ""
    data: str = ""
    hora_inicio: str = ""
    hora_termino: str = ""
    fuso_horario: str = FUSO_HORARIO_PADRAO

    status: EventoStatus = EventoStatus.DISPONIVEL
    status_personalizado: Optional[str] = None

    endereco: str = ""
    descricao: str = ""
    ingressos: Catalogo = field(default_factory=dict)

    data_cadastro: datetime = field(default_factory=datetime.now)
    data_atualizacao: datetime = field(default_factory=datetime.now)
    usuario: str = USUARIO_PADRAO
    ativo: bool = True

    @classmethod
    def criar(
        cls,
        nome: str,
        artista: str,
        data: str,
        hora_inicio: str,
        hora_termino: str = "",
        fuso_horario: str = FUSO_HORARIO_PADRAO,
        status: EventoStatus = EventoStatus.DISPONIVEL,
        status_personalizado: Optional[str] = None,
        endereco: str = "",
        descricao: str = "",
        ingressos: Optional[Catalogo] = None,
        usuario: str = USUARIO_PADRAO,
    ) -> "EventoEntity":
        """
        Factory method para criar novo evento com validações.

        Raises:
            ValidationError: Se algum dado violar as invariantes
        """
        cls._validar_obrigatorios(
            nome=nome, artista=artista, data=data, hora_inicio=hora_inicio
        )
        cls._validar_data(data)
        status_personalizado = cls._validar_status(status, status_personalizado)

        return cls(
            nome=nome.strip(),
            artista=artista.strip(),
            data=data.strip(),
            hora_inicio=hora_inicio.strip(),
            hora_termino=(hora_termino or "").strip(),
            fuso_horario=fuso_horario or FUSO_HORARIO_PADRAO,
            status=status,
            status_personalizado=status_personalizado,
            endereco=endereco or "",
            descricao=descricao or "",
            ingressos=dict(ingressos or {}),
            usuario=usuario or USUARIO_PADRAO,
        )

    @classmethod
    def _validar_obrigatorios(cls, **valores: Any) -> None:
        faltando = [
            CAMPOS_OBRIGATORIOS[campo]
            for campo, valor in valores.items()
            if not isinstance(valor, str) or not valor.strip()
        ]
        if faltando:
            raise ValidationError(
                f"Campos obrigatórios faltando: {', '.join(faltando)}",
                field=faltando[0],
            )

    @classmethod
    def _validar_data(cls, data: str) -> None:
        try:
            datetime.strptime(data.strip(), FORMATO_DATA)
        except ValueError:
            raise ValidationError(
                f"Data inválida: {data}. Use o formato dd-mm-yyyy",
                field="data",
            )

    @classmethod
    def _validar_status(
        cls,
        status: EventoStatus,
        status_personalizado: Optional[str],
    ) -> Optional[str]:
        texto = (status_personalizado or "").strip() or None
        if status == EventoStatus.PERSONALIZADO and not texto:
            raise ValidationError(
                "Status personalizado é obrigatório quando o status é 'personalizado'",
                field="statusPersonalizado",
            )
        return texto

    @property
    def status_efetivo(self) -> str:
        """Status exibido/enviado: o texto livre quando personalizado."""
        if self.status == EventoStatus.PERSONALIZADO and self.status_personalizado:
            return self.status_personalizado
        return self.status.value

    @property
    def total_ingressos(self) -> int:
        return sum(len(itens) for itens in self.ingressos.values())

    def validar_alteracoes(self, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida uma atualização parcial contra o estado atual.

        Não altera a entidade: devolve os valores normalizados
        (status como enum, ingressos como catálogo) apenas para os
        campos informados.

        Args:
            campos: Campos da entidade → novo valor (forma de API)

        Raises:
            ValidationError: Se algum campo informado for inválido
        """
        alteracoes: Dict[str, Any] = {}

        for campo, valor in campos.items():
            if campo in CAMPOS_OBRIGATORIOS:
                self._validar_obrigatorios(**{campo: valor})
                valor = valor.strip()
                if campo == "data":
                    self._validar_data(valor)
            elif campo == "status":
                try:
                    valor = EventoStatus.from_string(valor)
                except ValueError as e:
                    raise ValidationError(str(e), field="status")
            elif campo == "ingressos":
                valor = catalogo_from_dict(valor)
            elif campo == "status_personalizado":
                valor = (valor.strip() or None) if isinstance(valor, str) else None
            elif valor is None:
                valor = FUSO_HORARIO_PADRAO if campo == "fuso_horario" else ""
            elif not isinstance(valor, str):
                raise ValidationError(f"Campo {campo} deve ser texto", field=campo)
            alteracoes[campo] = valor

        status = alteracoes.get("status", self.status)
        if status == EventoStatus.PERSONALIZADO:
            texto = alteracoes.get("status_personalizado", self.status_personalizado)
            self._validar_status(status, texto)

        return alteracoes
