"""
Envio de eventos para a planilha (webhook do Google Apps Script).

O destino legado é pouco confiável e historicamente só aceitava
requisições "opacas" (sem leitura de status/corpo). O envio é uma
máquina de estados explícita:

    sem URL ─────────────────────────────────────────→ SIMULADO
    opaco ok ──→ sonda legível ok ───────────────────→ CONFIRMADO / FALHOU
                 sonda falha/ilegível ───────────────→ ENVIADO_OPACO
    opaco falha → legível ok ────────────────────────→ CONFIRMADO / FALHOU
                  legível falha ─────────────────────→ RECUPERADO_LOCALMENTE
    resposta legível direta ─────────────────────────→ CONFIRMADO / FALHOU

``submeter`` nunca lança: todo caminho termina em ``ResultadoEnvio``.
``success`` segue a política otimista do cliente original (só FALHOU
é ``False``); ``estado`` permite distinguir o que de fato aconteceu.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Protocol
from urllib.parse import urlparse
import json
import logging
import time

from src.core.shared.exceptions import ServicoExternoError

logger = logging.getLogger(__name__)

HOST_APPS_SCRIPT = "script.google.com"
ENDERECO_NAO_INFORMADO = "Não informado"

MSG_SIMULACAO = "Evento cadastrado com sucesso! (Modo simulação)"
MSG_SUCESSO = "Evento enviado para Google Sheets com sucesso!"
MSG_ENVIADO = "Evento enviado para Google Sheets!"
MSG_VERIFIQUE = "Evento enviado para Google Sheets! (Verifique a planilha)"
MSG_RECUPERADO = (
    "Dados salvos localmente (erro de conexão). "
    "Verifique o console para os dados completos."
)
MSG_ERRO_DESCONHECIDO = "Erro desconhecido do Google Apps Script"
PREFIXO_FALHA = "Erro ao conectar com Google Sheets: "


class EstadoEnvio(Enum):
    SIMULADO = "simulado"
    ENVIADO_OPACO = "enviado_opaco"
    CONFIRMADO = "confirmado"
    FALHOU = "falhou"
    RECUPERADO_LOCALMENTE = "recuperado_localmente"


class ModoTransporte(Enum):
    """
    OPACO: envia sem ler resposta (status/corpo indisponíveis).
    LEGIVEL: envia e lê status e corpo.
    """

    OPACO = "opaco"
    LEGIVEL = "legivel"


class FalhaTransporte(ServicoExternoError):
    """Falha de rede/transporte (conexão, timeout, DNS)."""

    def __init__(self, message: str):
        super().__init__(message, servico="webhook")


@dataclass(frozen=True)
class RespostaTransporte:
    """Resposta do transporte. ``opaca=True`` significa ilegível."""

    opaca: bool
    status: int = 0
    motivo: str = ""
    corpo: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Raises: ValueError se o corpo não for JSON."""
        return json.loads(self.corpo)


class TransporteWebhook(Protocol):
    def enviar(self, url: str, corpo: Dict[str, Any], modo: ModoTransporte) -> RespostaTransporte:
        """
        Raises:
            FalhaTransporte: Erro de rede/timeout
        """
        ...


@dataclass(frozen=True)
class ResultadoEnvio:
    success: bool
    message: str
    estado: EstadoEnvio
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        resultado = {
            "success": self.success,
            "message": self.message,
            "estado": self.estado.value,
        }
        if self.data is not None:
            resultado["data"] = self.data
        return resultado


def preparar_dados_planilha(evento: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Corpo plano enviado ao webhook.

    O status é o efetivo (texto livre quando "personalizado") e
    campos opcionais ausentes viram texto vazio.

    Args:
        evento: Evento no formato da API (camelCase)
    """
    status = evento.get("status") or ""
    if status == "personalizado":
        status = evento.get("statusPersonalizado") or status

    return {
        "nome": evento.get("nome") or "",
        "artista": evento.get("artista") or "",
        "data": evento.get("data") or "",
        "horaInicio": evento.get("horaInicio") or "",
        "horaTermino": evento.get("horaTermino") or "",
        "fusoHorario": evento.get("fusoHorario") or "",
        "status": status,
        "endereco": evento.get("endereco") or ENDERECO_NAO_INFORMADO,
        "descricao": evento.get("descricao") or "",
        "ingressos": evento.get("ingressos") or {},
    }


def validar_url_webhook(url: Optional[str]) -> bool:
    """True se a URL aponta para o Google Apps Script."""
    if not url:
        return False
    try:
        return urlparse(url).hostname == HOST_APPS_SCRIPT
    except ValueError:
        return False


class SubmissaoPlanilhaService:
    """
    Cliente de envio para a planilha.

    Attributes:
        transporte: Implementação de TransporteWebhook
        url: URL do webhook; vazia ativa o modo simulação
        atraso_simulacao: Segundos de espera no modo simulação

    Example:
        service = SubmissaoPlanilhaService(RequestsWebhookTransport(), url=url)
        resultado = service.submeter(evento_dict)
        if resultado.estado is EstadoEnvio.RECUPERADO_LOCALMENTE:
            ...
    """

    def __init__(
        self,
        transporte: TransporteWebhook,
        url: Optional[str] = None,
        atraso_simulacao: float = 2.0,
        dormir: Callable[[float], None] = time.sleep,
    ):
        self.transporte = transporte
        self.url = url or None
        self.atraso_simulacao = atraso_simulacao
        self._dormir = dormir

    def submeter(self, evento: Mapping[str, Any]) -> ResultadoEnvio:
        dados = preparar_dados_planilha(evento)
        try:
            resultado = self._iniciar(dados)
        except Exception as e:
            logger.exception(f"Erro inesperado no envio à planilha: {e}")
            resultado = self._falha(str(e))
        logger.info(
            f"Envio à planilha: estado={resultado.estado.value} "
            f"success={resultado.success} evento={dados['nome']!r}"
        )
        return resultado

    def testar_conexao(self) -> ResultadoEnvio:
        """Envia um evento de teste para conferir a URL configurada."""
        if not self.url:
            return ResultadoEnvio(
                False, "URL do Google Apps Script não configurada", EstadoEnvio.FALHOU
            )
        if not validar_url_webhook(self.url):
            return ResultadoEnvio(
                False, "URL do Google Apps Script inválida", EstadoEnvio.FALHOU
            )
        return self.submeter({
            "nome": "Teste de Conexão",
            "artista": "Sistema",
            "data": time.strftime("%d-%m-%Y"),
            "horaInicio": "00:00",
            "status": "disponivel",
            "descricao": "Evento de teste de conexão",
        })

    # =========================================================================
    # Transições
    # =========================================================================

    def _iniciar(self, dados: Dict[str, Any]) -> ResultadoEnvio:
        if not self.url:
            return self._simular(dados)
        try:
            resposta = self.transporte.enviar(self.url, dados, ModoTransporte.OPACO)
        except FalhaTransporte as e:
            logger.warning(f"Envio opaco falhou ({e}); tentando modo legível")
            return self._reenviar_legivel(dados)
        if resposta.opaca:
            return self._sondar_envio_opaco(dados)
        return self._interpretar(resposta, dados)

    def _simular(self, dados: Dict[str, Any]) -> ResultadoEnvio:
        logger.info("URL da planilha não configurada: modo simulação")
        self._dormir(self.atraso_simulacao)
        return ResultadoEnvio(True, MSG_SIMULACAO, EstadoEnvio.SIMULADO, dados)

    def _reenviar_legivel(self, dados: Dict[str, Any]) -> ResultadoEnvio:
        try:
            resposta = self.transporte.enviar(self.url, dados, ModoTransporte.LEGIVEL)
        except FalhaTransporte as e:
            return self._recuperar_localmente(dados, e)
        return self._interpretar(resposta, dados)

    def _sondar_envio_opaco(self, dados: Dict[str, Any]) -> ResultadoEnvio:
        try:
            resposta = self.transporte.enviar(self.url, dados, ModoTransporte.LEGIVEL)
            corpo = resposta.json() if resposta.ok else None
        except (FalhaTransporte, ValueError) as e:
            logger.info(f"Sonda legível sem resposta útil: {e}")
            corpo = None

        if not isinstance(corpo, dict):
            return ResultadoEnvio(True, MSG_VERIFIQUE, EstadoEnvio.ENVIADO_OPACO, dados)
        return self._resultado_remoto(corpo, dados)

    def _interpretar(self, resposta: RespostaTransporte, dados: Dict[str, Any]) -> ResultadoEnvio:
        if not resposta.ok:
            return self._falha(f"Erro HTTP: {resposta.status} {resposta.motivo}".strip())
        try:
            corpo = resposta.json()
        except ValueError:
            return ResultadoEnvio(True, MSG_ENVIADO, EstadoEnvio.CONFIRMADO, dados)
        if not isinstance(corpo, dict):
            return ResultadoEnvio(True, MSG_ENVIADO, EstadoEnvio.CONFIRMADO, dados)
        return self._resultado_remoto(corpo, dados)

    def _resultado_remoto(self, corpo: Dict[str, Any], dados: Dict[str, Any]) -> ResultadoEnvio:
        # success ausente conta como sucesso; False explícito é falha
        if corpo.get("success", True) is False:
            return self._falha(corpo.get("message") or corpo.get("error") or MSG_ERRO_DESCONHECIDO)
        return ResultadoEnvio(
            True,
            corpo.get("message") or MSG_SUCESSO,
            EstadoEnvio.CONFIRMADO,
            corpo.get("data") or dados,
        )

    def _recuperar_localmente(self, dados: Dict[str, Any], erro: Exception) -> ResultadoEnvio:
        logger.error(
            f"Planilha inacessível ({erro}). Dados para recuperação manual: "
            f"{json.dumps(dados, ensure_ascii=False, default=str)}"
        )
        return ResultadoEnvio(True, MSG_RECUPERADO, EstadoEnvio.RECUPERADO_LOCALMENTE, dados)

    def _falha(self, motivo: str) -> ResultadoEnvio:
        logger.warning(f"Envio à planilha falhou: {motivo}")
        return ResultadoEnvio(False, f"{PREFIXO_FALHA}{motivo}", EstadoEnvio.FALHOU)
