"""
Transporte HTTP do webhook da planilha (``requests``).

Modo OPACO: POST sem seguir redirecionamento e sem ler a resposta.
O Apps Script responde com 302 para a página do resultado; no modo
opaco o envio já aconteceu e a resposta é descartada.

Modo LEGIVEL: POST seguindo redirecionamentos, com status e corpo.
"""

from typing import Any, Dict, Optional
import logging

import requests

from src.core.planilha.submissao import FalhaTransporte, ModoTransporte, RespostaTransporte

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


class RequestsWebhookTransport:
    """
    Implementação de ``TransporteWebhook`` com ``requests``.

    Attributes:
        timeout: Timeout (segundos) de cada requisição
        session: ``requests.Session`` opcional (reuso de conexão/testes)
    """

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def enviar(self, url: str, corpo: Dict[str, Any], modo: ModoTransporte) -> RespostaTransporte:
        """
        Raises:
            FalhaTransporte: Conexão, DNS ou timeout
        """
        opaco = modo is ModoTransporte.OPACO
        try:
            r = self.session.post(
                url,
                json=corpo,
                headers=HEADERS,
                timeout=self.timeout,
                allow_redirects=not opaco,
            )
        except requests.RequestException as e:
            logger.warning(f"Webhook ({modo.value}) falhou: {e}")
            raise FalhaTransporte(str(e))

        if opaco:
            r.close()
            return RespostaTransporte(opaca=True)

        logger.debug(f"Webhook ({modo.value}) respondeu {r.status_code}")
        return RespostaTransporte(
            opaca=False,
            status=r.status_code,
            motivo=r.reason or "",
            corpo=r.text,
        )
