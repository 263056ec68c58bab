"""
Cliente HTTP da API REST de eventos.

Usado por scripts e integrações externas. Devolve o corpo JSON da
API como veio; erros de rede ou de parse viram
``{"success": False, "error": mensagem}``.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote
import logging

import requests

logger = logging.getLogger(__name__)


class EventosApiClient:
    """
    Example:
        client = EventosApiClient("http://localhost:8000")
        resposta = client.criar({"nome": "Show", "artista": "X", ...})
        if resposta["success"]:
            evento_id = resposta["data"]["id"]
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
        token: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token = token

    # =========================================================================
    # Eventos
    # =========================================================================

    def criar(self, evento: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/events", json=evento)

    def listar(self) -> Dict[str, Any]:
        return self._request("GET", "/api/events")

    def obter(self, evento_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/events/{evento_id}")

    def atualizar(self, evento_id: int, campos: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/events/{evento_id}", json=campos)

    def remover(self, evento_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/events/{evento_id}")

    def listar_por_data(self, data: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/events/date/{quote(data)}")

    def listar_por_status(self, status: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/events/status/{quote(status)}")

    def testar_conexao(self) -> Dict[str, Any]:
        """GET /health."""
        return self._request("GET", "/health")

    # =========================================================================
    # Internos
    # =========================================================================

    def _request(self, metodo: str, caminho: str, **kwargs) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = f"{self.base_url}{caminho}"
        try:
            r = self.session.request(metodo, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"API {metodo} {caminho} falhou: {e}")
            return {"success": False, "error": str(e)}

        try:
            return r.json()
        except ValueError as e:
            logger.error(f"API {metodo} {caminho}: resposta não é JSON ({e})")
            return {"success": False, "error": "Resposta inválida da API"}
