"""
Extrator de dados de evento com a API da OpenAI.

Implementa a porta ``ExtratorDadosEvento`` usando Chat Completions
com saída JSON. O resultado é devolvido como o modelo respondeu;
quem consome decide como normalizar.
"""

from typing import Any, Dict, List, Optional, Union
import base64
import json
import logging
import re

import openai
from openai import OpenAI

from src.core.shared.exceptions import ConfiguracaoError, ServicoExternoError

from .prompts import PROMPT_IMAGEM, PROMPT_TEXTO

logger = logging.getLogger(__name__)

PLACEHOLDERS_API_KEY = ("your-api-key-here", "sua_chave_aqui")

_CERCA_JSON = re.compile(r"```(?:json)?\n?")


def validar_api_key(api_key: Optional[str]) -> str:
    """
    Raises:
        ConfiguracaoError: Chave ausente ou ainda com valor de exemplo
    """
    chave = (api_key or "").strip()
    if not chave:
        raise ConfiguracaoError("OPENAI_API_KEY não configurada", setting="OPENAI_API_KEY")
    if any(token in chave.lower() for token in PLACEHOLDERS_API_KEY):
        raise ConfiguracaoError(
            "OPENAI_API_KEY inválida ou placeholder. Atualize sua variável de ambiente.",
            setting="OPENAI_API_KEY",
        )
    return chave


def interpretar_resposta(conteudo: str) -> Dict[str, Any]:
    """
    Converte o texto do modelo em dict, removendo cercas de markdown.

    Raises:
        ServicoExternoError: Conteúdo não é um objeto JSON
    """
    texto = conteudo.strip()
    if texto.startswith("```"):
        texto = _CERCA_JSON.sub("", texto).strip()

    try:
        dados = json.loads(texto)
    except ValueError as e:
        logger.error(f"[AI] Falha ao converter resposta em JSON: {e} | {texto[:200]!r}")
        raise ServicoExternoError(
            "Não foi possível interpretar a resposta da IA.", servico="openai"
        )

    if not isinstance(dados, dict):
        logger.error(f"[AI] Resposta JSON não é objeto: {texto[:200]!r}")
        raise ServicoExternoError(
            "Não foi possível interpretar a resposta da IA.", servico="openai"
        )
    return dados


class OpenAIEventoExtractor:
    """
    Extrator baseado em ``openai.OpenAI().chat.completions``.

    Attributes:
        api_key: Chave da API (validada antes de qualquer chamada)
        model: Modelo com suporte a visão (padrão ``gpt-4o``)
        timeout: Timeout em segundos das chamadas

    Example:
        extrator = OpenAIEventoExtractor(api_key=settings.OPENAI_API_KEY)
        dados = extrator.extrair_de_texto("Show do Artista X dia 24/09 às 20h")
    """

    max_tokens = 1000
    temperature = 0.3

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o",
        timeout: float = 60.0,
        client: Optional[OpenAI] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=validar_api_key(self.api_key), timeout=self.timeout)
        return self._client

    def extrair_de_imagem(self, conteudo: bytes, content_type: str) -> Dict[str, Any]:
        validar_api_key(self.api_key)
        imagem_b64 = base64.b64encode(conteudo).decode("ascii")
        mensagem = [
            {
                "type": "image_url",
                "image_url": {"url": f"data:{content_type};base64,{imagem_b64}"},
            },
        ]
        return self._completar(PROMPT_IMAGEM, mensagem, "imagem")

    def extrair_de_texto(self, texto: str) -> Dict[str, Any]:
        validar_api_key(self.api_key)
        return self._completar(PROMPT_TEXTO, texto, "texto")

    def _completar(
        self,
        prompt: str,
        conteudo: Union[str, List[Dict[str, Any]]],
        origem: str,
    ) -> Dict[str, Any]:
        try:
            resposta = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": prompt},
                    {"role": "user", "content": conteudo},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error(f"[AI] Erro ao processar {origem} com IA: {e}")
            detalhe = getattr(e, "message", None) or str(e)
            raise ServicoExternoError(
                f"Falha ao processar {origem} com IA: {detalhe}", servico="openai"
            )

        texto = ""
        if resposta.choices:
            texto = resposta.choices[0].message.content or ""
        logger.info(f"[AI] Resposta recebida ({origem}, {len(texto)} caracteres)")
        return interpretar_resposta(texto or "{}")
