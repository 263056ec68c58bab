"""
Integração legada com planilha (Google Apps Script).

O transporte HTTP fica em src/adapters/http/webhook.py.
"""

from .submissao import (
    EstadoEnvio,
    FalhaTransporte,
    ModoTransporte,
    RespostaTransporte,
    ResultadoEnvio,
    SubmissaoPlanilhaService,
    preparar_dados_planilha,
    validar_url_webhook,
)

__all__ = [
    "EstadoEnvio",
    "FalhaTransporte",
    "ModoTransporte",
    "RespostaTransporte",
    "ResultadoEnvio",
    "SubmissaoPlanilhaService",
    "preparar_dados_planilha",
    "validar_url_webhook",
]
