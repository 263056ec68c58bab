"""
Tokens de sessão assinados com ``django.core.signing``.

O token carrega a identidade do usuário e a data de emissão; a
validade é conferida por ``max_age`` na leitura.
"""

from datetime import datetime, timedelta
from typing import Tuple
import logging

from django.core import signing
from django.utils import timezone

from src.core.auth.entities import UsuarioAutenticado
from src.core.shared.exceptions import AuthError

logger = logging.getLogger(__name__)

SALT_PADRAO = "allure-eventos.auth"


class SignedTokenEmissor:
    """
    Implementação de ``EmissorTokens``.

    Attributes:
        max_age: Validade do token em segundos
        salt: Namespace da assinatura
    """

    def __init__(self, max_age: int = 24 * 60 * 60, salt: str = SALT_PADRAO):
        self.max_age = max_age
        self.salt = salt

    def emitir(self, usuario: UsuarioAutenticado) -> Tuple[str, datetime]:
        token = signing.dumps(
            {
                "id": usuario.id,
                "email": usuario.email,
                "nome": usuario.nome,
                "papel": usuario.papel,
            },
            salt=self.salt,
        )
        return token, timezone.now() + timedelta(seconds=self.max_age)

    def validar(self, token: str) -> UsuarioAutenticado:
        """
        Raises:
            AuthError: Token expirado, adulterado ou malformado
        """
        try:
            dados = signing.loads(token, salt=self.salt, max_age=self.max_age)
        except signing.SignatureExpired:
            raise AuthError("Sessão expirada")
        except signing.BadSignature:
            logger.warning("Token com assinatura inválida")
            raise AuthError("Token inválido")

        return UsuarioAutenticado(
            id=str(dados.get("id", "")),
            email=dados.get("email", ""),
            nome=dados.get("nome", ""),
            papel=dados.get("papel", "user"),
        )
