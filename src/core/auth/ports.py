"""
Ports de autenticação.

- VerificadorCredenciais: confere e-mail/senha
- EmissorTokens: emite e valida tokens assinados
"""

from datetime import datetime
from typing import Optional, Protocol, Tuple

from .entities import Credenciais, UsuarioAutenticado


class VerificadorCredenciais(Protocol):
    def verificar(self, credenciais: Credenciais) -> Optional[UsuarioAutenticado]:
        """Usuário se as credenciais conferem, senão None."""
        ...


class EmissorTokens(Protocol):
    def emitir(self, usuario: UsuarioAutenticado) -> Tuple[str, datetime]:
        """Retorna (token, expira_em)."""
        ...

    def validar(self, token: str) -> UsuarioAutenticado:
        """
        Raises:
            AuthError: Token inválido, adulterado ou expirado
        """
        ...
