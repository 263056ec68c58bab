"""
Use Cases de autenticação.

- AutenticarUsuarioService: credenciais → Sessao (ou AuthError)
- ValidarSessaoService: token → UsuarioAutenticado (ou AuthError)
"""

import logging

from src.core.shared.exceptions import AuthError

from .entities import Credenciais, Sessao, UsuarioAutenticado
from .ports import EmissorTokens, VerificadorCredenciais

logger = logging.getLogger(__name__)


class AutenticarUsuarioService:
    """
    Use Case: login.

    Example:
        service = AutenticarUsuarioService(verificador, emissor)
        sessao = service.execute(Credenciais("admin@allure.com", "..."))
    """

    def __init__(self, verificador: VerificadorCredenciais, emissor: EmissorTokens):
        self.verificador = verificador
        self.emissor = emissor

    def execute(self, credenciais: Credenciais) -> Sessao:
        """
        Raises:
            AuthError: Credenciais inválidas
        """
        usuario = self.verificador.verificar(credenciais)
        if usuario is None:
            logger.warning(f"Login recusado para {credenciais.email}")
            raise AuthError("Email ou senha incorretos")

        token, expira_em = self.emissor.emitir(usuario)
        logger.info(f"Login: {usuario.email}")
        return Sessao(usuario=usuario, token=token, expira_em=expira_em)


class ValidarSessaoService:
    def __init__(self, emissor: EmissorTokens):
        self.emissor = emissor

    def execute(self, token: str) -> UsuarioAutenticado:
        if not token:
            raise AuthError("Token não informado")
        return self.emissor.validar(token)
