"""
Conferência de credenciais contra a tabela de usuários do Django.
"""

from typing import Optional

from django.contrib.auth import authenticate, get_user_model

from src.core.auth.entities import Credenciais, UsuarioAutenticado


class DjangoVerificadorCredenciais:
    """
    Implementação de ``VerificadorCredenciais``.

    O login é por e-mail: o usuário é localizado pelo e-mail e a
    senha conferida pelos backends de autenticação configurados.
    """

    def verificar(self, credenciais: Credenciais) -> Optional[UsuarioAutenticado]:
        User = get_user_model()
        existente = User.objects.filter(email__iexact=credenciais.email).first()
        username = existente.get_username() if existente else credenciais.email

        user = authenticate(username=username, password=credenciais.senha)
        if user is None:
            return None

        return UsuarioAutenticado(
            id=str(user.pk),
            email=user.email or credenciais.email,
            nome=user.get_full_name() or user.get_username(),
            papel="admin" if user.is_staff else "user",
        )
