"""
Entidades de autenticação.

- Credenciais: e-mail e senha informados no login
- UsuarioAutenticado: identidade confirmada
- Sessao: usuário + token assinado + expiração
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from src.core.shared.exceptions import ValidationError


@dataclass(frozen=True)
class Credenciais:
    email: str
    senha: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Credenciais":
        """
        Raises:
            ValidationError: E-mail ou senha ausentes
        """
        email = payload.get("email")
        senha = payload.get("password", payload.get("senha"))
        if not isinstance(email, str) or not email.strip():
            raise ValidationError("E-mail é obrigatório", field="email")
        if not isinstance(senha, str) or not senha:
            raise ValidationError("Senha é obrigatória", field="password")
        return cls(email=email.strip().lower(), senha=senha)


@dataclass(frozen=True)
class UsuarioAutenticado:
    id: str
    email: str
    nome: str
    papel: str = "user"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.nome,
            "role": self.papel,
        }


@dataclass(frozen=True)
class Sessao:
    usuario: UsuarioAutenticado
    token: str
    expira_em: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "expiraEm": self.expira_em.isoformat(),
            "usuario": self.usuario.to_dict(),
        }
