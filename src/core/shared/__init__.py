"""
Shared Domain Components.

Exceções de domínio, interfaces (ports) e base de Domain Events
usadas por todos os subdomínios (eventos, planilha, auth).
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    AuthError,
    ConfiguracaoError,
    ServicoExternoError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "AuthError",
    "ConfiguracaoError",
    "ServicoExternoError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
]
