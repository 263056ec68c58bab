"""
Exceções de Domínio do Allure Eventos.

Comunicam erros de forma tipada entre as camadas. As views da API
traduzem cada tipo para um status HTTP e para o envelope
``{success, error}``.

Hierarquia:
    DomainException (base)
    ├── ValidationError (entrada inválida → 400)
    ├── EntityNotFoundError (evento inexistente ou inativo → 404)
    ├── BusinessRuleViolationError (regra de negócio → 422)
    ├── AuthError (credenciais/token → 401)
    ├── ConfiguracaoError (integração sem configuração → 500)
    └── ServicoExternoError (IA, webhook, resposta ilegível → 500)
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Example:
        if not nome:
            raise ValidationError("Nome é obrigatório", field="nome")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada (ou inativa) no repositório.

    É o sinal de ausência: callers distinguem "não existe" de "falhou".
    """

    def __init__(self, message: str, entity_type: str = None, entity_id=None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id is not None:
            result["entity_id"] = str(self.entity_id)
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Example:
        if chave in CATEGORIAS_PADRAO:
            raise BusinessRuleViolationError(
                "Categorias padrão não podem ser removidas",
                rule="categoria_padrao",
            )
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class AuthError(DomainException):
    """Credenciais inválidas, token expirado ou adulterado."""

    def __init__(self, message: str = "Não autenticado"):
        super().__init__(message, "AUTH_ERROR")


class ConfiguracaoError(DomainException):
    """
    Integração externa sem configuração utilizável.

    Lançada antes de qualquer chamada de rede, por exemplo quando
    a chave da API de IA está ausente ou é um placeholder.
    """

    def __init__(self, message: str, setting: str = None):
        self.setting = setting
        super().__init__(message, "CONFIGURATION_ERROR")


class ServicoExternoError(DomainException):
    """
    Falha em serviço externo (IA, webhook) ou resposta ilegível.

    A mensagem é curta e fixa; o detalhe técnico vai para o log.
    """

    def __init__(self, message: str, servico: str = None):
        self.servico = servico
        super().__init__(message, "UPSTREAM_ERROR")
