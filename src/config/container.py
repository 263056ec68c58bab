"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (repositório, clients externos)
- Factory: Nova instância por chamada (services, UoW)
- Configuration: valores lidos das settings do Django

Testes substituem providers com ``override``:

    container = get_container()
    container.evento_repository.override(providers.Object(InMemoryEventoRepository()))
"""

from typing import Any, Dict, Optional

from dependency_injector import containers, providers
from django.conf import settings

from src.adapters.ai.openai_extractor import OpenAIEventoExtractor
from src.adapters.django_app.auth.credenciais import DjangoVerificadorCredenciais
from src.adapters.django_app.auth.tokens import SignedTokenEmissor
from src.adapters.django_app.eventos.repositories import DjangoEventoRepository
from src.adapters.django_app.events.publishers import get_event_publisher
from src.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork
from src.adapters.http.webhook import RequestsWebhookTransport
from src.core.auth.use_cases import AutenticarUsuarioService, ValidarSessaoService
from src.core.eventos.use_cases import (
    AtualizarEventoService,
    CriarEventoService,
    ExtrairDadosEventoService,
    ListarEventosService,
    ObterEventoService,
    RemoverEventoService,
    TAMANHO_MAXIMO_IMAGEM,
)
from src.core.planilha.submissao import SubmissaoPlanilhaService
from src.core.planilha.use_cases import EnviarEventoParaPlanilhaService


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: settings do Django
    - Infrastructure: publisher, clients externos
    - Repositories: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        container = get_container()
        service = container.criar_evento_service()
        output = service.execute(input_dto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        get_event_publisher,
        use_celery=config.eventos.use_celery,
        enviar_planilha=config.planilha.enviar_ao_criar,
    )

    extrator_ia = providers.Singleton(
        OpenAIEventoExtractor,
        api_key=config.openai.api_key,
        model=config.openai.model,
        timeout=config.openai.timeout,
    )

    transporte_webhook = providers.Singleton(
        RequestsWebhookTransport,
        timeout=config.planilha.timeout,
    )

    submissao_planilha = providers.Factory(
        SubmissaoPlanilhaService,
        transporte=transporte_webhook,
        url=config.planilha.url,
        atraso_simulacao=config.planilha.atraso_simulacao,
    )

    emissor_tokens = providers.Singleton(
        SignedTokenEmissor,
        max_age=config.auth.token_max_age,
    )

    verificador_credenciais = providers.Singleton(DjangoVerificadorCredenciais)

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    evento_repository = providers.Singleton(
        DjangoEventoRepository,
        soft_delete=config.eventos.soft_delete,
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        DjangoUnitOfWork,
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases (Factory - nova instância por chamada)
    # =========================================================================

    criar_evento_service = providers.Factory(
        CriarEventoService,
        evento_repo=evento_repository,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    listar_eventos_service = providers.Factory(
        ListarEventosService,
        evento_repo=evento_repository,
    )

    obter_evento_service = providers.Factory(
        ObterEventoService,
        evento_repo=evento_repository,
    )

    atualizar_evento_service = providers.Factory(
        AtualizarEventoService,
        evento_repo=evento_repository,
        uow=unit_of_work,
    )

    remover_evento_service = providers.Factory(
        RemoverEventoService,
        evento_repo=evento_repository,
        uow=unit_of_work,
        soft_delete=config.eventos.soft_delete,
    )

    extrair_dados_evento_service = providers.Factory(
        ExtrairDadosEventoService,
        extrator=extrator_ia,
        tamanho_maximo=config.ai.max_image_bytes,
    )

    enviar_evento_planilha_service = providers.Factory(
        EnviarEventoParaPlanilhaService,
        evento_repo=evento_repository,
        submissao=submissao_planilha,
    )

    autenticar_usuario_service = providers.Factory(
        AutenticarUsuarioService,
        verificador=verificador_credenciais,
        emissor=emissor_tokens,
    )

    validar_sessao_service = providers.Factory(
        ValidarSessaoService,
        emissor=emissor_tokens,
    )


def config_from_settings() -> Dict[str, Any]:
    """Valores do container a partir das settings do Django."""
    return {
        'eventos': {
            'use_celery': getattr(settings, 'EVENT_PUBLISHER_MODE', 'sync') == 'celery',
            'soft_delete': getattr(settings, 'EVENTOS_SOFT_DELETE', True),
        },
        'openai': {
            'api_key': getattr(settings, 'OPENAI_API_KEY', None),
            'model': getattr(settings, 'OPENAI_MODEL', 'gpt-4o'),
            'timeout': getattr(settings, 'OPENAI_TIMEOUT', 60.0),
        },
        'ai': {
            'max_image_bytes': getattr(settings, 'AI_MAX_IMAGE_BYTES', TAMANHO_MAXIMO_IMAGEM),
        },
        'planilha': {
            'url': getattr(settings, 'GOOGLE_SCRIPT_URL', None),
            'timeout': getattr(settings, 'PLANILHA_TIMEOUT', 30),
            'atraso_simulacao': getattr(settings, 'PLANILHA_ATRASO_SIMULACAO', 2.0),
            'enviar_ao_criar': getattr(settings, 'PLANILHA_ENVIAR_AO_CRIAR', False),
        },
        'auth': {
            'token_max_age': getattr(settings, 'AUTH_TOKEN_MAX_AGE', 24 * 60 * 60),
        },
    }


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization), lendo as settings
    nesse momento.
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(config_from_settings())

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    O próximo ``get_container`` relê as settings.
    """
    global _container
    _container = None
