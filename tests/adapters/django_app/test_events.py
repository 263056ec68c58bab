"""
Testes de Domain Events: Unit of Work, publishers e handlers.

Coverage:
- DjangoUnitOfWork (commit/rollback, publicação após commit)
- InMemoryUnitOfWork
- LoggingEventPublisher / CeleryEventPublisher / get_event_publisher
- Handlers Celery e dispatcher
- Envio automático à planilha ao criar evento
"""

from unittest.mock import Mock, patch

import pytest
from dependency_injector import providers

from src.adapters.django_app.eventos.models import EventoModel
from src.adapters.django_app.events import handlers
from src.adapters.django_app.events.publishers import (
    CeleryEventPublisher,
    InMemoryEventPublisher,
    LoggingEventPublisher,
    get_event_publisher,
)
from src.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork, InMemoryUnitOfWork
from src.core.eventos.events import EventoCriadoEvent, EventoRemovidoEvent
from src.core.planilha.submissao import EstadoEnvio, ResultadoEnvio
from src.core.shared.exceptions import EntityNotFoundError, ValidationError


def _evento_criado(aggregate_id='1'):
    return EventoCriadoEvent(aggregate_id=aggregate_id, nome='Show', artista='Banda', data='24-09-2025')


# =============================================================================
# Unit of Work
# =============================================================================

@pytest.mark.django_db
class TestDjangoUnitOfWork:

    def test_publica_apos_commit(self):
        publisher = InMemoryEventPublisher()
        uow = DjangoUnitOfWork(event_publisher=publisher)

        with uow:
            EventoModel.objects.create(nome='Show', artista='Banda', data='24-09-2025', hora_inicio='20:00')
            uow.publish_event(_evento_criado())
            assert publisher.published_events == []

        assert uow.is_committed
        assert len(publisher.get_events_by_type('EventoCriadoEvent')) == 1

    def test_rollback_descarta_dados_e_eventos(self):
        publisher = InMemoryEventPublisher()
        uow = DjangoUnitOfWork(event_publisher=publisher)

        with pytest.raises(ValidationError):
            with uow:
                EventoModel.objects.create(nome='Show', artista='Banda', data='24-09-2025', hora_inicio='20:00')
                uow.publish_event(_evento_criado())
                raise ValidationError('falhou')

        assert uow.is_rolled_back
        assert publisher.published_events == []
        assert EventoModel.objects.count() == 0

    def test_falha_do_publisher_nao_desfaz_commit(self):
        publisher = Mock()
        publisher.publish.side_effect = RuntimeError('broker fora')
        uow = DjangoUnitOfWork(event_publisher=publisher)

        with uow:
            EventoModel.objects.create(nome='Show', artista='Banda', data='24-09-2025', hora_inicio='20:00')
            uow.publish_event(_evento_criado())

        assert uow.is_committed
        assert EventoModel.objects.count() == 1


class TestInMemoryUnitOfWork:

    def test_commit(self):
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(_evento_criado())

        assert uow.committed
        assert len(uow.published_events) == 1

    def test_rollback(self):
        uow = InMemoryUnitOfWork()
        with pytest.raises(RuntimeError):
            with uow:
                uow.publish_event(_evento_criado())
                raise RuntimeError('x')

        assert uow.rolled_back
        assert uow.published_events == []


# =============================================================================
# Publishers
# =============================================================================

class TestPublishers:

    def test_logging_executa_handlers_registrados(self):
        publisher = LoggingEventPublisher()
        handler = Mock()
        publisher.register_handler('EventoCriadoEvent', handler)

        evento = _evento_criado()
        publisher.publish(evento)
        publisher.publish(EventoRemovidoEvent(aggregate_id='1'))

        handler.assert_called_once_with(evento)

    def test_erro_em_handler_nao_propaga(self):
        publisher = LoggingEventPublisher()
        publisher.register_handler('EventoCriadoEvent', Mock(side_effect=RuntimeError('x')))

        publisher.publish(_evento_criado())

    def test_celery_despacha_evento_serializado(self):
        evento = _evento_criado()

        with patch.object(handlers, 'dispatch_domain_event') as dispatch:
            CeleryEventPublisher(also_log=False).publish(evento)

        dispatch.delay.assert_called_once_with('EventoCriadoEvent', evento.to_dict())

    def test_celery_broker_fora_nao_propaga(self):
        with patch.object(handlers, 'dispatch_domain_event') as dispatch:
            dispatch.delay.side_effect = ConnectionError('broker fora')
            CeleryEventPublisher().publish(_evento_criado())

    def test_factory(self):
        assert isinstance(get_event_publisher(use_celery=True), CeleryEventPublisher)
        assert isinstance(get_event_publisher(), LoggingEventPublisher)

    def test_factory_registra_envio_a_planilha(self):
        publisher = get_event_publisher(enviar_planilha=True)

        with patch.object(handlers, 'sincronizar_evento_com_planilha') as sincronizar:
            publisher.publish(_evento_criado('7'))

        sincronizar.assert_called_once_with('7')


# =============================================================================
# Handlers
# =============================================================================

def _resultado(estado, success=True):
    return ResultadoEnvio(success, 'mensagem', estado)


@pytest.fixture
def envio_planilha(container):
    service = Mock()
    container.enviar_evento_planilha_service.override(providers.Object(service))
    return service


class TestHandlers:

    def test_sincronizar(self, envio_planilha):
        envio_planilha.execute.return_value = _resultado(EstadoEnvio.CONFIRMADO)

        resultado = handlers.sincronizar_evento_com_planilha('5')

        envio_planilha.execute.assert_called_once_with(5)
        assert resultado['estado'] == 'confirmado'

    def test_sincronizar_evento_removido(self, envio_planilha):
        envio_planilha.execute.side_effect = EntityNotFoundError('Evento não encontrado')

        assert handlers.sincronizar_evento_com_planilha('5') is None

    def test_sincronizar_planilha_inacessivel(self, envio_planilha):
        envio_planilha.execute.return_value = _resultado(EstadoEnvio.RECUPERADO_LOCALMENTE)

        with pytest.raises(handlers.PlanilhaIndisponivel):
            handlers.sincronizar_evento_com_planilha('5')

    def test_on_evento_criado_nao_propaga_indisponibilidade(self, envio_planilha):
        envio_planilha.execute.return_value = _resultado(EstadoEnvio.RECUPERADO_LOCALMENTE)

        handlers.on_evento_criado(_evento_criado('5'))

    def test_handle_evento_criado_desabilitado(self, settings, envio_planilha):
        settings.PLANILHA_ENVIAR_AO_CRIAR = False

        assert handlers.handle_evento_criado(_evento_criado().to_dict()) is None
        envio_planilha.execute.assert_not_called()

    def test_handle_evento_criado_envia(self, settings, envio_planilha):
        settings.PLANILHA_ENVIAR_AO_CRIAR = True
        envio_planilha.execute.return_value = _resultado(EstadoEnvio.CONFIRMADO)

        resultado = handlers.handle_evento_criado(_evento_criado('3').to_dict())

        assert resultado['estado'] == 'confirmado'
        envio_planilha.execute.assert_called_once_with(3)

    def test_handle_evento_criado_reagenda(self, settings, envio_planilha):
        settings.PLANILHA_ENVIAR_AO_CRIAR = True
        envio_planilha.execute.return_value = _resultado(EstadoEnvio.RECUPERADO_LOCALMENTE)

        # chamada direta: retry relança a exceção original
        with pytest.raises(handlers.PlanilhaIndisponivel):
            handlers.handle_evento_criado(_evento_criado('3').to_dict())

    def test_falha_definitiva_nao_reagenda(self, settings, envio_planilha):
        settings.PLANILHA_ENVIAR_AO_CRIAR = True
        envio_planilha.execute.return_value = _resultado(EstadoEnvio.FALHOU, success=False)

        resultado = handlers.handle_evento_criado(_evento_criado('3').to_dict())

        assert resultado['success'] is False

    def test_dispatch_roteia_pelo_tipo(self):
        handler = Mock()
        data = EventoRemovidoEvent(aggregate_id='2').to_dict()

        with patch.dict(handlers.EVENT_HANDLERS, {'EventoRemovidoEvent': handler}):
            handlers.dispatch_domain_event('EventoRemovidoEvent', data)

        handler.delay.assert_called_once_with(data)

    def test_dispatch_tipo_desconhecido(self):
        handlers.dispatch_domain_event('OutroEvent', {})


# =============================================================================
# Envio automático ao criar (modo sync)
# =============================================================================

@pytest.mark.django_db
def test_criar_evento_envia_a_planilha(settings, api_client, payload_evento):
    from src.config.container import get_container

    settings.PLANILHA_ENVIAR_AO_CRIAR = True
    submissao = Mock()
    submissao.submeter.return_value = _resultado(EstadoEnvio.CONFIRMADO)
    get_container().submissao_planilha.override(providers.Object(submissao))

    response = api_client.post_json('/api/events', payload_evento)

    assert response.status_code == 201
    enviado = submissao.submeter.call_args[0][0]
    assert enviado['id'] == response.json()['data']['id']
    assert enviado['nome'] == 'Noite de Samba'


@pytest.mark.django_db
def test_envio_automatico_desligado(api_client, payload_evento, container):
    submissao = Mock()
    container.submissao_planilha.override(providers.Object(submissao))

    api_client.post_json('/api/events', payload_evento)

    submissao.submeter.assert_not_called()
