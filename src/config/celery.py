"""
Configuração do Celery para processamento assíncrono.

O Celery processa os Domain Events de eventos quando
``EVENT_PUBLISHER_MODE=celery`` (ex.: envio automático à planilha
após o cadastro, com retry se a planilha estiver fora do ar).

Arquitetura:
- Broker: Redis (mensagens entre Django e Workers)
- Backend: Redis (resultados de tarefas)
- Workers: Processos que executam as tarefas

Uso:
    celery -A src.config.celery worker -l INFO -Q default,events
"""

import os

from celery import Celery
from kombu import Exchange, Queue

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

app = Celery('allure_eventos')

# Broker, backend, serialização e retry vêm das settings CELERY_*
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    # Monitoramento
    worker_send_task_events=True,
    task_send_sent_event=True,
)

# Definir filas
app.conf.task_default_queue = 'default'
app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
)

# Roteamento de tarefas para filas
app.conf.task_routes = {
    'src.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

app.autodiscover_tasks(['src.adapters.django_app.events'], related_name='handlers')
