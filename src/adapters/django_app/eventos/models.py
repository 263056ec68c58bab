"""
Django Models para o domínio de Eventos.

Models são ADAPTERS: só estrutura de dados. Regras ficam nas
entidades de src/core/eventos/entities.py e a conversão nos Mappers.

O catálogo de ingressos é gravado como texto JSON em ``ingressos``.
"""

from django.db import models
from django.utils import timezone


class EventoStatusChoices(models.TextChoices):
    """Choices de status (espelha EventoStatus do Core)."""
    DISPONIVEL = 'disponivel', 'Disponível'
    ESGOTADO = 'esgotado', 'Esgotado'
    CANCELADO = 'cancelado', 'Cancelado'
    PERSONALIZADO = 'personalizado', 'Personalizado'


class EventoModel(models.Model):
    """
    Model Django para persistência de Eventos.

    Fields:
        id: Autoincremento atribuído pelo banco
        data: Data no formato dd-mm-yyyy (texto, como no JSON da API)
        ingressos: Catálogo {categoria: [ingressos]} em JSON
        ativo: False após remoção lógica
    """

    nome = models.CharField(
        max_length=255,
        help_text="Nome do evento"
    )

    artista = models.CharField(
        max_length=255,
        help_text="Artista ou banda"
    )

    data = models.CharField(
        max_length=10,
        db_index=True,
        help_text="Data do evento (dd-mm-yyyy)"
    )

    hora_inicio = models.CharField(max_length=5, help_text="HH:mm")
    hora_termino = models.CharField(max_length=5, blank=True, default='', help_text="HH:mm")
    fuso_horario = models.CharField(max_length=20, default='GMT-4')

    status = models.CharField(
        max_length=20,
        choices=EventoStatusChoices.choices,
        default=EventoStatusChoices.DISPONIVEL,
        db_index=True,
    )

    status_personalizado = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Texto exibido quando o status é 'personalizado'"
    )

    endereco = models.TextField(blank=True, default='')
    descricao = models.TextField(blank=True, default='')

    ingressos = models.TextField(
        default='{}',
        help_text="Catálogo de ingressos em JSON"
    )

    data_cadastro = models.DateTimeField(default=timezone.now, db_index=True)
    data_atualizacao = models.DateTimeField(default=timezone.now)
    usuario = models.CharField(max_length=100, default='Sistema')
    ativo = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'events'
        verbose_name = 'Evento'
        verbose_name_plural = 'Eventos'
        ordering = ['-data_cadastro', '-id']
        indexes = [
            models.Index(fields=['ativo', 'data'], name='events_ativo_data_idx'),
            models.Index(fields=['ativo', 'status'], name='events_ativo_status_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.nome} - {self.artista} ({self.data})"
