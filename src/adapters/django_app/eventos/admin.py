"""
Django Admin para o domínio de Eventos.
"""

from django.contrib import admin

from .mappers import ingressos_de_texto
from .models import EventoModel


@admin.register(EventoModel)
class EventoAdmin(admin.ModelAdmin):
    """Admin para EventoModel."""

    list_display = [
        'id',
        'nome',
        'artista',
        'data',
        'hora_inicio',
        'status',
        'total_ingressos',
        'ativo',
        'data_cadastro',
    ]

    list_filter = [
        'status',
        'ativo',
        'data_cadastro',
    ]

    search_fields = [
        'nome',
        'artista',
        'data',
    ]

    readonly_fields = [
        'data_cadastro',
        'data_atualizacao',
    ]

    fieldsets = [
        ('Evento', {
            'fields': ['nome', 'artista', 'data', 'hora_inicio', 'hora_termino', 'fuso_horario'],
        }),
        ('Status', {
            'fields': ['status', 'status_personalizado', 'ativo'],
        }),
        ('Local e Descrição', {
            'fields': ['endereco', 'descricao'],
        }),
        ('Ingressos', {
            'fields': ['ingressos'],
        }),
        ('Registro', {
            'fields': ['usuario', 'data_cadastro', 'data_atualizacao'],
            'classes': ['collapse'],
        }),
    ]

    @admin.display(description='Ingressos')
    def total_ingressos(self, obj: EventoModel) -> int:
        return sum(len(itens) for itens in ingressos_de_texto(obj.ingressos).values())
