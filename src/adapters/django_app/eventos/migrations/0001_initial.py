"""
Migration inicial para o domínio de Eventos.

Cria a tabela ``events``.
"""

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='EventoModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('nome', models.CharField(
                    max_length=255,
                    help_text='Nome do evento'
                )),
                ('artista', models.CharField(
                    max_length=255,
                    help_text='Artista ou banda'
                )),
                ('data', models.CharField(
                    max_length=10,
                    db_index=True,
                    help_text='Data do evento (dd-mm-yyyy)'
                )),
                ('hora_inicio', models.CharField(max_length=5, help_text='HH:mm')),
                ('hora_termino', models.CharField(
                    max_length=5,
                    blank=True,
                    default='',
                    help_text='HH:mm'
                )),
                ('fuso_horario', models.CharField(max_length=20, default='GMT-4')),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('disponivel', 'Disponível'),
                        ('esgotado', 'Esgotado'),
                        ('cancelado', 'Cancelado'),
                        ('personalizado', 'Personalizado'),
                    ],
                    default='disponivel',
                    db_index=True
                )),
                ('status_personalizado', models.CharField(
                    max_length=255,
                    null=True,
                    blank=True,
                    help_text="Texto exibido quando o status é 'personalizado'"
                )),
                ('endereco', models.TextField(blank=True, default='')),
                ('descricao', models.TextField(blank=True, default='')),
                ('ingressos', models.TextField(
                    default='{}',
                    help_text='Catálogo de ingressos em JSON'
                )),
                ('data_cadastro', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True
                )),
                ('data_atualizacao', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
                ('usuario', models.CharField(max_length=100, default='Sistema')),
                ('ativo', models.BooleanField(default=True, db_index=True)),
            ],
            options={
                'verbose_name': 'Evento',
                'verbose_name_plural': 'Eventos',
                'db_table': 'events',
                'ordering': ['-data_cadastro', '-id'],
                'indexes': [
                    models.Index(fields=['ativo', 'data'], name='events_ativo_data_idx'),
                    models.Index(fields=['ativo', 'status'], name='events_ativo_status_idx'),
                ],
            },
        ),
    ]
