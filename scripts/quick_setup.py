#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Verifica conexão com o banco
3. Executa migrations
4. Cria usuário administrador da API (opcional)
5. Cria evento de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --admin-email admin@allure.com.br --admin-password '...'
    python scripts/quick_setup.py --with-sample-data
    python scripts/quick_setup.py --check-api
"""

import os
import sys
import argparse

# Raiz do projeto no path (imports "src.")
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_admin_user(email: str, password: str):
    """Cria (ou atualiza a senha do) administrador usado no login da API."""
    from django.contrib.auth import get_user_model

    User = get_user_model()
    user, created = User.objects.get_or_create(
        username=email,
        defaults={'email': email, 'is_staff': True, 'is_superuser': True},
    )
    user.set_password(password)
    user.save()

    acao = "criado" if created else "atualizado"
    print(f"👤 Administrador {acao}: {email}")


def create_sample_data():
    """Cria evento de exemplo pelo mesmo caminho da API."""
    from src.config.container import get_container
    from src.core.eventos.dtos import CriarEventoInputDTO

    service = get_container().criar_evento_service()

    print("📝 Criando evento de exemplo...")

    output = service.execute(CriarEventoInputDTO(
        nome='Noite de Samba',
        artista='Grupo Exemplo',
        data='24-09-2025',
        hora_inicio='20:00',
        hora_termino='23:59',
        endereco='Allure Music Hall',
        descricao='Evento de exemplo criado pelo quick_setup',
        ingressos={
            'setores_mesa': [
                {'id': 'mesa-1', 'nome': 'Mesa Setor A', 'preco': 400, 'descricao': '4 lugares'},
            ],
            'camarotes_premium': [
                {'id': 'vip-1', 'nome': 'Camarote VIP', 'preco': 1500, 'descricao': '10 pessoas'},
            ],
            'camarotes_empresariais': [],
        },
    ))

    print(f"   ✓ {output.nome} ({output.data}) id={output.id}")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except Exception as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def check_api():
    """Verifica a API REST em EVENTOS_API_URL (servidor precisa estar rodando)."""
    from django.conf import settings
    from src.adapters.http.api_client import EventosApiClient

    client = EventosApiClient(settings.EVENTOS_API_URL, timeout=10)

    print(f"🌐 Verificando API em {client.base_url}...")

    resposta = client.testar_conexao()
    if resposta.get('status') == 'ok':
        print(f"✅ API OK! (banco: {resposta.get('database')}, {resposta.get('responseTime')})")
        return True
    print(f"❌ API indisponível: {resposta.get('error')}")
    return False


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print(f"  Planilha: {settings.GOOGLE_SCRIPT_URL or 'modo simulação'}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. Acesse: http://localhost:8000/health")
    print("   3. Acesse: http://localhost:8000/api/events")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar evento de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )
    parser.add_argument(
        '--check-api',
        action='store_true',
        help='Verificar a API REST em EVENTOS_API_URL'
    )
    parser.add_argument(
        '--admin-email',
        default=os.getenv('ADMIN_EMAIL'),
        help='E-mail do administrador (padrão: $ADMIN_EMAIL)'
    )
    parser.add_argument(
        '--admin-password',
        default=os.getenv('ADMIN_PASSWORD'),
        help='Senha do administrador (padrão: $ADMIN_PASSWORD)'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🎵 Allure Eventos - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_api:
        check_api()
        return

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Sem DATABASE_URL/POSTGRES_HOST o SQLite local é usado.")
        return

    run_migrations()

    if args.admin_email and args.admin_password:
        create_admin_user(args.admin_email.strip().lower(), args.admin_password)

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
