"""
Core Domain Layer.

Lógica de negócio pura do Allure Eventos, sem dependências de
framework: cadastro de eventos e ingressos, normalização da saída
da IA, envio para a planilha legada e autenticação.
"""
