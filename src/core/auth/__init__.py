"""
Autenticação como capacidade injetada.

O core define credenciais, sessão e os ports; a emissão/validação
de tokens assinados e a conferência de senha ficam no adapter Django.
"""
