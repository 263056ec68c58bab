"""
Prompts do extrator de dados de eventos.
"""

_INSTRUCOES = """Analise {origem} e extraia as seguintes informações sobre o evento:
- Nome do evento
- Local do evento
- Data (formato dd-mm-yyyy)
- Hora de início (formato HH:mm)
- Hora de término (formato HH:mm)
- Status (disponível, esgotado, cancelado)
- Endereço do evento
- Descrição
- Ingressos (lista com nome, preço e descrição)

Retorne APENAS um objeto JSON válido, sem markdown, sem explicações adicionais, seguindo esta estrutura:
{{
  "nome": "nome do evento",
  "local": "nome do local",
  "data": "dd-mm-yyyy",
  "horaInicio": "HH:mm",
  "horaFim": "HH:mm",
  "status": "disponivel",
  "endereco": "endereço completo",
  "descricao": "descrição do evento",
  "ingressos": [
    {{"id": "1", "nome": "Pista", "preco": 100, "descricao": "Ingresso comum"}}
  ]
}}

Se alguma informação não estiver disponível, omita o campo ou use string vazia.
Para preços, extraia apenas números (sem R$, sem vírgulas de milhar).
Para datas, converta para o formato dd-mm-yyyy.
Para horários, use formato 24h (HH:mm)."""


PROMPT_IMAGEM = (
    "Você é um assistente especializado em extrair informações de eventos de imagens.\n"
    + _INSTRUCOES.format(origem="a imagem")
)

PROMPT_TEXTO = (
    "Você é um assistente especializado em extrair informações de eventos de textos.\n"
    + _INSTRUCOES.format(origem="o texto")
)
