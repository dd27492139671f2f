# -*- coding: utf-8 -*-
"""
Funções auxiliares para datas trocadas entre o formulário e a API.
"""

from datetime import date, datetime

FORMATOS_ACEITOS = ('%Y-%m-%d', '%d/%m/%Y')


def normalizar_data(valor):
    """
    Converte a data digitada no formulário para o formato YYYY-MM-DD.

    Aceita YYYY-MM-DD, datas ISO com horário (o horário é descartado) e
    DD/MM/YYYY. Lança ValueError se o valor não for uma data de calendário.
    """
    if isinstance(valor, datetime):
        return valor.date().isoformat()
    if isinstance(valor, date):
        return valor.isoformat()

    texto = str(valor or '').strip()
    if not texto:
        raise ValueError("Data vazia")

    for formato in FORMATOS_ACEITOS:
        try:
            return datetime.strptime(texto, formato).date().isoformat()
        except ValueError:
            continue

    # Trata 'Z' de UTC
    dt_obj = datetime.fromisoformat(texto.replace('Z', '+00:00'))
    return dt_obj.date().isoformat()


def formatar_data_br(valor):
    """Exibe uma data como DD/MM/YYYY; valores não reconhecidos voltam como vieram."""
    if not valor:
        return ""
    try:
        return date.fromisoformat(normalizar_data(valor)).strftime('%d/%m/%Y')
    except (ValueError, TypeError):
        return valor
