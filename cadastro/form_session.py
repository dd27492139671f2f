# -*- coding: utf-8 -*-
"""
Sessão do formulário de alunos: rascunho, campos tocados, mensagens de erro
e o alvo da edição (None = próximo envio cria; id = próximo envio atualiza).
"""

import logging
from typing import Dict, Optional

from cadastro.schemas.aluno import (
    CAMPOS_FORMULARIO, aluno_para_rascunho, rascunho_vazio, validar_rascunho,
)

logger = logging.getLogger(__name__)


class FormSession:

    def __init__(self, store):
        self.store = store
        self.values: Dict[str, str] = rascunho_vazio()
        self.touched: Dict[str, bool] = {campo: False for campo in CAMPOS_FORMULARIO}
        self.errors: Dict[str, str] = {}
        self.editing_id: Optional[int] = None

    @property
    def modo(self):
        return 'criar' if self.editing_id is None else 'editar'

    @property
    def erros_visiveis(self) -> Dict[str, str]:
        """Erros apenas dos campos já tocados, como exibidos ao lado de cada campo."""
        return {campo: msg for campo, msg in self.errors.items() if self.touched.get(campo)}

    def handle_change(self, campo, valor):
        if campo not in self.values:
            raise KeyError(campo)
        self.values[campo] = '' if valor is None else valor
        self.validate()

    def handle_blur(self, campo):
        if campo not in self.touched:
            raise KeyError(campo)
        self.touched[campo] = True
        self.validate()

    def set_values(self, valores):
        novos = rascunho_vazio()
        novos.update({campo: valores[campo] for campo in CAMPOS_FORMULARIO if valores.get(campo) is not None})
        self.values = novos
        self.validate()

    def validate(self) -> Dict[str, str]:
        _, self.errors = validar_rascunho(self.values)
        return self.errors

    def submit(self):
        """
        Envia o rascunho para o store.

        Nada é enviado se alguma regra falhar. Em caso de sucesso a sessão volta
        ao modo de criação com o rascunho limpo; em caso de falha da API o
        rascunho e o alvo da edição são mantidos.
        """
        for campo in self.touched:
            self.touched[campo] = True

        payload, self.errors = validar_rascunho(self.values)
        if payload is None:
            logger.info(f"Envio bloqueado por erros de validação: {sorted(self.errors)}")
            return None

        if self.editing_id is None:
            resultado = self.store.criar(payload)
        else:
            resultado = self.store.atualizar(self.editing_id, payload)

        if resultado is not None:
            self.reset()
        return resultado

    def editar(self, aluno):
        self.editing_id = aluno.id
        self.values = aluno_para_rascunho(aluno)
        self.touched = {campo: False for campo in CAMPOS_FORMULARIO}
        self.errors = {}

    def reset(self):
        self.values = rascunho_vazio()
        self.touched = {campo: False for campo in CAMPOS_FORMULARIO}
        self.errors = {}
        self.editing_id = None
