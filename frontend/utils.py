# frontend/utils.py

import logging
import threading
from collections import OrderedDict
from uuid import uuid4

from flask import session, current_app, flash

from cadastro.api_client import AlunoApiClient
from cadastro.form_session import FormSession
from cadastro.store import AlunoStore

logger = logging.getLogger(__name__)

# Sessões de formulário em memória, uma por navegador (id guardado no cookie da sessão Flask).
# As menos usadas recentemente são descartadas quando o limite MAX_SESSOES é atingido.
_sessoes = OrderedDict()
_sessoes_lock = threading.Lock()


def criar_cliente():
    """
    Função auxiliar que monta o cliente da API a partir da configuração da aplicação.
    """
    return AlunoApiClient(
        current_app.config.get('API_BASE_URL', 'http://localhost:8000'),
        timeout=current_app.config.get('API_TIMEOUT'),
        http=current_app.config.get('API_HTTP_SESSION'),
    )


def _registrar_lista(alunos):
    logger.info(f"Lista de alunos atualizada: {len(alunos)} alunos")


def sessao_atual():
    """
    Retorna a FormSession do navegador atual, criando-a (e carregando a lista
    de alunos) na primeira visita.
    """
    sessao_id = session.get('sessao_id')
    with _sessoes_lock:
        form = _sessoes.get(sessao_id) if sessao_id else None
        nova = form is None
        if not nova:
            _sessoes.move_to_end(sessao_id)
        else:
            sessao_id = uuid4().hex
            session['sessao_id'] = sessao_id
            store = AlunoStore(criar_cliente())
            store.inscrever(_registrar_lista)
            form = FormSession(store)
            _sessoes[sessao_id] = form
            limite = current_app.config.get('MAX_SESSOES', 1000)
            while len(_sessoes) > limite:
                descartada, _ = _sessoes.popitem(last=False)
                logger.info(f"Sessão de formulário {descartada} descartada (limite de {limite})")

    if nova and form.store.carregar() is None:
        flash("Erro ao carregar lista de alunos.", "error")
    return form


def limpar_sessoes():
    with _sessoes_lock:
        _sessoes.clear()
