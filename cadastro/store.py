# -*- coding: utf-8 -*-
"""
Estado local da lista de alunos.

O AlunoStore é o único dono da lista: as telas pedem comandos (carregar,
criar, atualizar, excluir) e recebem de volta uma tupla imutável com o
estado após cada comando bem-sucedido. Em caso de falha o erro é registrado
no log e a lista permanece como estava.
"""

import logging
import threading
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from cadastro.api_client import AlunoApiError
from cadastro.schemas.aluno import AlunoCreate, AlunoRead

logger = logging.getLogger(__name__)

Snapshot = Tuple[AlunoRead, ...]


class AlunoStore:

    def __init__(self, api):
        self.api = api
        self.ultimo_erro: Optional[str] = None
        self._alunos: Snapshot = ()
        self._ouvintes: List[Callable[[Snapshot], None]] = []
        self._lock = threading.Lock()

    @property
    def alunos(self) -> Snapshot:
        return self._alunos

    def inscrever(self, ouvinte):
        """Registra uma função chamada com o novo snapshot após cada comando. Retorna a função para cancelar."""
        self._ouvintes.append(ouvinte)

        def cancelar():
            if ouvinte in self._ouvintes:
                self._ouvintes.remove(ouvinte)
        return cancelar

    def buscar(self, aluno_id) -> Optional[AlunoRead]:
        for aluno in self._alunos:
            if aluno.id == aluno_id:
                return aluno
        return None

    def carregar(self) -> Optional[Snapshot]:
        """Busca a coleção completa e substitui a lista local."""
        self.ultimo_erro = None
        try:
            alunos = tuple(AlunoRead.model_validate(item) for item in self.api.listar())
        except (AlunoApiError, ValidationError) as e:
            return self._falha("Erro ao buscar alunos", e)

        logger.info(f"Carregados {len(alunos)} alunos")
        return self._publicar(lambda atual: alunos)

    def criar(self, rascunho: AlunoCreate) -> Optional[AlunoRead]:
        self.ultimo_erro = None
        try:
            novo = AlunoRead.model_validate(self.api.criar(rascunho.model_dump(mode='json')))
        except (AlunoApiError, ValidationError) as e:
            return self._falha("Erro ao criar aluno", e)

        self._publicar(lambda atual: atual + (novo,))
        return novo

    def atualizar(self, aluno_id, rascunho: AlunoCreate) -> Optional[AlunoRead]:
        self.ultimo_erro = None
        try:
            atualizado = AlunoRead.model_validate(self.api.atualizar(aluno_id, rascunho.model_dump(mode='json')))
        except (AlunoApiError, ValidationError) as e:
            return self._falha("Erro ao atualizar aluno", e)

        def substituir(atual):
            if not any(aluno.id == aluno_id for aluno in atual):
                logger.warning(f"Aluno {aluno_id} atualizado na API mas ausente da lista local")
            return tuple(atualizado if aluno.id == aluno_id else aluno for aluno in atual)

        self._publicar(substituir)
        return atualizado

    def excluir(self, aluno_id) -> bool:
        self.ultimo_erro = None
        try:
            self.api.excluir(aluno_id)
        except AlunoApiError as e:
            self._falha("Erro ao excluir aluno", e)
            return False

        logger.info(f"Aluno {aluno_id} excluído")
        self._publicar(lambda atual: tuple(aluno for aluno in atual if aluno.id != aluno_id))
        return True

    def _publicar(self, transicao) -> Snapshot:
        with self._lock:
            self._alunos = transicao(self._alunos)
            snapshot = self._alunos
        for ouvinte in list(self._ouvintes):
            ouvinte(snapshot)
        return snapshot

    def _falha(self, contexto, erro):
        self.ultimo_erro = f"{contexto}: {erro}"
        logger.error(self.ultimo_erro)
        return None
