"""Pytest fixtures: backend /aluno simulado em memória via adapter do requests."""

import json
from urllib.parse import urlparse

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.models import Response

from cadastro.api_client import AlunoApiClient
from cadastro.form_session import FormSession
from cadastro.store import AlunoStore

BASE_URL = "http://api.teste"


def aluno_valido(**sobrescritas):
    dados = {
        "nome": "Ana",
        "cpf": "123.456.789-09",
        "email": "a@x.com",
        "dt_nascimento": "2000-01-15",
        "celular": "(11) 91234-5678",
        "apelido": "",
        "matricula": "E1",
    }
    dados.update(sobrescritas)
    return dados


class FakeBackendAdapter(BaseAdapter):
    """Simula GET/POST/PUT/DELETE em /aluno, respondendo com o envelope {'data': ...}."""

    def __init__(self):
        super().__init__()
        self.alunos = {}
        self.proximo_id = 1
        self.chamadas = []
        self.falhar = set()
        self.offline = False
        self.corpo_forcado = None

    def adicionar(self, **campos):
        aluno = dict(campos)
        aluno["id"] = self.proximo_id
        self.proximo_id += 1
        self.alunos[aluno["id"]] = aluno
        return aluno

    def chamadas_de(self, metodo):
        return [c for c in self.chamadas if c[0] == metodo]

    def send(self, request, **kwargs):
        caminho = urlparse(request.url).path
        corpo = json.loads(request.body) if request.body else None
        self.chamadas.append((request.method, caminho, corpo))

        if self.offline:
            raise requests.exceptions.ConnectionError("backend fora do ar")
        if request.method in self.falhar:
            return self._resposta(request, 500, {"detail": "Falha simulada"})
        if self.corpo_forcado is not None:
            return self._resposta(request, 200, raw=self.corpo_forcado)

        partes = [p for p in caminho.split("/") if p]
        if not partes or partes[0] != "aluno":
            return self._resposta(request, 404, {"detail": "Not Found"})

        if len(partes) == 1:
            if request.method == "GET":
                return self._resposta(request, 200, {"data": list(self.alunos.values())})
            if request.method == "POST":
                return self._resposta(request, 201, {"data": self.adicionar(**corpo)})
            return self._resposta(request, 405, {"detail": "Method Not Allowed"})

        aluno_id = int(partes[1])
        if aluno_id not in self.alunos:
            return self._resposta(request, 404, {"detail": "Aluno não encontrado"})
        if request.method == "PUT":
            self.alunos[aluno_id] = dict(corpo, id=aluno_id)
            return self._resposta(request, 200, {"data": self.alunos[aluno_id]})
        if request.method == "DELETE":
            del self.alunos[aluno_id]
            return self._resposta(request, 204)
        return self._resposta(request, 405, {"detail": "Method Not Allowed"})

    def close(self):
        pass

    @staticmethod
    def _resposta(request, status, corpo=None, raw=None):
        response = Response()
        response.status_code = status
        response.request = request
        response.url = request.url
        response.encoding = "utf-8"
        response.headers["Content-Type"] = "application/json"
        if raw is not None:
            response._content = raw.encode("utf-8")
        elif corpo is not None:
            response._content = json.dumps(corpo).encode("utf-8")
        else:
            response._content = b""
        return response


@pytest.fixture
def backend():
    return FakeBackendAdapter()


@pytest.fixture
def http(backend):
    sessao = requests.Session()
    sessao.mount(BASE_URL, backend)
    return sessao


@pytest.fixture
def api(http):
    return AlunoApiClient(BASE_URL, http=http)


@pytest.fixture
def store(api):
    return AlunoStore(api)


@pytest.fixture
def form(store):
    return FormSession(store)


@pytest.fixture
def client(http):
    from frontend.app import app
    from frontend.utils import limpar_sessoes

    app.config.update(TESTING=True, API_BASE_URL=BASE_URL, API_HTTP_SESSION=http)
    limpar_sessoes()
    with app.test_client() as test_client:
        yield test_client
    limpar_sessoes()
    app.config.pop("API_HTTP_SESSION", None)
