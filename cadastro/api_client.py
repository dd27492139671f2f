# cadastro/api_client.py

import logging

import requests

logger = logging.getLogger(__name__)


class AlunoApiError(Exception):
    """Falha de comunicação com a API ou resposta inesperada."""

    def __init__(self, mensagem, status_code=None):
        super().__init__(mensagem)
        self.status_code = status_code


class AlunoApiClient:
    """
    Cliente do endpoint de coleção /aluno.

    Toda resposta de sucesso traz o registro (ou a lista) no campo 'data'.
    """

    RECURSO = '/aluno'

    def __init__(self, base_url, timeout=None, http=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()

    def api_request(self, endpoint, method='GET', json=None):
        """
        Função auxiliar para fazer requisições à API.
        Retorna a resposta quando o status é 2xx; caso contrário lança AlunoApiError.
        """
        url = f"{self.base_url}{endpoint}"

        try:
            if method == 'GET':
                response = self.http.get(url, timeout=self.timeout)
            elif method == 'POST':
                response = self.http.post(url, json=json, timeout=self.timeout)
            elif method == 'PUT':
                response = self.http.put(url, json=json, timeout=self.timeout)
            elif method == 'DELETE':
                response = self.http.delete(url, timeout=self.timeout)
            else:
                raise ValueError(f"Método HTTP não suportado: {method}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Erro na requisição {method} {url}: {e}")
            raise AlunoApiError(f"Falha de comunicação com a API: {e}") from e

        logger.info(f"API Request: {method} {url} - Status: {response.status_code}")

        if not response.ok:
            raise AlunoApiError(self._mensagem_erro(response), status_code=response.status_code)
        return response

    def listar(self):
        response = self.api_request(self.RECURSO)
        alunos = self._extrair_data(response)
        if not isinstance(alunos, list):
            raise AlunoApiError("Campo 'data' da listagem não é uma lista")
        return alunos

    def criar(self, dados):
        response = self.api_request(self.RECURSO, method='POST', json=dados)
        return self._extrair_data(response)

    def atualizar(self, aluno_id, dados):
        response = self.api_request(f"{self.RECURSO}/{aluno_id}", method='PUT', json=dados)
        return self._extrair_data(response)

    def excluir(self, aluno_id):
        # O corpo da resposta do DELETE é ignorado
        self.api_request(f"{self.RECURSO}/{aluno_id}", method='DELETE')

    @staticmethod
    def _extrair_data(response):
        try:
            corpo = response.json()
        except ValueError as e:
            raise AlunoApiError("Resposta da API não é um JSON válido", status_code=response.status_code) from e

        if not isinstance(corpo, dict) or 'data' not in corpo:
            raise AlunoApiError("Resposta da API sem o campo 'data'", status_code=response.status_code)
        return corpo['data']

    @staticmethod
    def _mensagem_erro(response):
        mensagem = f"API respondeu com status {response.status_code}"
        try:
            detalhe = response.json().get("detail", "")
        except (ValueError, AttributeError):
            detalhe = ""
        if detalhe:
            mensagem += f": {detalhe}"
        return mensagem
