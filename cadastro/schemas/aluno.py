# cadastro/schemas/aluno.py
import re
from datetime import date
from typing import Dict, Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from cadastro.datas import normalizar_data

# Ordem em que os campos aparecem no formulário
CAMPOS_FORMULARIO = ('nome', 'cpf', 'email', 'dt_nascimento', 'celular', 'apelido', 'matricula')

CPF_REGEX = re.compile(r'^[0-9]{3}\.[0-9]{3}\.[0-9]{3}-[0-9]{2}$')
CELULAR_REGEX = re.compile(r'\([0-9]{2}\) [0-9]{5}-[0-9]{4}')

MENSAGENS_INVALIDO = {
    'nome': 'Nome é obrigatório',
    'cpf': 'CPF inválido',
    'email': 'Email inválido',
    'dt_nascimento': 'Data de Nascimento inválida',
    'celular': 'Celular inválido',
    'matricula': 'Matrícula é obrigatória',
}


class AlunoBase(BaseModel):
    nome: str = Field(..., min_length=1)
    cpf: str = Field(..., pattern=CPF_REGEX.pattern)
    email: EmailStr
    dt_nascimento: date
    celular: str
    apelido: str = ''
    matricula: str = Field(..., min_length=1)


class AlunoCreate(AlunoBase):
    """Corpo enviado em POST /aluno e PUT /aluno/{id}."""
    pass


class AlunoRead(BaseModel):
    """
    Registro devolvido pela API. Só o id é obrigatório: registros antigos
    podem vir sem apelido ou com a data em formato ISO completo.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    nome: Optional[str] = None
    cpf: Optional[str] = None
    email: Optional[str] = None
    dt_nascimento: Optional[str] = None
    celular: Optional[str] = None
    apelido: Optional[str] = None
    matricula: Optional[str] = None


def _obrigatorio(v, mensagem):
    if not v.strip():
        raise PydanticCustomError('obrigatorio', mensagem)
    return v


class AlunoForm(BaseModel):
    """
    Regras de validação do formulário. Cada campo é validado de forma
    independente e gera no máximo uma mensagem.
    """
    nome: str = ''
    cpf: str = ''
    email: str = ''
    dt_nascimento: str = ''
    celular: str = ''
    apelido: str = ''
    matricula: str = ''

    @field_validator(*CAMPOS_FORMULARIO, mode='before')
    @classmethod
    def none_para_str_vazia(cls, v):
        """Converte None em string vazia antes da validação principal."""
        if v is None:
            return ''
        return v

    @field_validator('nome')
    @classmethod
    def validar_nome(cls, v):
        return _obrigatorio(v, 'Nome é obrigatório')

    @field_validator('cpf')
    @classmethod
    def validar_cpf(cls, v):
        _obrigatorio(v, 'CPF é obrigatório')
        if not CPF_REGEX.fullmatch(v):
            raise PydanticCustomError('cpf_invalido', 'CPF inválido')
        return v

    @field_validator('email')
    @classmethod
    def validar_email(cls, v):
        _obrigatorio(v, 'Email é obrigatório')
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError('email_invalido', 'Email inválido')
        return v

    @field_validator('dt_nascimento')
    @classmethod
    def validar_dt_nascimento(cls, v):
        _obrigatorio(v, 'Data de Nascimento é obrigatória')
        try:
            return normalizar_data(v)
        except ValueError:
            raise PydanticCustomError('data_invalida', 'Data de Nascimento inválida')

    @field_validator('celular')
    @classmethod
    def validar_celular(cls, v):
        _obrigatorio(v, 'Celular é obrigatório')
        if not CELULAR_REGEX.search(v):
            raise PydanticCustomError('celular_invalido', 'Celular inválido')
        return v

    @field_validator('matricula')
    @classmethod
    def validar_matricula(cls, v):
        return _obrigatorio(v, 'Matrícula é obrigatória')


def rascunho_vazio() -> Dict[str, str]:
    return {campo: '' for campo in CAMPOS_FORMULARIO}


def validar_rascunho(valores) -> Tuple[Optional[AlunoCreate], Dict[str, str]]:
    """
    Valida um rascunho do formulário.

    Retorna (payload, {}) quando todas as regras passam, com a data já
    normalizada para YYYY-MM-DD, ou (None, erros) com uma mensagem por campo.
    """
    try:
        form = AlunoForm(**{campo: valores.get(campo) for campo in CAMPOS_FORMULARIO})
        return AlunoCreate(**form.model_dump()), {}
    except ValidationError as e:
        erros = {}
        for erro in e.errors():
            campo = erro['loc'][0]
            # Mensagens do AlunoCreate vêm em inglês; usa a mensagem do formulário
            mensagem = erro['msg'] if e.title == AlunoForm.__name__ else MENSAGENS_INVALIDO.get(campo, erro['msg'])
            erros.setdefault(campo, mensagem)
        return None, erros


def aluno_para_rascunho(aluno) -> Dict[str, str]:
    """
    Converte um registro da API nos valores do formulário.

    Campos ausentes ou nulos viram string vazia; a data mantém só a parte
    YYYY-MM-DD.
    """
    if isinstance(aluno, BaseModel):
        aluno = aluno.model_dump()

    rascunho = {}
    for campo in CAMPOS_FORMULARIO:
        valor = aluno.get(campo)
        rascunho[campo] = '' if valor is None else str(valor)
    rascunho['dt_nascimento'] = rascunho['dt_nascimento'].split('T')[0]
    return rascunho
