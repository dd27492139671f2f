from flask import Flask, render_template, request, redirect, url_for, flash, jsonify
import logging

from cadastro.datas import formatar_data_br
from cadastro.schemas.aluno import CAMPOS_FORMULARIO
from frontend.config import Config
from frontend.utils import sessao_atual

app = Flask(__name__)
app.config.from_object(Config)

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

ROTULOS = {
    'nome': 'Nome',
    'cpf': 'CPF',
    'email': 'Email',
    'dt_nascimento': 'Data de Nascimento',
    'celular': 'Celular',
    'apelido': 'Apelido',
    'matricula': 'Matrícula',
}


@app.template_filter('format_date_br')
def format_date_br_filter(value):
    return formatar_data_br(value)


def _render_form(form, status=200):
    return render_template(
        'alunos/form.html',
        form=form,
        alunos=form.store.alunos,
        campos=CAMPOS_FORMULARIO,
        rotulos=ROTULOS,
    ), status


@app.route('/')
def index():
    """Formulário de cadastro e lista de alunos."""
    return _render_form(sessao_atual())


@app.route("/alunos/salvar", methods=["POST"])
def alunos_salvar():
    form = sessao_atual()
    form.set_values({campo: request.form.get(campo, '') for campo in CAMPOS_FORMULARIO})

    editando = form.editing_id is not None
    aluno = form.submit()

    if aluno is not None:
        flash("Aluno atualizado com sucesso!" if editando else "Aluno cadastrado com sucesso!", "success")
        return redirect(url_for("index"))

    if form.errors:
        return _render_form(form, 422)

    error_msg = "Erro ao salvar aluno."
    if form.store.ultimo_erro:
        error_msg += f" {form.store.ultimo_erro}"
    flash(error_msg, "error")
    return redirect(url_for("index"))


@app.route("/alunos/<int:id>/editar", methods=["POST"])
def alunos_editar(id):
    form = sessao_atual()
    aluno = form.store.buscar(id)
    if aluno is None:
        flash("Aluno não encontrado.", "error")
    else:
        form.editar(aluno)
    return redirect(url_for("index"))


@app.route("/alunos/<int:id>/deletar", methods=["POST"])
def alunos_deletar(id):
    form = sessao_atual()
    if form.store.excluir(id):
        flash("Aluno excluído com sucesso!", "success")
    else:
        flash(f"Erro ao excluir aluno. {form.store.ultimo_erro}", "error")
    return redirect(url_for("index"))


@app.route("/alunos/recarregar", methods=["POST"])
def alunos_recarregar():
    form = sessao_atual()
    if form.store.carregar() is None:
        flash("Erro ao carregar lista de alunos.", "error")
    return redirect(url_for("index"))


@app.route("/alunos/campo", methods=["POST"])
def alunos_campo():
    """Validação de um campo ao sair dele (blur)."""
    form = sessao_atual()
    dados = request.get_json(silent=True) or request.form
    if not isinstance(dados, dict):
        return jsonify({"error": "Corpo da requisição deve ser um objeto JSON"}), 400
    campo = dados.get("campo")
    if campo not in CAMPOS_FORMULARIO:
        return jsonify({"error": f"Campo desconhecido: {campo}"}), 400

    form.handle_change(campo, dados.get("valor", ""))
    form.handle_blur(campo)
    return jsonify({"campo": campo, "erro": form.erros_visiveis.get(campo, "")})


@app.route("/api/alunos")
def api_alunos():
    form = sessao_atual()
    return jsonify({"data": [aluno.model_dump() for aluno in form.store.alunos]})
