
# -*- coding: utf-8 -*-
"""
Arquivo principal: inicia o formulário web de cadastro de alunos.
"""

from frontend.app import app


def run():
    app.logger.info(f"Usando a API em {app.config['API_BASE_URL']}")
    app.run(debug=app.config['DEBUG'], host=app.config['HOST'], port=app.config['PORT'])


if __name__ == '__main__':
    run()
