import os
from dotenv import load_dotenv

load_dotenv()


def _timeout_from_env():
    valor = os.environ.get('API_TIMEOUT')
    return float(valor) if valor else None


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    API_BASE_URL = os.environ.get('API_BASE_URL', 'http://localhost:8000')
    API_TIMEOUT = _timeout_from_env()  # None = sem timeout
    MAX_SESSOES = int(os.environ.get('MAX_SESSOES', 1000))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 5700))
    DEBUG = os.environ.get('DEBUG', '').lower() in ('1', 'true', 'yes')
