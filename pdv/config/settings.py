import os
from decimal import Decimal
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)


def _bool_env(nome: str, padrao: str) -> bool:
    return os.getenv(nome, padrao).lower() in ("1", "true", "yes", "on")


# Configuração de conexão
DB_CONFIG = {
    'database': os.getenv('DB_NAME'),
    'user': os.getenv('DB_USER'),
    'password': os.getenv('DB_PASSWORD'),
    'host': os.getenv('DB_HOST'),
    'port': int(os.getenv('DB_PORT', 5432)),
}

# SSL do banco (opcional)
DB_SSL_MODE = os.getenv('DB_SSL_MODE')  # ex.: require, verify-ca, verify-full

# URL completa (tem precedência sobre DB_CONFIG; aceita sqlite para desenvolvimento)
DATABASE_URL = os.getenv("DATABASE_URL")

# Timezone e logs
TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = _bool_env("CORS_ALLOW_ALL", "false")

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = _bool_env("ENABLE_DOCS", "true")

# Regras de negócio do PDV
TOLERANCIA_MONETARIA = Decimal(os.getenv("TOLERANCIA_MONETARIA", "0.01"))

PALAVRAS_CHAVE_BEBIDA = [
    p.strip().lower()
    for p in os.getenv("PALAVRAS_CHAVE_BEBIDA", "bebida,refrigerante,suco,água").split(",")
    if p.strip()
]

# Estorno: false = rebaixa a venda direto para "pendente" (comportamento histórico)
ESTORNO_RECALCULA_STATUS_VENDA = _bool_env("ESTORNO_RECALCULA_STATUS_VENDA", "false")

# Fechamento de caixa: permite mais de um fechamento no mesmo dia (turnos)
PERMITIR_MULTIPLOS_FECHAMENTOS_DIA = _bool_env("PERMITIR_MULTIPLOS_FECHAMENTOS_DIA", "true")
