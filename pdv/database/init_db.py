import logging

from sqlalchemy import text

from .db_connection import engine, Base, SCHEMAS
from . import models  # noqa: F401

logger = logging.getLogger(__name__)


def criar_schemas(bind=None):
    """Cria os schemas no Postgres (no sqlite os schemas são traduzidos e isto é ignorado)."""
    bind = bind or engine
    if bind.dialect.name != "postgresql":
        return
    with bind.begin() as conn:
        for schema in SCHEMAS:
            conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema}"))
            logger.info(f"✅ Schema '{schema}' verificado/criado.")


def criar_tabelas(bind=None):
    """Cria as tabelas respeitando a ordem de dependências."""
    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind, checkfirst=True)
        logger.info(f"✅ {len(Base.metadata.sorted_tables)} tabela(s) verificadas/criadas.")
    except Exception as e:
        logger.error(f"❌ Erro ao criar tabelas: {e}")
        raise


def inicializar_banco(bind=None):
    logger.info("Inicializando banco de dados...")
    criar_schemas(bind)
    criar_tabelas(bind)
    logger.info("Banco de dados pronto.")
