# pdv/database/db_connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from ..config.settings import DB_CONFIG, DB_SSL_MODE, DATABASE_URL, TIMEZONE
from pdv.utils.logger import logger

# Base única para todos os models
Base = declarative_base()

# Schemas usados pelos models; no sqlite são traduzidos para o schema padrão
SCHEMAS = ["catalogo", "cadastros", "pedidos", "financeiro"]


def montar_url() -> str:
    """Monta a URL de conexão: DATABASE_URL ou Postgres a partir de DB_CONFIG."""
    if DATABASE_URL:
        return DATABASE_URL

    # Validação mínima de config
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        raise RuntimeError(f"Configuração do banco inválida, faltando variáveis: {', '.join(missing)}")

    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def criar_engine(url: str):
    """
    Cria o engine.

    - Postgres: timezone da sessão fixado em TIMEZONE.
    - sqlite: schemas traduzidos para None (sqlite não tem schemas) e,
      para banco em memória, uma única conexão compartilhada.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine_sqlite = create_engine(url, **kwargs)
        return engine_sqlite.execution_options(
            schema_translate_map={schema: None for schema in SCHEMAS}
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={
            "options": f"-c timezone={TIMEZONE}"
        }
    )


engine = criar_engine(montar_url())

# Configura o sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        logger.debug("Sessão ORM encerrada")
