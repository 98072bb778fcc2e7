"""
Fronteira transacional dos serviços.

Cada operação de escrita roda dentro de `transacao(...)`: commit no sucesso,
rollback em qualquer erro. Conflitos de concorrência detectados pelo
SQLAlchemy (versão desatualizada, unique violado) viram ConflictError.
"""
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from pdv.core.exceptions import ConflictError
from pdv.utils.logger import logger


@contextmanager
def transacao(db: Session, contexto: str = ""):
    try:
        yield db
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning(f"[Transacao] Conflito de versão {contexto}: {e}")
        raise ConflictError(
            code="versao_desatualizada",
            message="O registro foi alterado por outra operação. Recarregue e tente novamente.",
            context={"operacao": contexto},
        ) from e
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"[Transacao] Violação de integridade {contexto}: {e.orig}")
        raise ConflictError(
            code="registro_duplicado",
            message="Operação concorrente criou o mesmo registro. Tente novamente.",
            context={"operacao": contexto},
        ) from e
    except Exception:
        db.rollback()
        raise
