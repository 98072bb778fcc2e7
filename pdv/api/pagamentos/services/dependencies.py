from fastapi import Depends
from sqlalchemy.orm import Session

from pdv.database.db_connection import get_db
from pdv.api.pagamentos.services.service_pagamento import PagamentoService


def get_pagamento_service(db: Session = Depends(get_db)) -> PagamentoService:
    return PagamentoService(db)
