from fastapi import Depends
from sqlalchemy.orm import Session

from pdv.database.db_connection import get_db
from pdv.api.catalogo.contracts.usuario_contract import IUsuarioContract
from pdv.api.catalogo.contracts.dependencies import get_usuario_contract
from pdv.api.caixas.services.service_fechamento_caixa import FechamentoCaixaService


def get_fechamento_caixa_service(
    db: Session = Depends(get_db),
    usuario_contract: IUsuarioContract = Depends(get_usuario_contract),
) -> FechamentoCaixaService:
    """Dependency para obter o serviço de fechamento de caixa"""
    return FechamentoCaixaService(db, usuario_contract=usuario_contract)
