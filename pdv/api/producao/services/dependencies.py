from fastapi import Depends
from sqlalchemy.orm import Session

from pdv.database.db_connection import get_db
from pdv.api.catalogo.contracts.produto_contract import IProdutoContract
from pdv.api.catalogo.contracts.dependencies import get_produto_contract
from pdv.api.producao.services.service_producao import ProducaoService


def get_producao_service(
    db: Session = Depends(get_db),
    produto_contract: IProdutoContract = Depends(get_produto_contract),
) -> ProducaoService:
    return ProducaoService(db, produto_contract=produto_contract)
