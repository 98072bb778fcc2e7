from fastapi import Depends
from sqlalchemy.orm import Session

from pdv.database.db_connection import get_db
from pdv.api.catalogo.contracts.produto_contract import IProdutoContract
from pdv.api.catalogo.contracts.dependencies import get_produto_contract
from pdv.api.vendas.services.service_venda import VendaService


def get_venda_service(
    db: Session = Depends(get_db),
    produto_contract: IProdutoContract = Depends(get_produto_contract),
) -> VendaService:
    return VendaService(db, produto_contract=produto_contract)
