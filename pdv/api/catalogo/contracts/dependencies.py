from fastapi import Depends
from sqlalchemy.orm import Session

from pdv.database.db_connection import get_db

from pdv.api.catalogo.contracts.produto_contract import IProdutoContract
from pdv.api.catalogo.contracts.usuario_contract import IUsuarioContract

from pdv.api.catalogo.adapters.produto_adapter import ProdutoAdapter
from pdv.api.catalogo.adapters.usuario_adapter import UsuarioAdapter


def get_produto_contract(db: Session = Depends(get_db)) -> IProdutoContract:
    return ProdutoAdapter(db)


def get_usuario_contract(db: Session = Depends(get_db)) -> IUsuarioContract:
    return UsuarioAdapter(db)
