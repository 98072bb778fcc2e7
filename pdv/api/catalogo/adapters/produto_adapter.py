from typing import Optional
from sqlalchemy.orm import Session

from pdv.api.catalogo.contracts.produto_contract import (
    IProdutoContract,
    ProdutoDTO,
    CategoriaDTO,
)
from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.catalogo.models.model_categoria import CategoriaModel


class ProdutoAdapter(IProdutoContract):
    """Implementação do contrato de produtos sobre as tabelas do catálogo."""

    def __init__(self, db: Session):
        self.db = db

    def obter_produto(self, produto_id: int) -> Optional[ProdutoDTO]:
        produto = self.db.get(ProdutoModel, produto_id)
        if not produto:
            return None
        return ProdutoDTO(id=produto.id, nome=produto.nome, categoria_id=produto.categoria_id)

    def obter_categoria(self, categoria_id: int) -> Optional[CategoriaDTO]:
        categoria = self.db.get(CategoriaModel, categoria_id)
        if not categoria:
            return None
        return CategoriaDTO(id=categoria.id, nome=categoria.nome)
