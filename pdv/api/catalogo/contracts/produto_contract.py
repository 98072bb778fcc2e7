from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class ProdutoDTO(BaseModel):
    """DTO de produto para comunicação entre contextos."""
    id: int
    nome: str
    categoria_id: int


class CategoriaDTO(BaseModel):
    """DTO de categoria para comunicação entre contextos."""
    id: int
    nome: str


class IProdutoContract(ABC):
    """Contrato para acesso a produtos e categorias do contexto Catalogo."""

    @abstractmethod
    def obter_produto(self, produto_id: int) -> Optional[ProdutoDTO]:
        """Obtém um produto por ID."""
        raise NotImplementedError

    @abstractmethod
    def obter_categoria(self, categoria_id: int) -> Optional[CategoriaDTO]:
        """Obtém uma categoria por ID."""
        raise NotImplementedError
