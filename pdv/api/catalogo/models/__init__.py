from .model_categoria import CategoriaModel
from .model_produto import ProdutoModel
from .model_usuario import UsuarioModel

__all__ = [
    "CategoriaModel",
    "ProdutoModel",
    "UsuarioModel",
]
