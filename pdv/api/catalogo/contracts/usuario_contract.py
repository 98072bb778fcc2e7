from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class UsuarioDTO(BaseModel):
    """Referência opaca de operador usada para carimbar ações."""
    id: int
    nome: str


class IUsuarioContract(ABC):
    """Contrato para o diretório de operadores."""

    @abstractmethod
    def obter_usuario(self, usuario_id: int) -> Optional[UsuarioDTO]:
        raise NotImplementedError
