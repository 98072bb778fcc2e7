from typing import Optional
from sqlalchemy.orm import Session

from pdv.api.catalogo.contracts.usuario_contract import IUsuarioContract, UsuarioDTO
from pdv.api.catalogo.models.model_usuario import UsuarioModel


class UsuarioAdapter(IUsuarioContract):
    """Implementação do contrato de operadores sobre cadastros.usuarios."""

    def __init__(self, db: Session):
        self.db = db

    def obter_usuario(self, usuario_id: int) -> Optional[UsuarioDTO]:
        usuario = self.db.get(UsuarioModel, usuario_id)
        if not usuario:
            return None
        return UsuarioDTO(id=usuario.id, nome=usuario.nome)
