from sqlalchemy import Column, Integer, String, Boolean

from pdv.database.db_connection import Base


class UsuarioModel(Base):
    """Operador do PDV (diretório de usuários, somente leitura)."""
    __tablename__ = "usuarios"
    __table_args__ = {"schema": "cadastros"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(120), nullable=False)
    ativo = Column(Boolean, nullable=False, default=True)
