from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base


class CategoriaModel(Base):
    """Categoria do catálogo (somente leitura para o núcleo do PDV)."""
    __tablename__ = "categorias"
    __table_args__ = {"schema": "catalogo"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(120), nullable=False)
    ativo = Column(Boolean, nullable=False, default=True)

    produtos = relationship("ProdutoModel", back_populates="categoria")
