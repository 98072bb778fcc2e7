from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base


class ProdutoModel(Base):
    """Produto do catálogo (somente leitura para o núcleo do PDV)."""
    __tablename__ = "produtos"
    __table_args__ = {"schema": "catalogo"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    preco = Column(Numeric(18, 2), nullable=False, default=0)
    ativo = Column(Boolean, nullable=False, default=True)

    categoria_id = Column(Integer, ForeignKey("catalogo.categorias.id", ondelete="RESTRICT"), nullable=False)
    categoria = relationship("CategoriaModel", back_populates="produtos")
