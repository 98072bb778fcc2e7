# pdv/api/vendas/models/model_venda_item.py
import enum
from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Index, CheckConstraint
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import now_trimmed


class StatusPagamentoItem(str, enum.Enum):
    PENDENTE = "pendente"
    PARCIAL = "parcial"
    PAGO = "pago"


class TipoItem(str, enum.Enum):
    """Classificação do item, feita uma única vez na criação da venda."""
    COMIDA = "COMIDA"
    BEBIDA = "BEBIDA"


class VendaItemModel(Base):
    __tablename__ = "vendas_itens"
    __table_args__ = (
        Index("idx_vendas_itens_venda", "venda_id"),
        Index("idx_vendas_itens_status_pagamento", "status_pagamento"),
        CheckConstraint("valor_pago >= 0", name="chk_venda_item_valor_pago_nao_negativo"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    venda_id = Column(Integer, ForeignKey("pedidos.vendas.id", ondelete="CASCADE"), nullable=False)
    venda = relationship("VendaModel", back_populates="itens")

    # Snapshots para não "mudar o passado" se o produto/categoria for atualizado
    produto_id = Column(Integer, nullable=False)
    produto_nome = Column(String(255), nullable=False)
    categoria_nome = Column(String(120), nullable=True)
    tipo_item = Column(String(10), nullable=False, default=TipoItem.COMIDA.value)

    preco_unitario = Column(Numeric(18, 2), nullable=False)
    quantidade = Column(Integer, nullable=False, default=1)
    subtotal = Column(Numeric(18, 2), nullable=False)

    status_pagamento = Column(String(10), nullable=False, default=StatusPagamentoItem.PENDENTE.value)
    valor_pago = Column(Numeric(18, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)

    producao = relationship(
        "ProducaoItemModel",
        back_populates="venda_item",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def eh_bebida(self) -> bool:
        return self.tipo_item == TipoItem.BEBIDA.value

    def calcular_subtotal(self) -> Decimal:
        """Calcula o subtotal baseado no preço unitário e quantidade."""
        if self.preco_unitario is None or self.quantidade is None:
            return Decimal("0")
        return Decimal(str(self.preco_unitario)) * Decimal(str(self.quantidade))
