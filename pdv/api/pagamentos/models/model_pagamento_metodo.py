# pdv/api/pagamentos/models/model_pagamento_metodo.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Index
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import now_trimmed


class MetodoPagamento(str, enum.Enum):
    DINHEIRO = "money"
    CREDITO = "credit"
    DEBITO = "debit"
    PIX = "pix"


METODOS_PAGAMENTO = [m.value for m in MetodoPagamento]


class PagamentoMetodoModel(Base):
    """
    Registro de pagamento (append-only).

    - venda_item_id preenchido: pagamento por item
    - venda_item_id NULL: quitação da venda inteira por múltiplos métodos

    Só é removido por um estorno explícito desse mesmo registro.
    """
    __tablename__ = "pagamentos_metodos"
    __table_args__ = (
        Index("idx_pagamentos_metodos_venda", "venda_id"),
        Index("idx_pagamentos_metodos_venda_item", "venda_item_id"),
        Index("idx_pagamentos_metodos_metodo", "metodo"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    venda_id = Column(Integer, ForeignKey("pedidos.vendas.id", ondelete="CASCADE"), nullable=False)
    venda = relationship("VendaModel")

    venda_item_id = Column(Integer, ForeignKey("pedidos.vendas_itens.id", ondelete="CASCADE"), nullable=True)
    venda_item = relationship("VendaItemModel")

    # Texto livre no banco: registros legados podem trazer métodos fora da lista
    metodo = Column(String(20), nullable=False)
    valor = Column(Numeric(18, 2), nullable=False)
    pagador = Column(String(120), nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
