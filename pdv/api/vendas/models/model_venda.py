# pdv/api/vendas/models/model_venda.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Index
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import now_trimmed


class StatusVenda(str, enum.Enum):
    """Status possíveis para uma venda.

    - pendente: nenhum item pago
    - parcialmente_paga: algum item pago/parcial, mas não todos pagos
    - paga: todos os itens pagos
    - cancelada: definido apenas de forma imperativa
    """
    PENDENTE = "pendente"
    PARCIALMENTE_PAGA = "parcialmente_paga"
    PAGA = "paga"
    CANCELADA = "cancelada"


# Status que podem ser definidos diretamente (parcialmente_paga é sempre derivado)
STATUS_VENDA_DEFINIVEIS = {
    StatusVenda.PENDENTE.value,
    StatusVenda.PAGA.value,
    StatusVenda.CANCELADA.value,
}


class VendaModel(Base):
    """
    Venda (agregado raiz).

    Venda + itens + itens de produção + registros de pagamento são
    atualizados sempre através da venda: toda mutação de item toca a linha
    da venda, e `versao` detecta escritas concorrentes.
    """
    __tablename__ = "vendas"
    __table_args__ = (
        Index("idx_vendas_status", "status"),
        Index("idx_vendas_data_venda", "data_venda"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    total = Column(Numeric(18, 2), nullable=False, default=0)
    desconto = Column(Numeric(18, 2), nullable=False, default=0)
    forma_pagamento = Column(String(20), nullable=True)  # método dominante
    status = Column(String(20), nullable=False, default=StatusVenda.PENDENTE.value)

    cliente_id = Column(Integer, nullable=True)
    operador_id = Column(Integer, nullable=True)
    observacoes = Column(String(500), nullable=True)

    data_venda = Column(DateTime, default=now_trimmed, nullable=False)
    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, nullable=False)

    versao = Column(Integer, nullable=False)

    itens = relationship(
        "VendaItemModel",
        back_populates="venda",
        cascade="all, delete-orphan",
        order_by="VendaItemModel.id",
    )

    __mapper_args__ = {"version_id_col": versao}
