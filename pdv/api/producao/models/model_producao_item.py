# pdv/api/producao/models/model_producao_item.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from pdv.database.db_connection import Base
from pdv.utils.database_utils import now_trimmed


class StatusProducao(str, enum.Enum):
    """Etapas da cozinha: pendente → em_producao → concluido → entregue."""
    PENDENTE = "pendente"
    EM_PRODUCAO = "em_producao"
    CONCLUIDO = "concluido"
    ENTREGUE = "entregue"


STATUS_PRODUCAO = [s.value for s in StatusProducao]


class ProducaoItemModel(Base):
    """
    Controle de produção de um item de venda.

    Criado na primeira ação da cozinha (ou sintetizado na entrega de bebida).
    Ausência do registro equivale a "pendente" (ou "concluido" para bebidas).
    """
    __tablename__ = "producao_itens"
    __table_args__ = (
        UniqueConstraint("venda_item_id", name="uq_producao_itens_venda_item"),
        Index("idx_producao_itens_venda", "venda_id"),
        Index("idx_producao_itens_status", "status_producao"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    venda_item_id = Column(Integer, ForeignKey("pedidos.vendas_itens.id", ondelete="CASCADE"), nullable=False)
    venda_item = relationship("VendaItemModel", back_populates="producao")

    venda_id = Column(Integer, ForeignKey("pedidos.vendas.id", ondelete="CASCADE"), nullable=False)

    status_producao = Column(String(20), nullable=False, default=StatusProducao.PENDENTE.value)

    iniciado_por = Column(Integer, nullable=True)
    iniciado_em = Column(DateTime, nullable=True)
    concluido_por = Column(Integer, nullable=True)
    concluido_em = Column(DateTime, nullable=True)
    entregue_em = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, nullable=False)

    versao = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": versao}
