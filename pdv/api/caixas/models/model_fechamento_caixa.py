from sqlalchemy import Column, Integer, Numeric, DateTime, String, Index

from pdv.database.db_connection import Base
from pdv.utils.database_utils import now_trimmed


class FechamentoCaixaModel(Base):
    """
    Fechamento de caixa: retrato imutável do fim do período.

    contado_*  : valores contados fisicamente pelo operador
    vendido_*  : soma dos registros de pagamento do dia (vendas pagas)
    diferenca_*: contado - vendido

    Nunca é alterado depois de criado; apenas soft delete (deleted_at).
    """
    __tablename__ = "fechamentos_caixa"
    __table_args__ = (
        Index("idx_fechamentos_caixa_data", "data_fechamento"),
        Index("idx_fechamentos_caixa_operador", "operador_id"),
        {"schema": "financeiro"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    operador_id = Column(Integer, nullable=False)

    # Contagem física
    contado_money = Column(Numeric(18, 2), nullable=False, default=0)
    contado_credit = Column(Numeric(18, 2), nullable=False, default=0)
    contado_debit = Column(Numeric(18, 2), nullable=False, default=0)
    contado_pix = Column(Numeric(18, 2), nullable=False, default=0)
    total_contado = Column(Numeric(18, 2), nullable=False, default=0)

    # Vendido (registros de pagamento)
    vendido_money = Column(Numeric(18, 2), nullable=False, default=0)
    vendido_credit = Column(Numeric(18, 2), nullable=False, default=0)
    vendido_debit = Column(Numeric(18, 2), nullable=False, default=0)
    vendido_pix = Column(Numeric(18, 2), nullable=False, default=0)
    total_vendido = Column(Numeric(18, 2), nullable=False, default=0)  # inclui métodos não reconhecidos

    # Diferenças
    diferenca_money = Column(Numeric(18, 2), nullable=False, default=0)
    diferenca_credit = Column(Numeric(18, 2), nullable=False, default=0)
    diferenca_debit = Column(Numeric(18, 2), nullable=False, default=0)
    diferenca_pix = Column(Numeric(18, 2), nullable=False, default=0)
    diferenca_total = Column(Numeric(18, 2), nullable=False, default=0)

    observacoes = Column(String(500), nullable=False, default="")

    data_fechamento = Column(DateTime, default=now_trimmed, nullable=False)
    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    deleted_at = Column(DateTime, nullable=True)
