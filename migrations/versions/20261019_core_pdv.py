"""Create pedidos/vendas, itens, pagamentos, produção and financeiro/fechamentos_caixa tables

Revision ID: 20261019_core_pdv
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_core_pdv"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Ensure schemas exist
    op.execute("CREATE SCHEMA IF NOT EXISTS pedidos")
    op.execute("CREATE SCHEMA IF NOT EXISTS financeiro")

    # pedidos.vendas
    op.create_table(
        "vendas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("total", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("desconto", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("forma_pagamento", sa.String(20), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pendente"),
        sa.Column("cliente_id", sa.Integer, nullable=True),
        sa.Column("operador_id", sa.Integer, nullable=True),
        sa.Column("observacoes", sa.String(500), nullable=True),
        sa.Column("data_venda", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("versao", sa.Integer, nullable=False, server_default="1"),
        schema="pedidos",
    )
    op.create_index("idx_vendas_status", "vendas", ["status"], schema="pedidos")
    op.create_index("idx_vendas_data_venda", "vendas", ["data_venda"], schema="pedidos")

    # pedidos.vendas_itens
    op.create_table(
        "vendas_itens",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("venda_id", sa.Integer, sa.ForeignKey("pedidos.vendas.id", ondelete="CASCADE"), nullable=False),
        sa.Column("produto_id", sa.Integer, nullable=False),
        sa.Column("produto_nome", sa.String(255), nullable=False),
        sa.Column("categoria_nome", sa.String(120), nullable=True),
        sa.Column("tipo_item", sa.String(10), nullable=False, server_default="COMIDA"),
        sa.Column("preco_unitario", sa.Numeric(18, 2), nullable=False),
        sa.Column("quantidade", sa.Integer, nullable=False, server_default="1"),
        sa.Column("subtotal", sa.Numeric(18, 2), nullable=False),
        sa.Column("status_pagamento", sa.String(10), nullable=False, server_default="pendente"),
        sa.Column("valor_pago", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("valor_pago >= 0", name="chk_venda_item_valor_pago_nao_negativo"),
        schema="pedidos",
    )
    op.create_index("idx_vendas_itens_venda", "vendas_itens", ["venda_id"], schema="pedidos")
    op.create_index("idx_vendas_itens_status_pagamento", "vendas_itens", ["status_pagamento"], schema="pedidos")

    # pedidos.pagamentos_metodos
    op.create_table(
        "pagamentos_metodos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("venda_id", sa.Integer, sa.ForeignKey("pedidos.vendas.id", ondelete="CASCADE"), nullable=False),
        sa.Column("venda_item_id", sa.Integer, sa.ForeignKey("pedidos.vendas_itens.id", ondelete="CASCADE"), nullable=True),
        sa.Column("metodo", sa.String(20), nullable=False),
        sa.Column("valor", sa.Numeric(18, 2), nullable=False),
        sa.Column("pagador", sa.String(120), nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        schema="pedidos",
    )
    op.create_index("idx_pagamentos_metodos_venda", "pagamentos_metodos", ["venda_id"], schema="pedidos")
    op.create_index("idx_pagamentos_metodos_venda_item", "pagamentos_metodos", ["venda_item_id"], schema="pedidos")
    op.create_index("idx_pagamentos_metodos_metodo", "pagamentos_metodos", ["metodo"], schema="pedidos")

    # pedidos.producao_itens
    op.create_table(
        "producao_itens",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("venda_item_id", sa.Integer, sa.ForeignKey("pedidos.vendas_itens.id", ondelete="CASCADE"), nullable=False),
        sa.Column("venda_id", sa.Integer, sa.ForeignKey("pedidos.vendas.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status_producao", sa.String(20), nullable=False, server_default="pendente"),
        sa.Column("iniciado_por", sa.Integer, nullable=True),
        sa.Column("iniciado_em", sa.DateTime, nullable=True),
        sa.Column("concluido_por", sa.Integer, nullable=True),
        sa.Column("concluido_em", sa.DateTime, nullable=True),
        sa.Column("entregue_em", sa.DateTime, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("versao", sa.Integer, nullable=False, server_default="1"),
        sa.UniqueConstraint("venda_item_id", name="uq_producao_itens_venda_item"),
        schema="pedidos",
    )
    op.create_index("idx_producao_itens_venda", "producao_itens", ["venda_id"], schema="pedidos")
    op.create_index("idx_producao_itens_status", "producao_itens", ["status_producao"], schema="pedidos")

    # financeiro.fechamentos_caixa
    colunas_valores = [
        sa.Column(f"{grupo}_{metodo}", sa.Numeric(18, 2), nullable=False, server_default="0")
        for grupo in ("contado", "vendido", "diferenca")
        for metodo in ("money", "credit", "debit", "pix")
    ]
    op.create_table(
        "fechamentos_caixa",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("operador_id", sa.Integer, nullable=False),
        *colunas_valores,
        sa.Column("total_contado", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("total_vendido", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("diferenca_total", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("observacoes", sa.String(500), nullable=False, server_default=""),
        sa.Column("data_fechamento", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("now()"), nullable=False),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
        schema="financeiro",
    )
    op.create_index("idx_fechamentos_caixa_data", "fechamentos_caixa", ["data_fechamento"], schema="financeiro")
    op.create_index("idx_fechamentos_caixa_operador", "fechamentos_caixa", ["operador_id"], schema="financeiro")


def downgrade() -> None:
    op.drop_table("fechamentos_caixa", schema="financeiro")
    op.drop_table("producao_itens", schema="pedidos")
    op.drop_table("pagamentos_metodos", schema="pedidos")
    op.drop_table("vendas_itens", schema="pedidos")
    op.drop_table("vendas", schema="pedidos")
