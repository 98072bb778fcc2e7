from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class ValoresPorMetodo(BaseModel):
    """Valores por método de pagamento"""
    money: Decimal = Field(Decimal("0"), description="Dinheiro")
    credit: Decimal = Field(Decimal("0"), description="Cartão de crédito")
    debit: Decimal = Field(Decimal("0"), description="Cartão de débito")
    pix: Decimal = Field(Decimal("0"), description="PIX")


class VendidoDoDiaResponse(BaseModel):
    money: float
    credit: float
    debit: float
    pix: float
    total: float  # inclui métodos não reconhecidos


class FechamentoCaixaCreate(BaseModel):
    """
    Fechamento do caixa.

    Se `vendido` não for informado, é calculado a partir dos pagamentos das
    vendas pagas do dia.
    """
    operador_id: int = Field(..., gt=0)
    contado: ValoresPorMetodo
    vendido: Optional[ValoresPorMetodo] = None
    observacoes: Optional[str] = Field(None, max_length=500)


class FechamentoCaixaResponse(BaseModel):
    id: int
    operador_id: int

    contado_money: float
    contado_credit: float
    contado_debit: float
    contado_pix: float
    total_contado: float

    vendido_money: float
    vendido_credit: float
    vendido_debit: float
    vendido_pix: float
    total_vendido: float

    diferenca_money: float
    diferenca_credit: float
    diferenca_debit: float
    diferenca_pix: float
    diferenca_total: float

    observacoes: str
    data_fechamento: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
