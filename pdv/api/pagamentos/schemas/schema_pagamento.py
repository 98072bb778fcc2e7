from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class PagarItemRequest(BaseModel):
    """Pagamento (total ou parcial) de um item da venda"""
    metodo: str = Field(..., description="money, credit, debit ou pix")
    valor: Decimal = Field(..., description="Valor pago (> 0)")
    pagador: Optional[str] = Field(None, max_length=120, description="Nome de quem está pagando")


class PagarItensRequest(BaseModel):
    """Um único valor entregue para vários itens selecionados"""
    venda_item_ids: List[int] = Field(..., min_length=1)
    metodo: str
    valor_total: Decimal
    pagador: Optional[str] = Field(None, max_length=120)


class EstornoRequest(BaseModel):
    motivo: str = Field(..., min_length=1, max_length=500)


class MetodoValor(BaseModel):
    metodo: str
    valor: Decimal


class PagamentoMetodosRequest(BaseModel):
    """Quitação da venda inteira com um ou mais métodos"""
    metodos: List[MetodoValor] = Field(..., min_length=1)


class RegistroPagamentoResponse(BaseModel):
    id: int
    venda_id: int
    venda_item_id: Optional[int] = None
    metodo: str
    valor: float
    pagador: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PagarItemResponse(BaseModel):
    status_pagamento: str
    valor_pago: float
    status_venda: str
    registro_id: int


class ItemPagoResponse(BaseModel):
    venda_item_id: int
    valor_alocado: float
    status_pagamento: str
    valor_pago: float


class PagarItensResponse(BaseModel):
    status_venda: str
    itens: List[ItemPagoResponse]


class EstornoResponse(BaseModel):
    status_pagamento: str
    valor_pago: float
    valor_estornado: float
    status_venda: str


class PagamentoMetodosResponse(BaseModel):
    status_venda: str
    forma_pagamento: str
    registros: List[RegistroPagamentoResponse]
