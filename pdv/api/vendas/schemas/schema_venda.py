from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal


class VendaItemCreate(BaseModel):
    """Item informado na abertura da venda"""
    produto_id: int = Field(..., gt=0)
    preco_unitario: Decimal = Field(..., description="Preço unitário no momento da venda")
    quantidade: int = Field(..., description="Quantidade vendida")


class VendaCreate(BaseModel):
    """Schema para criar uma venda com seus itens"""
    itens: List[VendaItemCreate] = Field(..., description="Itens da venda")
    desconto: Decimal = Field(Decimal("0"), description="Desconto aplicado sobre o subtotal")
    cliente_id: Optional[int] = Field(None, gt=0)
    operador_id: Optional[int] = Field(None, gt=0)
    forma_pagamento: Optional[str] = Field(None, max_length=20)
    observacoes: Optional[str] = Field(None, max_length=500)


class VendaDescontoRequest(BaseModel):
    desconto: Decimal


class VendaStatusRequest(BaseModel):
    # str livre: status desconhecido é rejeitado pelo serviço (ValidationError)
    status: str


class VendaItemResponse(BaseModel):
    id: int
    venda_id: int
    produto_id: int
    produto_nome: str
    categoria_nome: Optional[str] = None
    tipo_item: str
    preco_unitario: float
    quantidade: int
    subtotal: float
    status_pagamento: str
    valor_pago: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VendaResponse(BaseModel):
    id: int
    total: float
    desconto: float
    forma_pagamento: Optional[str] = None
    status: str
    data_venda: datetime
    cliente_id: Optional[int] = None
    operador_id: Optional[int] = None
    observacoes: Optional[str] = None
    itens: List[VendaItemResponse] = []

    model_config = ConfigDict(from_attributes=True)


class VendaDescontoResponse(BaseModel):
    venda_id: int
    total: float


class VendaResumoPeriodoResponse(BaseModel):
    """Totais das vendas pagas no período"""
    data_inicio: date
    data_fim: date
    total: float
    total_descontos: float
    quantidade_vendas: int


class VendasPorFormaPagamentoResponse(BaseModel):
    forma_pagamento: str
    vendas: List[VendaResponse]
    total: float
    quantidade: int


class ProdutoMaisVendidoResponse(BaseModel):
    produto_id: int
    produto_nome: str
    quantidade: int
    receita: float
