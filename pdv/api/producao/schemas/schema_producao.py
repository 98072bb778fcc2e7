from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import datetime


class AcaoProducaoRequest(BaseModel):
    """Ação da cozinha sobre um item (iniciar, concluir, entregar)"""
    ator_id: Optional[int] = Field(None, description="ID do usuário que executa a ação")


class ReverterStatusRequest(BaseModel):
    novo_status: str = Field(..., description="pendente, em_producao, concluido ou entregue")
    ator_id: Optional[int] = None


class ProducaoItemResponse(BaseModel):
    venda_item_id: int
    venda_id: int
    status_producao: str
    iniciado_por: Optional[int] = None
    iniciado_em: Optional[datetime] = None
    concluido_por: Optional[int] = None
    concluido_em: Optional[datetime] = None
    entregue_em: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProducaoItemDetalheResponse(BaseModel):
    """Status efetivo do item (inclui o atalho de bebida) e o registro, se existir"""
    venda_item_id: int
    venda_id: int
    tipo_item: str
    status_efetivo: str
    registro: Optional[ProducaoItemResponse] = None


class FilaItemResponse(BaseModel):
    venda_item_id: int
    produto_id: int
    produto_nome: str
    categoria_nome: Optional[str] = None
    tipo_item: str
    quantidade: int
    status_producao: str
    iniciado_em: Optional[datetime] = None
    concluido_em: Optional[datetime] = None


class FilaVendaResponse(BaseModel):
    venda_id: int
    data_venda: datetime
    status_venda: str
    observacoes: Optional[str] = None
    itens: List[FilaItemResponse]


class EstatisticasProducaoResponse(BaseModel):
    por_status: Dict[str, int]
    total: int
