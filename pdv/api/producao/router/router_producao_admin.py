from typing import List, Optional
from fastapi import APIRouter, Depends, status, Path, Body

from pdv.api.producao.schemas.schema_producao import (
    AcaoProducaoRequest,
    ReverterStatusRequest,
    ProducaoItemResponse,
    ProducaoItemDetalheResponse,
    FilaVendaResponse,
    EstatisticasProducaoResponse,
)
from pdv.api.producao.services.dependencies import get_producao_service
from pdv.api.producao.services.service_producao import ProducaoService

router = APIRouter(
    prefix="/api/producao/admin",
    tags=["Admin - Produção"],
)

# ======================================================================
# =============================== FILA =================================
@router.get("/fila", response_model=List[FilaVendaResponse], status_code=status.HTTP_200_OK)
def listar_fila(svc: ProducaoService = Depends(get_producao_service)):
    """
    Itens ainda não entregues, agrupados por venda.

    Bebidas sem registro de produção aparecem como "concluido".
    """
    return svc.listar_fila()

@router.get("/estatisticas", response_model=EstatisticasProducaoResponse, status_code=status.HTTP_200_OK)
def estatisticas(svc: ProducaoService = Depends(get_producao_service)):
    return svc.estatisticas()

@router.post("/bebidas/inicializar", status_code=status.HTTP_200_OK)
def inicializar_bebidas(svc: ProducaoService = Depends(get_producao_service)):
    criados = svc.inicializar_bebidas()
    return {"inicializados": criados}

# ======================================================================
# ============================ ITEM ====================================
@router.get("/itens/{venda_item_id}", response_model=ProducaoItemDetalheResponse, status_code=status.HTTP_200_OK)
def obter_item(
    venda_item_id: int = Path(..., description="ID do item da venda", gt=0),
    svc: ProducaoService = Depends(get_producao_service),
):
    return svc.obter_item(venda_item_id)

@router.post("/itens/{venda_item_id}/iniciar", response_model=ProducaoItemResponse, status_code=status.HTTP_200_OK)
def iniciar_producao(
    venda_item_id: int = Path(..., description="ID do item da venda", gt=0),
    data: Optional[AcaoProducaoRequest] = Body(None),
    svc: ProducaoService = Depends(get_producao_service),
):
    return svc.iniciar_producao(venda_item_id, data.ator_id if data else None)

@router.post("/itens/{venda_item_id}/concluir", response_model=ProducaoItemResponse, status_code=status.HTTP_200_OK)
def concluir_producao(
    venda_item_id: int = Path(..., description="ID do item da venda", gt=0),
    data: Optional[AcaoProducaoRequest] = Body(None),
    svc: ProducaoService = Depends(get_producao_service),
):
    """Exige o item "em_producao"."""
    return svc.concluir_producao(venda_item_id, data.ator_id if data else None)

@router.post("/itens/{venda_item_id}/entregar", response_model=ProducaoItemResponse, status_code=status.HTTP_200_OK)
def entregar_item(
    venda_item_id: int = Path(..., description="ID do item da venda", gt=0),
    data: Optional[AcaoProducaoRequest] = Body(None),
    svc: ProducaoService = Depends(get_producao_service),
):
    """Exige o item "concluido"; bebidas podem ser entregues direto."""
    return svc.entregar_item(venda_item_id, data.ator_id if data else None)

@router.put("/itens/{venda_item_id}/status", response_model=ProducaoItemResponse, status_code=status.HTTP_200_OK)
def reverter_status(
    venda_item_id: int = Path(..., description="ID do item da venda", gt=0),
    data: ReverterStatusRequest = Body(...),
    svc: ProducaoService = Depends(get_producao_service),
):
    """Correção manual do status de produção."""
    return svc.reverter_status(venda_item_id, data.novo_status, data.ator_id)
