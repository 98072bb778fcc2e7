from typing import List
from fastapi import APIRouter, Depends, status, Path, Body

from pdv.api.pagamentos.schemas.schema_pagamento import (
    PagarItemRequest,
    PagarItemResponse,
    PagarItensRequest,
    PagarItensResponse,
    EstornoRequest,
    EstornoResponse,
    PagamentoMetodosRequest,
    PagamentoMetodosResponse,
    RegistroPagamentoResponse,
)
from pdv.api.pagamentos.services.dependencies import get_pagamento_service
from pdv.api.pagamentos.services.service_pagamento import PagamentoService
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/pagamentos/admin",
    tags=["Admin - Pagamentos"],
)

# ======================================================================
# ============================= PAGAR ITEM =============================
@router.post("/itens/{venda_item_id}", response_model=PagarItemResponse, status_code=status.HTTP_201_CREATED)
def pagar_item(
    venda_item_id: int = Path(..., description="ID do item da venda", gt=0),
    data: PagarItemRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """
    Registra um pagamento total ou parcial de um item.

    - **metodo**: money, credit, debit ou pix
    - **valor**: valor pago (> 0); não pode passar do que falta no item
    - **pagador**: nome de quem pagou (opcional)
    """
    logger.info(f"[Pagamento] Pagar item - venda_item_id={venda_item_id} metodo={data.metodo} valor={data.valor}")
    return svc.pagar_item(venda_item_id, data.metodo, data.valor, data.pagador)

# ======================================================================
# ======================= PAGAR VÁRIOS ITENS ===========================
@router.post("/vendas/{venda_id}/itens", response_model=PagarItensResponse, status_code=status.HTTP_201_CREATED)
def pagar_itens(
    venda_id: int = Path(..., description="ID da venda", gt=0),
    data: PagarItensRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """
    Paga vários itens com um único valor, dividido proporcionalmente ao
    subtotal de cada item.
    """
    logger.info(f"[Pagamento] Pagar itens - venda_id={venda_id} itens={data.venda_item_ids}")
    return svc.pagar_itens(venda_id, data.venda_item_ids, data.metodo, data.valor_total, data.pagador)

# ======================================================================
# ============================== ESTORNO ===============================
@router.post("/registros/{registro_id}/estorno", response_model=EstornoResponse, status_code=status.HTTP_200_OK)
def estornar_pagamento(
    registro_id: int = Path(..., description="ID do registro de pagamento", gt=0),
    data: EstornoRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """Estorna um pagamento de item. O registro é removido."""
    return svc.estornar_pagamento_item(registro_id, data.motivo)

# ======================================================================
# ======================== QUITAR VENDA (MÉTODOS) ======================
@router.post("/vendas/{venda_id}/metodos", response_model=PagamentoMetodosResponse, status_code=status.HTTP_201_CREATED)
def pagar_venda_com_metodos(
    venda_id: int = Path(..., description="ID da venda", gt=0),
    data: PagamentoMetodosRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """
    Quita a venda inteira com um ou mais métodos.

    A soma dos valores precisa bater com o total da venda.
    """
    logger.info(f"[Pagamento] Quitar venda - venda_id={venda_id} metodos={len(data.metodos)}")
    return svc.processar_pagamento_com_metodos(venda_id, data.metodos)

# ======================================================================
# ========================= LISTAR REGISTROS ===========================
@router.get("/vendas/{venda_id}/registros", response_model=List[RegistroPagamentoResponse], status_code=status.HTTP_200_OK)
def listar_registros(
    venda_id: int = Path(..., description="ID da venda", gt=0),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    return svc.listar_registros(venda_id)
