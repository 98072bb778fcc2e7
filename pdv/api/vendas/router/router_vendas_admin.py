from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, status, Query, Path, Body

from pdv.api.vendas.schemas.schema_venda import (
    VendaCreate,
    VendaResponse,
    VendaDescontoRequest,
    VendaDescontoResponse,
    VendaStatusRequest,
    VendaResumoPeriodoResponse,
    VendasPorFormaPagamentoResponse,
    ProdutoMaisVendidoResponse,
)
from pdv.api.vendas.services.dependencies import get_venda_service
from pdv.api.vendas.services.service_venda import VendaService
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/vendas/admin",
    tags=["Admin - Vendas"],
)

# ======================================================================
# ============================ CRIAR VENDA =============================
@router.post("/", response_model=VendaResponse, status_code=status.HTTP_201_CREATED)
def criar_venda(
    data: VendaCreate = Body(...),
    svc: VendaService = Depends(get_venda_service),
):
    """
    Cria uma venda com seus itens.

    - **itens**: produto_id, preco_unitario e quantidade de cada item (obrigatório)
    - **desconto**: desconto sobre a soma dos subtotais (>= 0)
    - **operador_id** / **cliente_id**: referências opcionais

    Cada item nasce com pagamento "pendente" (ou "pago", se gratuito) e é classificado como comida ou bebida.
    """
    logger.info(f"[Venda] Criar venda - itens={len(data.itens)} operador_id={data.operador_id}")
    return svc.criar(data)

# ======================================================================
# =========================== RESUMO PERÍODO ===========================
@router.get("/resumo", response_model=VendaResumoPeriodoResponse, status_code=status.HTTP_200_OK)
def resumo_periodo(
    data_inicio: date = Query(..., description="Data início (YYYY-MM-DD)"),
    data_fim: date = Query(..., description="Data fim (YYYY-MM-DD)"),
    svc: VendaService = Depends(get_venda_service),
):
    """Totais das vendas pagas no período (inclusive nas duas pontas)."""
    return svc.resumo_periodo(data_inicio, data_fim)

# ======================================================================
# ======================== PRODUTOS MAIS VENDIDOS ======================
@router.get("/produtos-mais-vendidos", response_model=List[ProdutoMaisVendidoResponse], status_code=status.HTTP_200_OK)
def produtos_mais_vendidos(
    data_inicio: Optional[date] = Query(None, description="Data início (YYYY-MM-DD)"),
    data_fim: Optional[date] = Query(None, description="Data fim (YYYY-MM-DD)"),
    limit: int = Query(10, ge=1, le=100, description="Tamanho do ranking"),
    svc: VendaService = Depends(get_venda_service),
):
    """Ranking de produtos por quantidade vendida (somente vendas pagas)."""
    return svc.produtos_mais_vendidos(data_inicio, data_fim, limit)

# ======================================================================
# ====================== VENDAS POR FORMA DE PAGAMENTO =================
@router.get("/forma-pagamento/{forma_pagamento}", response_model=VendasPorFormaPagamentoResponse, status_code=status.HTTP_200_OK)
def vendas_por_forma_pagamento(
    forma_pagamento: str = Path(..., description="money, credit, debit ou pix"),
    svc: VendaService = Depends(get_venda_service),
):
    return svc.por_forma_pagamento(forma_pagamento)

# ======================================================================
# ========================= VENDAS POR OPERADOR ========================
@router.get("/operador/{operador_id}", response_model=List[VendaResponse], status_code=status.HTTP_200_OK)
def vendas_por_operador(
    operador_id: int = Path(..., description="ID do operador", gt=0),
    svc: VendaService = Depends(get_venda_service),
):
    return svc.listar_por_operador(operador_id)

# ======================================================================
# ========================= BUSCAR VENDA POR ID ========================
@router.get("/{venda_id}", response_model=VendaResponse, status_code=status.HTTP_200_OK)
def get_venda(
    venda_id: int = Path(..., description="ID da venda", gt=0),
    svc: VendaService = Depends(get_venda_service),
):
    return svc.obter(venda_id)

# ======================================================================
# ============================ LISTAR VENDAS ===========================
@router.get("/", response_model=List[VendaResponse], status_code=status.HTTP_200_OK)
def listar_vendas(
    status_filtro: Optional[str] = Query(None, alias="status", description="Filtrar por status"),
    data_inicio: Optional[date] = Query(None, description="Data início (YYYY-MM-DD)"),
    data_fim: Optional[date] = Query(None, description="Data fim (YYYY-MM-DD)"),
    skip: int = Query(0, ge=0, description="Número de registros para pular"),
    limit: int = Query(100, ge=1, le=500, description="Limite de registros"),
    svc: VendaService = Depends(get_venda_service),
):
    return svc.listar(
        status=status_filtro,
        data_inicio=data_inicio,
        data_fim=data_fim,
        skip=skip,
        limit=limit,
    )

# ======================================================================
# ========================== ATUALIZAR DESCONTO ========================
@router.put("/{venda_id}/desconto", response_model=VendaDescontoResponse, status_code=status.HTTP_200_OK)
def atualizar_desconto(
    venda_id: int = Path(..., description="ID da venda", gt=0),
    data: VendaDescontoRequest = Body(...),
    svc: VendaService = Depends(get_venda_service),
):
    """
    Aplica ou altera o desconto da venda.

    O total é recalculado a partir dos subtotais atuais dos itens.
    """
    total = svc.atualizar_desconto(venda_id, data.desconto)
    return VendaDescontoResponse(venda_id=venda_id, total=float(total))

# ======================================================================
# =========================== ATUALIZAR STATUS =========================
@router.put("/{venda_id}/status", response_model=VendaResponse, status_code=status.HTTP_200_OK)
def atualizar_status(
    venda_id: int = Path(..., description="ID da venda", gt=0),
    data: VendaStatusRequest = Body(...),
    svc: VendaService = Depends(get_venda_service),
):
    """
    Define o status da venda diretamente (pendente, paga ou cancelada).

    Não mexe nos itens nem nos pagamentos.
    """
    logger.info(f"[Venda] Atualizar status - venda_id={venda_id} status={data.status}")
    return svc.atualizar_status(venda_id, data.status)
