from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path, Body

from pdv.api.caixas.schemas.schema_fechamento_caixa import (
    FechamentoCaixaCreate,
    FechamentoCaixaResponse,
    VendidoDoDiaResponse,
)
from pdv.api.caixas.services.dependencies import get_fechamento_caixa_service
from pdv.api.caixas.services.service_fechamento_caixa import FechamentoCaixaService
from pdv.utils.logger import logger

router = APIRouter(
    prefix="/api/caixa/admin/fechamentos",
    tags=["Admin - Fechamentos de Caixa"],
)

# ======================================================================
# ============================ FECHAR CAIXA ============================
@router.post("/", response_model=FechamentoCaixaResponse, status_code=status.HTTP_201_CREATED)
def fechar_caixa(
    data: FechamentoCaixaCreate = Body(...),
    svc: FechamentoCaixaService = Depends(get_fechamento_caixa_service),
):
    """
    Registra o fechamento do caixa.

    - **operador_id**: quem fechou (obrigatório)
    - **contado**: valores contados por método (money, credit, debit, pix; >= 0)
    - **vendido**: opcional; se omitido, é calculado a partir das vendas pagas do dia
    - **observacoes**: texto livre

    Calcula a diferença (contado - vendido) de cada método e a diferença total.
    """
    logger.info(f"[Caixa] Fechar caixa - operador_id={data.operador_id}")
    return svc.fechar(data.operador_id, data.contado, data.vendido, data.observacoes)

# ======================================================================
# ========================= VENDIDO DO DIA =============================
@router.get("/vendido", response_model=VendidoDoDiaResponse, status_code=status.HTTP_200_OK)
def vendido_do_dia(
    dia: date = Query(..., description="Dia (YYYY-MM-DD)"),
    svc: FechamentoCaixaService = Depends(get_fechamento_caixa_service),
):
    """Valores esperados no caixa para o dia, por método."""
    return svc.calcular_vendido_do_dia(dia)

# ======================================================================
# ========================= LISTAR FECHAMENTOS =========================
@router.get("/", response_model=List[FechamentoCaixaResponse], status_code=status.HTTP_200_OK)
def listar_fechamentos(
    data_inicio: Optional[date] = Query(None, description="Data início (YYYY-MM-DD)"),
    data_fim: Optional[date] = Query(None, description="Data fim (YYYY-MM-DD)"),
    svc: FechamentoCaixaService = Depends(get_fechamento_caixa_service),
):
    """Mais recentes primeiro. Sem período, lista todos."""
    if data_inicio and data_fim:
        return svc.listar_por_periodo(data_inicio, data_fim)
    if data_inicio or data_fim:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Informe data_inicio e data_fim juntos",
        )
    return svc.listar_todos()

# ======================================================================
# ========================= BUSCAR POR DATA ============================
@router.get("/data/{dia}", response_model=FechamentoCaixaResponse, status_code=status.HTTP_200_OK)
def get_fechamento_por_data(
    dia: date = Path(..., description="Dia (YYYY-MM-DD)"),
    svc: FechamentoCaixaService = Depends(get_fechamento_caixa_service),
):
    """Fechamento mais recente do dia. Retorna 404 se não houver."""
    fechamento = svc.obter_por_data(dia)
    if not fechamento:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Não há fechamento de caixa para este dia",
        )
    return fechamento

# ======================================================================
# ========================= BUSCAR POR ID ==============================
@router.get("/{fechamento_id}", response_model=FechamentoCaixaResponse, status_code=status.HTTP_200_OK)
def get_fechamento(
    fechamento_id: int = Path(..., description="ID do fechamento", gt=0),
    svc: FechamentoCaixaService = Depends(get_fechamento_caixa_service),
):
    return svc.obter(fechamento_id)

# ======================================================================
# ============================= REMOVER ================================
@router.delete("/{fechamento_id}", status_code=status.HTTP_204_NO_CONTENT)
def remover_fechamento(
    fechamento_id: int = Path(..., description="ID do fechamento", gt=0),
    svc: FechamentoCaixaService = Depends(get_fechamento_caixa_service),
):
    logger.info(f"[Caixa] Remover fechamento - fechamento_id={fechamento_id}")
    svc.remover(fechamento_id)
