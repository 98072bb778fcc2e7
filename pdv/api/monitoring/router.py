from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from pdv.utils.prometheus_metrics import get_metrics, CONTENT_TYPE_LATEST

router_public = APIRouter(
    tags=["Monitoring - Monitoramento"]
)


@router_public.get("/metrics")
async def metrics():
    """
    Endpoint de métricas Prometheus (público, sem autenticação).
    Acesse em: /metrics
    """
    return StreamingResponse(
        iter([get_metrics()]),
        media_type=CONTENT_TYPE_LATEST
    )
