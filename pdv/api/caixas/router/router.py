from fastapi import APIRouter

from pdv.api.caixas.router.router_fechamentos_admin import router as router_fechamentos_admin

# Router principal que agrupa os routers de caixas
router = APIRouter(
    tags=["API - Caixa"]
)

router.include_router(router_fechamentos_admin)
