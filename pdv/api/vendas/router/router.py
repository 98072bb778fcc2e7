from fastapi import APIRouter

from pdv.api.vendas.router.router_vendas_admin import router as router_vendas_admin

# Router principal que agrupa os routers de vendas
router = APIRouter(
    tags=["API - Vendas"]
)

router.include_router(router_vendas_admin)
