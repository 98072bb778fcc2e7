from fastapi import APIRouter

from pdv.api.producao.router.router_producao_admin import router as router_producao_admin

# Router principal que agrupa os routers de producao
router = APIRouter(
    tags=["API - Produção"]
)

router.include_router(router_producao_admin)
