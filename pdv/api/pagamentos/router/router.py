from fastapi import APIRouter

from pdv.api.pagamentos.router.router_pagamentos_admin import router as router_pagamentos_admin

# Router principal que agrupa os routers de pagamentos
router = APIRouter(
    tags=["API - Pagamentos"]
)

router.include_router(router_pagamentos_admin)
