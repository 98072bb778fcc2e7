from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdv.core.exceptions import PDVError
from pdv.core.exception_handlers import (
    pdv_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pdv.utils.logger import logger
from pdv.config.settings import CORS_ORIGINS, CORS_ALLOW_ALL, BASE_URL, ENABLE_DOCS

# ───────────────────────────
# Importar modelos antes das rotas
# Garante que todos os modelos estejam registrados no SQLAlchemy
# antes de qualquer query ser executada
# ───────────────────────────
from pdv.database import models  # noqa: F401

from pdv.api.vendas.router.router import router as vendas_router
from pdv.api.pagamentos.router.router import router as pagamentos_router
from pdv.api.producao.router.router import router as producao_router
from pdv.api.caixas.router.router import router as caixa_router
from pdv.api.monitoring.router import router_public as monitoring_router_public
from pdv.utils.prometheus_metrics import PrometheusMiddleware

# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="API PDV Lanchonete",
    version="1.0.0",
    description="Vendas, pagamentos por item, produção da cozinha e fechamento de caixa",
    docs_url=("/swagger" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    servers=([{"url": BASE_URL, "description": "Base URL do ambiente"}] if BASE_URL else None),
    redirect_slashes=False  # Evita redirecionamento 307 quando URL não termina com /
)

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(PDVError, pdv_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares
# ───────────────────────────
# Executados na ordem reversa da adição (último adicionado = primeiro executado)
app.add_middleware(PrometheusMiddleware)

# - CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
# - Caso contrário => CORS_ORIGINS (se vazio cai para ["*"]), credenciais só com origens explícitas
if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ───────────────────────────
# Startup
# ───────────────────────────
@app.on_event("startup")
async def startup():
    from pdv.database.init_db import inicializar_banco

    logger.info("Iniciando API e banco de dados...")
    inicializar_banco()
    logger.info("API iniciada com sucesso.")


@app.on_event("shutdown")
async def shutdown():
    logger.info("API encerrada.")

# ───────────────────────────
# Rotas
# ───────────────────────────
@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}

@app.get("/health")
async def health():
    return {"status": "healthy"}

app.include_router(monitoring_router_public)
app.include_router(vendas_router)
app.include_router(pagamentos_router)
app.include_router(producao_router)
app.include_router(caixa_router)
