"""
Handlers globais de exceção da API.

Traduz as exceções de domínio (pdv.core.exceptions) para respostas JSON com o
status HTTP correspondente.
"""
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdv.core.exceptions import (
    PDVError,
    ValidationError,
    NotFoundError,
    InvalidTransition,
    OverpaymentError,
    AmountMismatch,
    ConflictError,
)
from pdv.utils.logger import logger

STATUS_POR_EXCECAO = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransition: status.HTTP_409_CONFLICT,
    OverpaymentError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AmountMismatch: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_http_para(exc: PDVError) -> int:
    for tipo, codigo in STATUS_POR_EXCECAO.items():
        if isinstance(exc, tipo):
            return codigo
    return status.HTTP_400_BAD_REQUEST


async def pdv_exception_handler(request: Request, exc: PDVError):
    status_code = status_http_para(exc)
    logger.warning(
        f"[API] {exc.__class__.__name__} code={exc.code} em {request.method} {request.url.path}: {exc.message}"
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code, "context": exc.context},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[API] Requisição inválida em {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc), "code": "requisicao_invalida"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[API] Erro inesperado em {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erro interno do servidor"},
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
