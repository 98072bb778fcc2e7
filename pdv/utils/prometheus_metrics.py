"""
Módulo de métricas Prometheus para monitoramento da aplicação.
"""
import re
from time import time
from typing import Callable

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Métricas de requisições HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total de requisições HTTP',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'Duração das requisições HTTP em segundos',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

http_errors_total = Counter(
    'http_errors_total',
    'Total de erros HTTP',
    ['method', 'endpoint', 'status_code']
)

active_connections = Gauge(
    'active_connections',
    'Número de conexões ativas'
)

# Métricas de domínio
pagamentos_registrados_total = Counter(
    'pdv_pagamentos_registrados_total',
    'Registros de pagamento criados',
    ['metodo', 'escopo']
)

pagamentos_valor_total = Counter(
    'pdv_pagamentos_valor_total',
    'Soma dos valores recebidos',
    ['metodo']
)

estornos_total = Counter(
    'pdv_estornos_total',
    'Estornos de pagamento de item'
)

transicoes_producao_total = Counter(
    'pdv_transicoes_producao_total',
    'Transições de status de produção',
    ['status']
)

fechamentos_caixa_total = Counter(
    'pdv_fechamentos_caixa_total',
    'Fechamentos de caixa registrados'
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Conta requisições, latência e erros por método e rota normalizada."""

    async def dispatch(self, request: Request, call_next: Callable):
        # /metrics não entra nas próprias métricas
        if request.url.path == "/metrics":
            return await call_next(request)

        rota = normalizar_rota(request.url.path)
        inicio = time()
        active_connections.inc()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            _registrar_requisicao(request.method, rota, status_code, time() - inicio)
            active_connections.dec()


def normalizar_rota(caminho: str) -> str:
    """
    Troca datas e IDs por marcadores para manter a cardinalidade baixa.
    Ex: /api/caixa/admin/fechamentos/data/2026-10-19 -> .../data/{data}
    """
    caminho = re.sub(r'/\d{4}-\d{2}-\d{2}', '/{data}', caminho)
    return re.sub(r'/\d+', '/{id}', caminho)


def _registrar_requisicao(method: str, rota: str, status_code: int, duracao: float):
    http_requests_total.labels(method=method, endpoint=rota, status_code=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=rota).observe(duracao)
    if status_code >= 400:
        http_errors_total.labels(method=method, endpoint=rota, status_code=status_code).inc()


def registrar_pagamento(metodo: str, valor, escopo: str = "item"):
    pagamentos_registrados_total.labels(metodo=metodo, escopo=escopo).inc()
    pagamentos_valor_total.labels(metodo=metodo).inc(float(valor))


def registrar_estorno():
    estornos_total.inc()


def registrar_transicao_producao(status: str):
    transicoes_producao_total.labels(status=status).inc()


def registrar_fechamento():
    fechamentos_caixa_total.inc()


def get_metrics():
    """Retorna as métricas no formato Prometheus."""
    return generate_latest()
