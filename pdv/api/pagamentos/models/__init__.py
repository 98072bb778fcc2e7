from .model_pagamento_metodo import PagamentoMetodoModel, MetodoPagamento, METODOS_PAGAMENTO

__all__ = [
    "PagamentoMetodoModel",
    "MetodoPagamento",
    "METODOS_PAGAMENTO",
]
