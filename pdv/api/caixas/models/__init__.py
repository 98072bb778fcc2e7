from .model_fechamento_caixa import FechamentoCaixaModel

__all__ = [
    "FechamentoCaixaModel",
]
