from .model_venda import VendaModel, StatusVenda, STATUS_VENDA_DEFINIVEIS
from .model_venda_item import VendaItemModel, StatusPagamentoItem, TipoItem

__all__ = [
    "VendaModel",
    "StatusVenda",
    "STATUS_VENDA_DEFINIVEIS",
    "VendaItemModel",
    "StatusPagamentoItem",
    "TipoItem",
]
