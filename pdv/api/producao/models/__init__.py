from .model_producao_item import ProducaoItemModel, StatusProducao, STATUS_PRODUCAO

__all__ = [
    "ProducaoItemModel",
    "StatusProducao",
    "STATUS_PRODUCAO",
]
