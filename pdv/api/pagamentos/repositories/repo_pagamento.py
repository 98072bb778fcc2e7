from typing import List, Optional
from datetime import datetime

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from pdv.api.pagamentos.models.model_pagamento_metodo import PagamentoMetodoModel
from pdv.api.vendas.models.model_venda import VendaModel, StatusVenda
from pdv.utils.logger import logger


class PagamentoRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, registro_id: int) -> Optional[PagamentoMetodoModel]:
        return (
            self.db.query(PagamentoMetodoModel)
            .filter(PagamentoMetodoModel.id == registro_id)
            .first()
        )

    def list_by_venda(self, venda_id: int) -> List[PagamentoMetodoModel]:
        return (
            self.db.query(PagamentoMetodoModel)
            .filter(PagamentoMetodoModel.venda_id == venda_id)
            .order_by(PagamentoMetodoModel.created_at.asc(), PagamentoMetodoModel.id.asc())
            .all()
        )

    def create(self, **data) -> PagamentoMetodoModel:
        registro = PagamentoMetodoModel(**data)
        self.db.add(registro)
        self.db.flush()
        logger.info(
            f"[Pagamento] Registro criado registro_id={registro.id} venda_id={registro.venda_id} "
            f"venda_item_id={registro.venda_item_id} metodo={registro.metodo} valor={registro.valor}"
        )
        return registro

    def delete(self, registro: PagamentoMetodoModel) -> None:
        self.db.delete(registro)
        self.db.flush()

    def somar_por_metodo_vendas_pagas(self, data_inicio: datetime, data_fim: datetime) -> List[tuple]:
        """
        Soma os registros de pagamento por método, considerando apenas vendas
        com status "paga" e data_venda em [data_inicio, data_fim).
        """
        return (
            self.db.query(
                PagamentoMetodoModel.metodo,
                func.coalesce(func.sum(PagamentoMetodoModel.valor), 0),
            )
            .join(VendaModel, PagamentoMetodoModel.venda_id == VendaModel.id)
            .filter(
                and_(
                    VendaModel.status == StatusVenda.PAGA.value,
                    VendaModel.data_venda >= data_inicio,
                    VendaModel.data_venda < data_fim,
                )
            )
            .group_by(PagamentoMetodoModel.metodo)
            .all()
        )
