from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pdv.api.producao.models.model_producao_item import ProducaoItemModel
from pdv.utils.logger import logger


class ProducaoRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_venda_item(self, venda_item_id: int) -> Optional[ProducaoItemModel]:
        return (
            self.db.query(ProducaoItemModel)
            .filter(ProducaoItemModel.venda_item_id == venda_item_id)
            .first()
        )

    def get_para_atualizacao(self, venda_item_id: int) -> Optional[ProducaoItemModel]:
        """Busca o registro de produção travando a linha (SELECT ... FOR UPDATE)"""
        return (
            self.db.query(ProducaoItemModel)
            .filter(ProducaoItemModel.venda_item_id == venda_item_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def create(self, registro: ProducaoItemModel) -> ProducaoItemModel:
        self.db.add(registro)
        self.db.flush()
        logger.info(
            f"[Producao] Registro criado venda_item_id={registro.venda_item_id} status={registro.status_producao}"
        )
        return registro

    def contar_por_status(self) -> List[tuple]:
        return (
            self.db.query(ProducaoItemModel.status_producao, func.count(ProducaoItemModel.id))
            .group_by(ProducaoItemModel.status_producao)
            .all()
        )
