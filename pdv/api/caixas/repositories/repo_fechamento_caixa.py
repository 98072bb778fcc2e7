from typing import List, Optional
from datetime import datetime

from sqlalchemy.orm import Session

from pdv.api.caixas.models.model_fechamento_caixa import FechamentoCaixaModel
from pdv.utils.logger import logger


class FechamentoCaixaRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ativos(self):
        return self.db.query(FechamentoCaixaModel).filter(FechamentoCaixaModel.deleted_at.is_(None))

    def get_by_id(self, fechamento_id: int) -> Optional[FechamentoCaixaModel]:
        return self._ativos().filter(FechamentoCaixaModel.id == fechamento_id).first()

    def list_por_periodo(
        self,
        data_inicio: Optional[datetime] = None,
        data_fim: Optional[datetime] = None,
    ) -> List[FechamentoCaixaModel]:
        """Fechamentos não removidos em [data_inicio, data_fim), mais recentes primeiro"""
        query = self._ativos()
        if data_inicio:
            query = query.filter(FechamentoCaixaModel.data_fechamento >= data_inicio)
        if data_fim:
            query = query.filter(FechamentoCaixaModel.data_fechamento < data_fim)
        return query.order_by(
            FechamentoCaixaModel.data_fechamento.desc(),
            FechamentoCaixaModel.id.desc(),
        ).all()

    def existe_no_periodo(self, data_inicio: datetime, data_fim: datetime) -> bool:
        return (
            self._ativos()
            .filter(
                FechamentoCaixaModel.data_fechamento >= data_inicio,
                FechamentoCaixaModel.data_fechamento < data_fim,
            )
            .first()
            is not None
        )

    def create(self, fechamento: FechamentoCaixaModel) -> FechamentoCaixaModel:
        self.db.add(fechamento)
        self.db.flush()
        logger.info(
            f"[Caixa] Fechamento criado id={fechamento.id} operador_id={fechamento.operador_id} "
            f"total_contado={fechamento.total_contado} total_vendido={fechamento.total_vendido}"
        )
        return fechamento
