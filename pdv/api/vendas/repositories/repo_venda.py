from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from sqlalchemy import and_, func
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import flag_modified

from pdv.api.vendas.models.model_venda import VendaModel, StatusVenda
from pdv.api.vendas.models.model_venda_item import VendaItemModel
from pdv.utils.logger import logger


class VendaRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, venda_id: int) -> Optional[VendaModel]:
        """Busca uma venda por ID com os itens"""
        return (
            self.db.query(VendaModel)
            .options(selectinload(VendaModel.itens))
            .filter(VendaModel.id == venda_id)
            .first()
        )

    def get_para_atualizacao(self, venda_id: int) -> Optional[VendaModel]:
        """
        Busca a venda travando a linha (SELECT ... FOR UPDATE).

        Serializa o ciclo ler-modificar-gravar do status agregado da venda.
        """
        return (
            self.db.query(VendaModel)
            .options(selectinload(VendaModel.itens))
            .filter(VendaModel.id == venda_id)
            .with_for_update(of=VendaModel)
            .populate_existing()
            .first()
        )

    def get_item(self, venda_item_id: int) -> Optional[VendaItemModel]:
        return (
            self.db.query(VendaItemModel)
            .filter(VendaItemModel.id == venda_item_id)
            .first()
        )

    def list(
        self,
        status: Optional[str] = None,
        data_inicio: Optional[datetime] = None,
        data_fim: Optional[datetime] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[VendaModel]:
        """Lista vendas com filtros opcionais (mais recentes primeiro)"""
        query = self.db.query(VendaModel).options(selectinload(VendaModel.itens))

        if status:
            query = query.filter(VendaModel.status == status)

        if data_inicio:
            query = query.filter(VendaModel.data_venda >= data_inicio)

        if data_fim:
            query = query.filter(VendaModel.data_venda < data_fim)

        query = query.order_by(VendaModel.data_venda.desc(), VendaModel.id.desc())
        query = query.offset(skip)

        if limit:
            query = query.limit(limit)

        return query.all()

    def list_nao_canceladas_com_itens(self) -> List[VendaModel]:
        return (
            self.db.query(VendaModel)
            .options(selectinload(VendaModel.itens).selectinload(VendaItemModel.producao))
            .filter(VendaModel.status != StatusVenda.CANCELADA.value)
            .order_by(VendaModel.data_venda.asc(), VendaModel.id.asc())
            .all()
        )

    def resumo_pagas(self, data_inicio: datetime, data_fim: datetime) -> dict:
        """Soma total/desconto das vendas pagas no intervalo [data_inicio, data_fim)."""
        total, descontos, quantidade = (
            self.db.query(
                func.coalesce(func.sum(VendaModel.total), 0),
                func.coalesce(func.sum(VendaModel.desconto), 0),
                func.count(VendaModel.id),
            )
            .filter(
                and_(
                    VendaModel.status == StatusVenda.PAGA.value,
                    VendaModel.data_venda >= data_inicio,
                    VendaModel.data_venda < data_fim,
                )
            )
            .one()
        )
        return {
            "total": Decimal(str(total)),
            "total_descontos": Decimal(str(descontos)),
            "quantidade_vendas": int(quantidade or 0),
        }

    def list_por_operador(self, operador_id: int) -> List[VendaModel]:
        return (
            self.db.query(VendaModel)
            .options(selectinload(VendaModel.itens))
            .filter(VendaModel.operador_id == operador_id)
            .order_by(VendaModel.data_venda.desc(), VendaModel.id.desc())
            .all()
        )

    def list_pagas_por_forma_pagamento(self, forma_pagamento: str) -> List[VendaModel]:
        return (
            self.db.query(VendaModel)
            .options(selectinload(VendaModel.itens))
            .filter(
                and_(
                    VendaModel.forma_pagamento == forma_pagamento,
                    VendaModel.status == StatusVenda.PAGA.value,
                )
            )
            .order_by(VendaModel.data_venda.desc(), VendaModel.id.desc())
            .all()
        )

    def produtos_mais_vendidos(
        self,
        data_inicio: Optional[datetime] = None,
        data_fim: Optional[datetime] = None,
        limit: int = 10,
    ) -> List[dict]:
        """Quantidade e receita por produto nas vendas pagas, maior quantidade primeiro."""
        quantidade = func.sum(VendaItemModel.quantidade)
        receita = func.sum(VendaItemModel.subtotal)
        query = (
            self.db.query(
                VendaItemModel.produto_id,
                func.max(VendaItemModel.produto_nome),
                quantidade,
                receita,
            )
            .join(VendaModel, VendaModel.id == VendaItemModel.venda_id)
            .filter(VendaModel.status == StatusVenda.PAGA.value)
        )
        if data_inicio:
            query = query.filter(VendaModel.data_venda >= data_inicio)
        if data_fim:
            query = query.filter(VendaModel.data_venda < data_fim)

        linhas = (
            query.group_by(VendaItemModel.produto_id)
            .order_by(quantidade.desc(), VendaItemModel.produto_id.asc())
            .limit(limit)
            .all()
        )
        return [
            {
                "produto_id": produto_id,
                "produto_nome": nome,
                "quantidade": int(qtd or 0),
                "receita": Decimal(str(rec or 0)),
            }
            for produto_id, nome, qtd, rec in linhas
        ]

    def tocar(self, venda: VendaModel, agora) -> None:
        """
        Marca a linha da venda como alterada.

        Força o UPDATE mesmo quando status e updated_at não mudam (dois
        toques no mesmo segundo), garantindo o incremento e a checagem de
        `versao`.
        """
        venda.updated_at = agora
        flag_modified(venda, "updated_at")

    def create(self, venda: VendaModel) -> VendaModel:
        """Adiciona a venda (e itens em cascata) à sessão; o commit é do serviço"""
        self.db.add(venda)
        self.db.flush()
        logger.info(f"[Venda] Criada venda_id={venda.id} itens={len(venda.itens)} total={venda.total}")
        return venda
