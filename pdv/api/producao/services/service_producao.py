from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.api.catalogo.contracts.produto_contract import IProdutoContract
from pdv.api.producao.models.model_producao_item import ProducaoItemModel, StatusProducao, STATUS_PRODUCAO
from pdv.api.producao.repositories.repo_producao import ProducaoRepository
from pdv.api.producao.schemas.schema_producao import (
    ProducaoItemResponse,
    ProducaoItemDetalheResponse,
    FilaItemResponse,
    FilaVendaResponse,
    EstatisticasProducaoResponse,
)
from pdv.api.vendas.models.model_venda import VendaModel
from pdv.api.vendas.models.model_venda_item import VendaItemModel, TipoItem
from pdv.api.vendas.repositories.repo_venda import VendaRepository
from pdv.core.exceptions import ValidationError, NotFoundError, InvalidTransition
from pdv.database.transaction import transacao
from pdv.utils.database_utils import Relogio, now_trimmed
from pdv.utils.logger import logger
from pdv.utils.prometheus_metrics import registrar_transicao_producao


def status_efetivo(item: VendaItemModel, registro: Optional[ProducaoItemModel]) -> str:
    """Status exibido: o do registro; sem registro, pendente (ou concluido para bebida)."""
    if registro is not None:
        return registro.status_producao
    if item.tipo_item == TipoItem.BEBIDA.value:
        return StatusProducao.CONCLUIDO.value
    return StatusProducao.PENDENTE.value


class ProducaoService:
    """
    Acompanhamento da cozinha por item de venda.

    O registro de produção nasce na primeira ação sobre o item. Cada transição
    trava a venda dona do item e toca a linha dela, então escritas
    concorrentes na mesma venda serializam.
    """

    def __init__(
        self,
        db: Session,
        produto_contract: Optional[IProdutoContract] = None,
        relogio: Relogio = now_trimmed,
    ):
        self.db = db
        self.repo = ProducaoRepository(db)
        self.repo_venda = VendaRepository(db)
        self.produto_contract = produto_contract
        self.relogio = relogio

    def _item_travado(self, venda_item_id: int):
        item = self.repo_venda.get_item(venda_item_id)
        if not item:
            raise NotFoundError(
                code="item_nao_encontrado",
                message="Item de venda não encontrado",
                context={"venda_item_id": venda_item_id},
            )
        venda = self.repo_venda.get_para_atualizacao(item.venda_id)
        registro = self.repo.get_para_atualizacao(venda_item_id)
        return venda, item, registro

    def _tocar_venda(self, venda: VendaModel, agora):
        self.repo_venda.tocar(venda, agora)

    def _novo_registro(self, item: VendaItemModel, status: str, agora) -> ProducaoItemModel:
        return self.repo.create(
            ProducaoItemModel(
                venda_item_id=item.id,
                venda_id=item.venda_id,
                status_producao=status,
                created_at=agora,
                updated_at=agora,
            )
        )

    @staticmethod
    def _resposta(registro: ProducaoItemModel) -> ProducaoItemResponse:
        return ProducaoItemResponse.model_validate(registro)

    def iniciar_producao(self, venda_item_id: int, ator_id: Optional[int] = None) -> ProducaoItemResponse:
        """
        Coloca o item em produção.

        Cria o registro se ainda não existir. Um novo início sobre um registro
        existente apenas sobrescreve quem iniciou e quando.
        """
        with transacao(self.db, "iniciar_producao"):
            venda, item, registro = self._item_travado(venda_item_id)
            agora = self.relogio()
            if registro is None:
                registro = self._novo_registro(item, StatusProducao.EM_PRODUCAO.value, agora)
            registro.status_producao = StatusProducao.EM_PRODUCAO.value
            registro.iniciado_por = ator_id
            registro.iniciado_em = agora
            registro.updated_at = agora
            self._tocar_venda(venda, agora)
            self.db.flush()
            resposta = self._resposta(registro)

        registrar_transicao_producao(StatusProducao.EM_PRODUCAO.value)
        logger.info(f"[Producao] Iniciado venda_item_id={venda_item_id} ator_id={ator_id}")
        return resposta

    def concluir_producao(self, venda_item_id: int, ator_id: Optional[int] = None) -> ProducaoItemResponse:
        with transacao(self.db, "concluir_producao"):
            venda, item, registro = self._item_travado(venda_item_id)
            atual = status_efetivo(item, registro)
            if registro is None or registro.status_producao != StatusProducao.EM_PRODUCAO.value:
                raise InvalidTransition(
                    code="nao_em_producao",
                    message=f"Item não está em produção (status atual: {atual})",
                    context={"venda_item_id": venda_item_id, "status_atual": atual},
                )
            agora = self.relogio()
            registro.status_producao = StatusProducao.CONCLUIDO.value
            registro.concluido_por = ator_id
            registro.concluido_em = agora
            registro.updated_at = agora
            self._tocar_venda(venda, agora)
            self.db.flush()
            resposta = self._resposta(registro)

        registrar_transicao_producao(StatusProducao.CONCLUIDO.value)
        logger.info(f"[Producao] Concluído venda_item_id={venda_item_id} ator_id={ator_id}")
        return resposta

    def entregar_item(self, venda_item_id: int, ator_id: Optional[int] = None) -> ProducaoItemResponse:
        """
        Marca o item como entregue.

        Exige "concluido". Bebida sem registro é criada já concluída e
        entregue na mesma chamada; bebida já entregue volta sem alteração.
        """
        with transacao(self.db, "entregar_item"):
            venda, item, registro = self._item_travado(venda_item_id)
            eh_bebida = item.tipo_item == TipoItem.BEBIDA.value
            agora = self.relogio()

            if registro is None and eh_bebida:
                registro = self._novo_registro(item, StatusProducao.CONCLUIDO.value, agora)
                registro.iniciado_em = agora
                registro.concluido_em = agora
                logger.info(f"[Producao] Bebida sem registro sintetizada como concluída venda_item_id={venda_item_id}")
            elif eh_bebida and registro.status_producao == StatusProducao.ENTREGUE.value:
                logger.info(f"[Producao] Bebida já entregue venda_item_id={venda_item_id}")
                return self._resposta(registro)

            atual = status_efetivo(item, registro)
            if registro is None or registro.status_producao != StatusProducao.CONCLUIDO.value:
                raise InvalidTransition(
                    code="nao_concluido",
                    message=f"Item não está concluído (status atual: {atual})",
                    context={"venda_item_id": venda_item_id, "status_atual": atual},
                )

            registro.status_producao = StatusProducao.ENTREGUE.value
            registro.entregue_em = agora
            registro.updated_at = agora
            self._tocar_venda(venda, agora)
            self.db.flush()
            resposta = self._resposta(registro)

        registrar_transicao_producao(StatusProducao.ENTREGUE.value)
        logger.info(f"[Producao] Entregue venda_item_id={venda_item_id} ator_id={ator_id}")
        return resposta

    def reverter_status(
        self,
        venda_item_id: int,
        novo_status: str,
        ator_id: Optional[int] = None,
    ) -> ProducaoItemResponse:
        """
        Sobrescreve o status de produção (correção manual).

        Limpa os carimbos da etapa alvo em diante: pendente limpa tudo,
        em_producao limpa conclusão e entrega, concluido limpa a entrega.
        """
        if novo_status not in STATUS_PRODUCAO:
            raise ValidationError(
                code="status_invalido",
                message="Status inválido",
                context={"status": novo_status, "permitidos": STATUS_PRODUCAO},
            )

        with transacao(self.db, "reverter_status_producao"):
            venda, item, registro = self._item_travado(venda_item_id)
            if registro is None:
                raise NotFoundError(
                    code="producao_nao_encontrada",
                    message="Item de produção não encontrado",
                    context={"venda_item_id": venda_item_id},
                )
            status_anterior = registro.status_producao
            agora = self.relogio()

            registro.status_producao = novo_status
            if novo_status == StatusProducao.PENDENTE.value:
                registro.iniciado_por = None
                registro.iniciado_em = None
            if novo_status in (StatusProducao.PENDENTE.value, StatusProducao.EM_PRODUCAO.value):
                registro.concluido_por = None
                registro.concluido_em = None
            if novo_status != StatusProducao.ENTREGUE.value:
                registro.entregue_em = None
            registro.updated_at = agora
            self._tocar_venda(venda, agora)
            self.db.flush()
            resposta = self._resposta(registro)

        registrar_transicao_producao(novo_status)
        logger.info(
            f"[Producao] Status revertido venda_item_id={venda_item_id} {status_anterior} -> {novo_status} "
            f"ator_id={ator_id}"
        )
        return resposta

    def inicializar_bebidas(self) -> int:
        """
        Cria, como concluídos, os registros das bebidas ainda sem registro
        nas vendas não canceladas. Retorna quantos foram criados.
        """
        criados = 0
        with transacao(self.db, "inicializar_bebidas"):
            agora = self.relogio()
            for venda in self.repo_venda.list_nao_canceladas_com_itens():
                pendentes = [
                    i for i in venda.itens
                    if i.tipo_item == TipoItem.BEBIDA.value and i.producao is None
                ]
                if not pendentes:
                    continue
                venda = self.repo_venda.get_para_atualizacao(venda.id)
                for item in pendentes:
                    registro = self._novo_registro(item, StatusProducao.CONCLUIDO.value, agora)
                    registro.iniciado_em = agora
                    registro.concluido_em = agora
                    criados += 1
                self._tocar_venda(venda, agora)

        logger.info(f"[Producao] {criados} bebidas inicializadas como concluídas")
        return criados

    def obter_item(self, venda_item_id: int) -> ProducaoItemDetalheResponse:
        item = self.repo_venda.get_item(venda_item_id)
        if not item:
            raise NotFoundError(
                code="item_nao_encontrado",
                message="Item de venda não encontrado",
                context={"venda_item_id": venda_item_id},
            )
        registro = self.repo.get_by_venda_item(venda_item_id)
        return ProducaoItemDetalheResponse(
            venda_item_id=item.id,
            venda_id=item.venda_id,
            tipo_item=item.tipo_item,
            status_efetivo=status_efetivo(item, registro),
            registro=self._resposta(registro) if registro else None,
        )

    def _nomes_exibicao(self, item: VendaItemModel):
        # Catálogo atual quando disponível; senão o retrato gravado na venda
        produto_nome, categoria_nome = item.produto_nome, item.categoria_nome
        if self.produto_contract is not None:
            produto = self.produto_contract.obter_produto(item.produto_id)
            if produto:
                produto_nome = produto.nome
                categoria = self.produto_contract.obter_categoria(produto.categoria_id)
                if categoria:
                    categoria_nome = categoria.nome
        return produto_nome, categoria_nome

    def listar_fila(self) -> List[FilaVendaResponse]:
        """
        Fila da cozinha agrupada por venda (mais antigas primeiro).

        Vendas canceladas ficam de fora; só entram vendas com ao menos um
        item ainda não entregue.
        """
        fila = []
        for venda in self.repo_venda.list_nao_canceladas_com_itens():
            itens = []
            for item in venda.itens:
                registro = item.producao
                status = status_efetivo(item, registro)
                produto_nome, categoria_nome = self._nomes_exibicao(item)
                itens.append(
                    FilaItemResponse(
                        venda_item_id=item.id,
                        produto_id=item.produto_id,
                        produto_nome=produto_nome,
                        categoria_nome=categoria_nome,
                        tipo_item=item.tipo_item,
                        quantidade=item.quantidade,
                        status_producao=status,
                        iniciado_em=registro.iniciado_em if registro else None,
                        concluido_em=registro.concluido_em if registro else None,
                    )
                )

            if any(i.status_producao != StatusProducao.ENTREGUE.value for i in itens):
                fila.append(
                    FilaVendaResponse(
                        venda_id=venda.id,
                        data_venda=venda.data_venda,
                        status_venda=venda.status,
                        observacoes=venda.observacoes,
                        itens=itens,
                    )
                )
        return fila

    def estatisticas(self) -> EstatisticasProducaoResponse:
        por_status = {status: 0 for status in STATUS_PRODUCAO}
        for status, quantidade in self.repo.contar_por_status():
            por_status[status] = por_status.get(status, 0) + int(quantidade)
        return EstatisticasProducaoResponse(por_status=por_status, total=sum(por_status.values()))
