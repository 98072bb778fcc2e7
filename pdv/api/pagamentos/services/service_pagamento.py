from typing import List, Optional, Sequence
from decimal import Decimal

from sqlalchemy.orm import Session

from pdv.api.pagamentos.models.model_pagamento_metodo import PagamentoMetodoModel, METODOS_PAGAMENTO
from pdv.api.pagamentos.repositories.repo_pagamento import PagamentoRepository
from pdv.api.pagamentos.schemas.schema_pagamento import (
    MetodoValor,
    PagarItemResponse,
    PagarItensResponse,
    ItemPagoResponse,
    EstornoResponse,
    PagamentoMetodosResponse,
    RegistroPagamentoResponse,
)
from pdv.api.vendas.models.model_venda import VendaModel, StatusVenda
from pdv.api.vendas.models.model_venda_item import VendaItemModel, StatusPagamentoItem
from pdv.api.vendas.repositories.repo_venda import VendaRepository
from pdv.api.vendas.services.status_rules import (
    calcular_status_item,
    recomputar_status_venda,
    alocar_proporcionalmente,
)
from pdv.config import settings
from pdv.core.exceptions import ValidationError, NotFoundError, OverpaymentError, AmountMismatch
from pdv.database.transaction import transacao
from pdv.utils.database_utils import Relogio, now_trimmed, to_decimal, arredondar
from pdv.utils.logger import logger
from pdv.utils.prometheus_metrics import registrar_pagamento, registrar_estorno


class PagamentoService:
    """
    Pagamentos por item e por venda.

    Toda operação trava a venda (agregado raiz) antes de ler os itens irmãos,
    aplica a mudança, recalcula o status da venda e grava tudo numa única
    transação.
    """

    def __init__(
        self,
        db: Session,
        relogio: Relogio = now_trimmed,
        tolerancia: Decimal = settings.TOLERANCIA_MONETARIA,
        estorno_recalcula_status: Optional[bool] = None,
    ):
        self.db = db
        self.repo = PagamentoRepository(db)
        self.repo_venda = VendaRepository(db)
        self.relogio = relogio
        self.tolerancia = tolerancia
        if estorno_recalcula_status is None:
            estorno_recalcula_status = settings.ESTORNO_RECALCULA_STATUS_VENDA
        self.estorno_recalcula_status = estorno_recalcula_status

    # ------------------------------------------------------------------
    # Validações
    # ------------------------------------------------------------------
    def _validar_metodo(self, metodo: str) -> str:
        if metodo not in METODOS_PAGAMENTO:
            raise ValidationError(
                code="metodo_invalido",
                message=f"Método de pagamento inválido: {metodo}",
                context={"metodo": metodo, "permitidos": METODOS_PAGAMENTO},
            )
        return metodo

    def _validar_valor(self, valor) -> Decimal:
        valor = arredondar(valor)
        if valor <= 0:
            raise ValidationError(
                code="valor_invalido",
                message="O valor do pagamento deve ser maior que zero",
                context={"valor": str(valor)},
            )
        return valor

    def _venda_travada(self, venda_id: int) -> VendaModel:
        venda = self.repo_venda.get_para_atualizacao(venda_id)
        if not venda:
            raise NotFoundError(
                code="venda_nao_encontrada",
                message="Venda não encontrada",
                context={"venda_id": venda_id},
            )
        return venda

    def _item_da_venda(self, venda: VendaModel, venda_item_id: int) -> VendaItemModel:
        item = next((i for i in venda.itens if i.id == venda_item_id), None)
        if not item:
            raise NotFoundError(
                code="item_nao_encontrado",
                message="Item de venda não encontrado nesta venda",
                context={"venda_id": venda.id, "venda_item_id": venda_item_id},
            )
        return item

    def _venda_do_item_travada(self, venda_item_id: int):
        item = self.repo_venda.get_item(venda_item_id)
        if not item:
            raise NotFoundError(
                code="item_nao_encontrado",
                message="Item de venda não encontrado",
                context={"venda_item_id": venda_item_id},
            )
        venda = self._venda_travada(item.venda_id)
        return venda, self._item_da_venda(venda, venda_item_id)

    def _rejeitar_cancelada(self, venda: VendaModel):
        if venda.status == StatusVenda.CANCELADA.value:
            raise ValidationError(
                code="venda_cancelada",
                message="Não é possível registrar pagamentos em uma venda cancelada",
                context={"venda_id": venda.id},
            )

    # ------------------------------------------------------------------
    # Núcleo
    # ------------------------------------------------------------------
    def _aplicar_pagamento_item(
        self,
        venda: VendaModel,
        item: VendaItemModel,
        metodo: str,
        valor: Decimal,
        pagador: Optional[str],
    ) -> PagamentoMetodoModel:
        subtotal = to_decimal(item.subtotal)
        novo_valor_pago = to_decimal(item.valor_pago) + valor
        if novo_valor_pago > subtotal + self.tolerancia:
            raise OverpaymentError(
                code="pagamento_excedente",
                message="Valor excede o restante do item",
                context={
                    "venda_item_id": item.id,
                    "subtotal": str(subtotal),
                    "valor_pago": str(item.valor_pago),
                    "valor": str(valor),
                },
            )

        item.valor_pago = novo_valor_pago
        item.status_pagamento = calcular_status_item(novo_valor_pago, subtotal, self.tolerancia)

        return self.repo.create(
            venda_id=venda.id,
            venda_item_id=item.id,
            metodo=metodo,
            valor=valor,
            pagador=pagador,
            created_at=self.relogio(),
        )

    def _atualizar_status_venda(self, venda: VendaModel) -> str:
        venda.status = recomputar_status_venda(i.status_pagamento for i in venda.itens)
        self.repo_venda.tocar(venda, self.relogio())
        return venda.status

    # ------------------------------------------------------------------
    # Operações
    # ------------------------------------------------------------------
    def pagar_item(
        self,
        venda_item_id: int,
        metodo: str,
        valor,
        pagador: Optional[str] = None,
    ) -> PagarItemResponse:
        """Registra um pagamento (total ou parcial) de um item"""
        metodo = self._validar_metodo(metodo)
        valor = self._validar_valor(valor)

        with transacao(self.db, "pagar_item"):
            venda, item = self._venda_do_item_travada(venda_item_id)
            self._rejeitar_cancelada(venda)
            registro = self._aplicar_pagamento_item(venda, item, metodo, valor, pagador)
            status_venda = self._atualizar_status_venda(venda)
            resposta = PagarItemResponse(
                status_pagamento=item.status_pagamento,
                valor_pago=float(item.valor_pago),
                status_venda=status_venda,
                registro_id=registro.id,
            )

        registrar_pagamento(metodo, valor)
        logger.info(
            f"[Pagamento] Item pago venda_item_id={venda_item_id} metodo={metodo} valor={valor} "
            f"status_item={resposta.status_pagamento} status_venda={resposta.status_venda}"
        )
        return resposta

    def pagar_itens(
        self,
        venda_id: int,
        venda_item_ids: Sequence[int],
        metodo: str,
        valor_total,
        pagador: Optional[str] = None,
    ) -> PagarItensResponse:
        """
        Paga vários itens com um único valor entregue.

        O valor é dividido proporcionalmente ao subtotal de cada item (resto
        de arredondamento no último) e cada parcela passa pela mesma regra de
        pagamento de item. Tudo ou nada: qualquer excedente desfaz o lote.
        """
        if not venda_item_ids:
            raise ValidationError(code="sem_itens", message="Selecione pelo menos um item para pagamento")
        if len(set(venda_item_ids)) != len(venda_item_ids):
            raise ValidationError(code="itens_repetidos", message="Item selecionado mais de uma vez")
        metodo = self._validar_metodo(metodo)
        valor_total = self._validar_valor(valor_total)

        with transacao(self.db, "pagar_itens"):
            venda = self._venda_travada(venda_id)
            self._rejeitar_cancelada(venda)
            itens = [self._item_da_venda(venda, item_id) for item_id in venda_item_ids]
            parcelas = alocar_proporcionalmente(valor_total, [i.subtotal for i in itens])

            pagos = []
            for item, parcela in zip(itens, parcelas):
                if parcela > 0:
                    self._aplicar_pagamento_item(venda, item, metodo, parcela, pagador)
                pagos.append(
                    ItemPagoResponse(
                        venda_item_id=item.id,
                        valor_alocado=float(parcela),
                        status_pagamento=item.status_pagamento,
                        valor_pago=float(item.valor_pago),
                    )
                )
            status_venda = self._atualizar_status_venda(venda)

        registrar_pagamento(metodo, valor_total)
        logger.info(
            f"[Pagamento] Itens pagos venda_id={venda_id} itens={list(venda_item_ids)} "
            f"metodo={metodo} valor_total={valor_total} status_venda={status_venda}"
        )
        return PagarItensResponse(status_venda=status_venda, itens=pagos)

    def estornar_pagamento_item(self, registro_id: int, motivo: str) -> EstornoResponse:
        """
        Estorna um registro de pagamento de item.

        O registro é removido. Se algum item da venda deixar de estar pago, a
        venda volta direto para "pendente" (a menos que
        ESTORNO_RECALCULA_STATUS_VENDA esteja ligado, quando vale a regra de
        três vias). Venda cancelada continua cancelada.
        """
        with transacao(self.db, "estornar_pagamento_item"):
            registro = self.repo.get_by_id(registro_id)
            if not registro:
                raise NotFoundError(
                    code="registro_nao_encontrado",
                    message="Registro de pagamento não encontrado",
                    context={"registro_id": registro_id},
                )
            if registro.venda_item_id is None:
                raise ValidationError(
                    code="registro_sem_item",
                    message="Registro de quitação da venda não pode ser estornado por item",
                    context={"registro_id": registro_id},
                )

            venda = self._venda_travada(registro.venda_id)
            item = self._item_da_venda(venda, registro.venda_item_id)

            valor_estornado = to_decimal(registro.valor)
            novo_valor_pago = max(Decimal("0"), to_decimal(item.valor_pago) - valor_estornado)
            item.valor_pago = novo_valor_pago
            item.status_pagamento = calcular_status_item(novo_valor_pago, item.subtotal, self.tolerancia)

            self.repo.delete(registro)

            if venda.status != StatusVenda.CANCELADA.value:
                if self.estorno_recalcula_status:
                    venda.status = recomputar_status_venda(i.status_pagamento for i in venda.itens)
                elif all(i.status_pagamento == StatusPagamentoItem.PAGO.value for i in venda.itens):
                    venda.status = StatusVenda.PAGA.value
                else:
                    venda.status = StatusVenda.PENDENTE.value
            self.repo_venda.tocar(venda, self.relogio())

            resposta = EstornoResponse(
                status_pagamento=item.status_pagamento,
                valor_pago=float(novo_valor_pago),
                valor_estornado=float(valor_estornado),
                status_venda=venda.status,
            )

        registrar_estorno()
        logger.info(
            f"[Pagamento] Estorno registro_id={registro_id} venda_item_id={item.id} valor={valor_estornado} "
            f"motivo={motivo!r} status_item={resposta.status_pagamento} status_venda={resposta.status_venda}"
        )
        return resposta

    def processar_pagamento_com_metodos(self, venda_id: int, metodos: List[MetodoValor]) -> PagamentoMetodosResponse:
        """
        Quita a venda inteira com um ou mais métodos.

        A soma precisa bater com o total da venda (tolerância ε). A forma de
        pagamento da venda passa a ser o método de maior valor; em empate,
        vence o que aparece primeiro. Os itens são quitados para manter
        "paga" somente com todos os itens pagos.
        """
        if not metodos:
            raise ValidationError(code="sem_metodos", message="Adicione pelo menos uma forma de pagamento")

        entradas = [(self._validar_metodo(m.metodo), self._validar_valor(m.valor)) for m in metodos]

        with transacao(self.db, "processar_pagamento_com_metodos"):
            venda = self._venda_travada(venda_id)
            self._rejeitar_cancelada(venda)
            if venda.status == StatusVenda.PAGA.value:
                raise ValidationError(
                    code="venda_ja_paga",
                    message="Venda já está paga",
                    context={"venda_id": venda_id},
                )
            if any(to_decimal(i.valor_pago) > 0 for i in venda.itens):
                raise ValidationError(
                    code="venda_com_pagamentos_de_item",
                    message="Venda já possui pagamentos por item; quite os itens restantes individualmente",
                    context={"venda_id": venda_id},
                )

            soma = sum((valor for _, valor in entradas), Decimal("0"))
            total = to_decimal(venda.total)
            if abs(soma - total) > self.tolerancia:
                raise AmountMismatch(
                    code="soma_divergente",
                    message=f"Soma dos pagamentos ({soma}) difere do total da venda ({total})",
                    context={"soma": str(soma), "total": str(total)},
                )

            forma_pagamento = self._metodo_dominante(entradas)
            agora = self.relogio()
            registros = [
                self.repo.create(
                    venda_id=venda.id,
                    venda_item_id=None,
                    metodo=metodo,
                    valor=valor,
                    created_at=agora,
                )
                for metodo, valor in entradas
            ]

            for item in venda.itens:
                item.valor_pago = to_decimal(item.subtotal)
                item.status_pagamento = StatusPagamentoItem.PAGO.value

            venda.status = StatusVenda.PAGA.value
            venda.forma_pagamento = forma_pagamento
            self.repo_venda.tocar(venda, agora)

            resposta = PagamentoMetodosResponse(
                status_venda=venda.status,
                forma_pagamento=forma_pagamento,
                registros=[RegistroPagamentoResponse.model_validate(r) for r in registros],
            )

        for metodo, valor in entradas:
            registrar_pagamento(metodo, valor, escopo="venda")
        logger.info(
            f"[Pagamento] Venda quitada venda_id={venda_id} metodos={[(m, str(v)) for m, v in entradas]} "
            f"forma_pagamento={forma_pagamento}"
        )
        return resposta

    @staticmethod
    def _metodo_dominante(entradas) -> str:
        """Método com maior valor somado; empate fica com o primeiro na ordem de entrada."""
        acumulado = {}
        for metodo, valor in entradas:
            acumulado[metodo] = acumulado.get(metodo, Decimal("0")) + valor
        dominante = None
        for metodo, valor in acumulado.items():
            if dominante is None or valor > acumulado[dominante]:
                dominante = metodo
        return dominante

    def listar_registros(self, venda_id: int) -> List[PagamentoMetodoModel]:
        if not self.repo_venda.get_by_id(venda_id):
            raise NotFoundError(
                code="venda_nao_encontrada",
                message="Venda não encontrada",
                context={"venda_id": venda_id},
            )
        return self.repo.list_by_venda(venda_id)
