from typing import Optional, List
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from pdv.api.catalogo.contracts.produto_contract import IProdutoContract
from pdv.api.producao.services.classificacao import classificar_item
from pdv.api.vendas.models.model_venda import VendaModel, STATUS_VENDA_DEFINIVEIS
from pdv.api.vendas.models.model_venda_item import VendaItemModel, StatusPagamentoItem
from pdv.api.vendas.repositories.repo_venda import VendaRepository
from pdv.api.vendas.schemas.schema_venda import VendaCreate
from pdv.api.vendas.services.status_rules import recomputar_status_venda
from pdv.core.exceptions import ValidationError, NotFoundError
from pdv.database.transaction import transacao
from pdv.utils.database_utils import Relogio, now_trimmed, to_decimal, arredondar, intervalo_do_dia
from pdv.utils.logger import logger


class VendaService:
    """Livro de vendas: criação, desconto, status imperativo e consultas."""

    def __init__(
        self,
        db: Session,
        produto_contract: IProdutoContract,
        relogio: Relogio = now_trimmed,
    ):
        self.db = db
        self.repo = VendaRepository(db)
        self.produto_contract = produto_contract
        self.relogio = relogio

    def _venda_or_404(self, venda_id: int, para_atualizacao: bool = False) -> VendaModel:
        if para_atualizacao:
            venda = self.repo.get_para_atualizacao(venda_id)
        else:
            venda = self.repo.get_by_id(venda_id)
        if not venda:
            raise NotFoundError(
                code="venda_nao_encontrada",
                message="Venda não encontrada",
                context={"venda_id": venda_id},
            )
        return venda

    def _montar_item(self, produto_id: int, preco_unitario: Decimal, quantidade: int, agora) -> VendaItemModel:
        if quantidade is None or quantidade <= 0:
            raise ValidationError(
                code="quantidade_invalida",
                message="Quantidade deve ser maior que zero",
                context={"produto_id": produto_id, "quantidade": quantidade},
            )
        if preco_unitario < 0:
            raise ValidationError(
                code="preco_invalido",
                message="Preço unitário não pode ser negativo",
                context={"produto_id": produto_id},
            )

        produto = self.produto_contract.obter_produto(produto_id)
        if not produto:
            raise NotFoundError(
                code="produto_nao_encontrado",
                message="Produto não encontrado",
                context={"produto_id": produto_id},
            )
        categoria = self.produto_contract.obter_categoria(produto.categoria_id)
        categoria_nome = categoria.nome if categoria else None

        subtotal = arredondar(preco_unitario * quantidade)
        # Item gratuito já nasce quitado
        status_pagamento = (
            StatusPagamentoItem.PAGO.value if subtotal == 0 else StatusPagamentoItem.PENDENTE.value
        )

        return VendaItemModel(
            produto_id=produto.id,
            produto_nome=produto.nome,
            categoria_nome=categoria_nome,
            tipo_item=classificar_item(produto.nome, categoria_nome),
            preco_unitario=preco_unitario,
            quantidade=quantidade,
            subtotal=subtotal,
            status_pagamento=status_pagamento,
            valor_pago=Decimal("0.00"),
            created_at=agora,
        )

    def criar(self, data: VendaCreate) -> VendaModel:
        """Cria a venda e todos os itens numa única transação"""
        if not data.itens:
            raise ValidationError(code="venda_sem_itens", message="A venda precisa de ao menos um item")

        desconto = arredondar(data.desconto or 0)
        if desconto < 0:
            raise ValidationError(code="desconto_negativo", message="Desconto não pode ser negativo")

        agora = self.relogio()
        itens = [
            self._montar_item(i.produto_id, to_decimal(i.preco_unitario), i.quantidade, agora)
            for i in data.itens
        ]

        subtotal = sum((i.subtotal for i in itens), Decimal("0"))
        total = subtotal - desconto
        if total < 0:
            raise ValidationError(
                code="total_negativo",
                message="Total da venda não pode ser negativo",
                context={"subtotal": str(subtotal), "desconto": str(desconto)},
            )

        venda = VendaModel(
            total=total,
            desconto=desconto,
            forma_pagamento=data.forma_pagamento,
            status=recomputar_status_venda(i.status_pagamento for i in itens),
            cliente_id=data.cliente_id,
            operador_id=data.operador_id,
            observacoes=data.observacoes,
            data_venda=agora,
            created_at=agora,
            updated_at=agora,
            itens=itens,
        )

        with transacao(self.db, "criar_venda"):
            self.repo.create(venda)

        return venda

    def atualizar_desconto(self, venda_id: int, desconto) -> Decimal:
        """Aplica/altera o desconto recalculando o total a partir dos subtotais atuais"""
        desconto = arredondar(desconto)
        if desconto < 0:
            raise ValidationError(code="desconto_negativo", message="Desconto não pode ser negativo")

        with transacao(self.db, "atualizar_desconto"):
            venda = self._venda_or_404(venda_id, para_atualizacao=True)

            subtotal = sum((to_decimal(i.subtotal) for i in venda.itens), Decimal("0"))
            novo_total = subtotal - desconto
            if novo_total < 0:
                raise ValidationError(
                    code="total_negativo",
                    message="Total da venda não pode ser negativo",
                    context={"subtotal": str(subtotal), "desconto": str(desconto)},
                )

            venda.desconto = desconto
            venda.total = novo_total
            self.repo.tocar(venda, self.relogio())

        logger.info(f"[Venda] Desconto atualizado venda_id={venda_id} desconto={desconto} total={novo_total}")
        return novo_total

    def atualizar_status(self, venda_id: int, status: str) -> VendaModel:
        """
        Define o status diretamente (ex.: cancelar).

        Independente do status derivado dos pagamentos; parcialmente_paga
        não pode ser definido aqui.
        """
        if status not in STATUS_VENDA_DEFINIVEIS:
            raise ValidationError(
                code="status_invalido",
                message="Status inválido",
                context={"status": status, "permitidos": sorted(STATUS_VENDA_DEFINIVEIS)},
            )

        with transacao(self.db, "atualizar_status_venda"):
            venda = self._venda_or_404(venda_id, para_atualizacao=True)
            status_anterior = venda.status
            venda.status = status
            self.repo.tocar(venda, self.relogio())

        logger.info(f"[Venda] Status alterado venda_id={venda_id} {status_anterior} -> {status}")
        return venda

    def obter(self, venda_id: int) -> VendaModel:
        return self._venda_or_404(venda_id)

    def listar(
        self,
        status: Optional[str] = None,
        data_inicio: Optional[date] = None,
        data_fim: Optional[date] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[VendaModel]:
        inicio = intervalo_do_dia(data_inicio)[0] if data_inicio else None
        fim = intervalo_do_dia(data_fim)[1] if data_fim else None
        return self.repo.list(status=status, data_inicio=inicio, data_fim=fim, skip=skip, limit=limit)

    def resumo_periodo(self, data_inicio: date, data_fim: date) -> dict:
        if data_fim < data_inicio:
            raise ValidationError(code="periodo_invalido", message="Data fim anterior à data início")
        inicio, _ = intervalo_do_dia(data_inicio)
        _, fim = intervalo_do_dia(data_fim)
        resumo = self.repo.resumo_pagas(inicio, fim)
        return {"data_inicio": data_inicio, "data_fim": data_fim, **resumo}

    def listar_por_operador(self, operador_id: int) -> List[VendaModel]:
        return self.repo.list_por_operador(operador_id)

    def por_forma_pagamento(self, forma_pagamento: str) -> dict:
        """Vendas pagas cujo método dominante é `forma_pagamento`, com total e quantidade."""
        vendas = self.repo.list_pagas_por_forma_pagamento(forma_pagamento)
        total = sum((to_decimal(v.total) for v in vendas), Decimal("0"))
        return {
            "forma_pagamento": forma_pagamento,
            "vendas": vendas,
            "total": total,
            "quantidade": len(vendas),
        }

    def produtos_mais_vendidos(
        self,
        data_inicio: Optional[date] = None,
        data_fim: Optional[date] = None,
        limit: int = 10,
    ) -> List[dict]:
        if data_inicio and data_fim and data_fim < data_inicio:
            raise ValidationError(code="periodo_invalido", message="Data fim anterior à data início")
        inicio = intervalo_do_dia(data_inicio)[0] if data_inicio else None
        fim = intervalo_do_dia(data_fim)[1] if data_fim else None
        return self.repo.produtos_mais_vendidos(data_inicio=inicio, data_fim=fim, limit=limit)
