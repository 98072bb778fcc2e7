from decimal import Decimal

import pytest

from pdv.api.pagamentos.services.service_pagamento import PagamentoService
from pdv.api.producao.models.model_producao_item import ProducaoItemModel
from pdv.api.vendas.models.model_venda import VendaModel
from pdv.core.exceptions import ConflictError
from pdv.database.transaction import transacao
from tests.conftest import HOT_DOG


def test_toda_mutacao_incrementa_a_versao_da_venda(db, criar_venda, relogio):
    venda = criar_venda((HOT_DOG, "8.50"))
    versao_inicial = venda.versao

    PagamentoService(db, relogio=relogio).pagar_item(venda.itens[0].id, "money", Decimal("1.00"))

    db.refresh(venda)
    assert venda.versao == versao_inicial + 1


def test_versao_desatualizada_vira_conflito(session_factory, criar_venda):
    venda_id = criar_venda((HOT_DOG, "8.50")).id
    sessao_a = session_factory()
    sessao_b = session_factory()
    try:
        venda_a = sessao_a.get(VendaModel, venda_id)
        venda_b = sessao_b.get(VendaModel, venda_id)

        with transacao(sessao_a, "teste_a"):
            venda_a.observacoes = "primeiro"

        with pytest.raises(ConflictError) as exc:
            with transacao(sessao_b, "teste_b"):
                venda_b.observacoes = "segundo"
        assert exc.value.code == "versao_desatualizada"
    finally:
        sessao_a.close()
        sessao_b.close()


def test_registro_de_producao_duplicado_vira_conflito(db, criar_venda, relogio):
    venda = criar_venda((HOT_DOG, "8.50"))
    item = venda.itens[0]

    with pytest.raises(ConflictError) as exc:
        with transacao(db, "duplicado"):
            for _ in range(2):
                db.add(
                    ProducaoItemModel(
                        venda_item_id=item.id,
                        venda_id=venda.id,
                        status_producao="em_producao",
                        created_at=relogio(),
                        updated_at=relogio(),
                    )
                )
    assert exc.value.code == "registro_duplicado"


def test_pagamentos_concorrentes_em_itens_irmaos_nao_perdem_atualizacao(db, session_factory, criar_venda, relogio):
    venda = criar_venda((HOT_DOG, "8.50"), (HOT_DOG, "8.50"), (HOT_DOG, "8.50"))
    item1, item2, item3 = (i.id for i in venda.itens)
    PagamentoService(db, relogio=relogio).pagar_item(item3, "money", Decimal("8.50"))

    sessao_a = session_factory()
    sessao_b = session_factory()
    disparado = []

    def relogio_b():
        # Outra sessão paga o item 1 depois que B já leu a venda e os itens
        if not disparado:
            disparado.append(True)
            PagamentoService(sessao_a, relogio=relogio).pagar_item(item1, "money", Decimal("8.50"))
        return relogio()

    try:
        with pytest.raises(ConflictError) as exc:
            PagamentoService(sessao_b, relogio=relogio_b).pagar_item(item2, "money", Decimal("8.50"))
        assert exc.value.code == "versao_desatualizada"

        venda_b = sessao_b.get(VendaModel, venda.id)
        assert venda_b.status == "parcialmente_paga"
        assert [i.status_pagamento for i in venda_b.itens] == ["pago", "pendente", "pago"]

        PagamentoService(sessao_b, relogio=relogio).pagar_item(item2, "money", Decimal("8.50"))
        sessao_b.refresh(venda_b)
        assert venda_b.status == "paga"
    finally:
        sessao_a.close()
        sessao_b.close()


def test_toque_no_mesmo_segundo_ainda_incrementa_a_versao(db, criar_venda, relogio):
    venda = criar_venda((HOT_DOG, "8.50"), (HOT_DOG, "8.50"), (HOT_DOG, "8.50"))
    service = PagamentoService(db, relogio=relogio)
    service.pagar_item(venda.itens[0].id, "money", Decimal("8.50"))
    db.refresh(venda)
    versao = venda.versao

    # Status continua parcialmente_paga e o relógio não andou
    service.pagar_item(venda.itens[1].id, "money", Decimal("8.50"))

    db.refresh(venda)
    assert venda.status == "parcialmente_paga"
    assert venda.versao == versao + 1
