from datetime import date, datetime
from decimal import Decimal

import pytest

from pdv.api.pagamentos.schemas.schema_pagamento import MetodoValor
from pdv.api.pagamentos.services.service_pagamento import PagamentoService
from pdv.api.vendas.schemas.schema_venda import VendaCreate, VendaItemCreate
from pdv.core.exceptions import ValidationError, NotFoundError
from tests.conftest import HOT_DOG, X_SALADA, REFRIGERANTE, SUCO


def test_criar_venda_calcula_subtotais_e_total(criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"), (X_SALADA, "6.00", 2), desconto="1.50")

    assert venda.status == "pendente"
    assert Decimal(venda.desconto) == Decimal("1.50")
    assert Decimal(venda.total) == Decimal("19.00")
    subtotais = [Decimal(i.subtotal) for i in venda.itens]
    assert subtotais == [Decimal("8.50"), Decimal("12.00")]
    assert all(i.status_pagamento == "pendente" for i in venda.itens)
    assert all(Decimal(i.valor_pago) == 0 for i in venda.itens)


def test_criar_venda_classifica_bebidas_uma_vez(criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"), (REFRIGERANTE, "5.00"), (SUCO, "7.00"))

    tipos = {i.produto_id: i.tipo_item for i in venda.itens}
    assert tipos == {HOT_DOG: "COMIDA", REFRIGERANTE: "BEBIDA", SUCO: "BEBIDA"}
    assert [i.categoria_nome for i in venda.itens] == ["Lanches", "Bebidas", "Lanches"]


def test_criar_venda_sem_itens(venda_service):
    with pytest.raises(ValidationError) as exc:
        venda_service.criar(VendaCreate(itens=[]))
    assert exc.value.code == "venda_sem_itens"


def test_criar_venda_produto_inexistente(venda_service):
    with pytest.raises(NotFoundError) as exc:
        venda_service.criar(VendaCreate(itens=[VendaItemCreate(produto_id=999, preco_unitario=Decimal("1"), quantidade=1)]))
    assert exc.value.code == "produto_nao_encontrado"


def test_criar_venda_quantidade_invalida(venda_service):
    with pytest.raises(ValidationError) as exc:
        venda_service.criar(VendaCreate(itens=[VendaItemCreate(produto_id=HOT_DOG, preco_unitario=Decimal("1"), quantidade=0)]))
    assert exc.value.code == "quantidade_invalida"


def test_criar_venda_desconto_maior_que_subtotal(criar_venda):
    with pytest.raises(ValidationError) as exc:
        criar_venda((HOT_DOG, "8.50"), desconto="9.00")
    assert exc.value.code == "total_negativo"


def test_atualizar_desconto_recalcula_total(venda_service, criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"), (X_SALADA, "12.00"))

    total = venda_service.atualizar_desconto(venda.id, Decimal("2.50"))

    assert total == Decimal("18.00")
    venda = venda_service.obter(venda.id)
    assert Decimal(venda.total) == Decimal("18.00")
    assert Decimal(venda.desconto) == Decimal("2.50")


def test_atualizar_desconto_negativo(venda_service, criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"))
    with pytest.raises(ValidationError) as exc:
        venda_service.atualizar_desconto(venda.id, Decimal("-1"))
    assert exc.value.code == "desconto_negativo"


def test_atualizar_desconto_deixando_total_negativo(venda_service, criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"))
    with pytest.raises(ValidationError) as exc:
        venda_service.atualizar_desconto(venda.id, Decimal("10.00"))
    assert exc.value.code == "total_negativo"
    assert Decimal(venda_service.obter(venda.id).total) == Decimal("8.50")


def test_atualizar_status_cancelada_nao_mexe_nos_itens(venda_service, criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"))

    venda = venda_service.atualizar_status(venda.id, "cancelada")

    assert venda.status == "cancelada"
    assert venda.itens[0].status_pagamento == "pendente"


def test_atualizar_status_invalido(venda_service, criar_venda):
    venda = criar_venda((HOT_DOG, "8.50"))
    for status in ("parcialmente_paga", "xyz"):
        with pytest.raises(ValidationError) as exc:
            venda_service.atualizar_status(venda.id, status)
        assert exc.value.code == "status_invalido"


def test_obter_venda_inexistente(venda_service):
    with pytest.raises(NotFoundError):
        venda_service.obter(12345)


def test_listar_filtra_por_status_e_data(venda_service, criar_venda, relogio):
    ontem = criar_venda((HOT_DOG, "8.50"))
    relogio.agora = datetime(2026, 10, 20, 9, 0, 0)
    hoje = criar_venda((X_SALADA, "12.00"))
    venda_service.atualizar_status(hoje.id, "cancelada")

    assert [v.id for v in venda_service.listar()] == [hoje.id, ontem.id]
    assert [v.id for v in venda_service.listar(status="cancelada")] == [hoje.id]
    assert [v.id for v in venda_service.listar(data_inicio=date(2026, 10, 19), data_fim=date(2026, 10, 19))] == [ontem.id]


def test_resumo_periodo_soma_apenas_vendas_pagas(db, venda_service, criar_venda, relogio):
    paga = criar_venda((HOT_DOG, "8.50"), desconto="0.50")
    criar_venda((X_SALADA, "12.00"))
    PagamentoService(db, relogio=relogio).pagar_item(paga.itens[0].id, "money", Decimal("8.50"))

    resumo = venda_service.resumo_periodo(date(2026, 10, 19), date(2026, 10, 19))

    assert resumo["total"] == Decimal("8.00")
    assert resumo["total_descontos"] == Decimal("0.50")
    assert resumo["quantidade_vendas"] == 1


def test_resumo_periodo_invalido(venda_service):
    with pytest.raises(ValidationError):
        venda_service.resumo_periodo(date(2026, 10, 20), date(2026, 10, 19))


def test_item_gratuito_nasce_pago(db, relogio, criar_venda):
    venda = criar_venda((HOT_DOG, "0.00"), (X_SALADA, "6.00"))

    assert [i.status_pagamento for i in venda.itens] == ["pago", "pendente"]
    assert venda.status == "parcialmente_paga"

    resposta = PagamentoService(db, relogio=relogio).pagar_item(venda.itens[1].id, "money", Decimal("6.00"))
    assert resposta.status_venda == "paga"


def test_venda_so_com_itens_gratuitos_nasce_paga(criar_venda):
    venda = criar_venda((REFRIGERANTE, "0.00"))
    assert venda.status == "paga"


def test_listar_por_operador(venda_service, criar_venda, relogio):
    primeira = criar_venda((HOT_DOG, "8.50"), operador_id=1)
    criar_venda((X_SALADA, "12.00"), operador_id=2)
    relogio.agora = datetime(2026, 10, 19, 13, 0, 0)
    segunda = criar_venda((REFRIGERANTE, "5.00"), operador_id=1)

    assert [v.id for v in venda_service.listar_por_operador(1)] == [segunda.id, primeira.id]
    assert venda_service.listar_por_operador(3) == []


def test_por_forma_pagamento_considera_so_vendas_pagas(db, venda_service, criar_venda, relogio):
    pagamentos = PagamentoService(db, relogio=relogio)
    pix = criar_venda((HOT_DOG, "8.50"), (X_SALADA, "12.00"))
    pagamentos.processar_pagamento_com_metodos(
        pix.id,
        [MetodoValor(metodo="money", valor=Decimal("10.00")), MetodoValor(metodo="pix", valor=Decimal("10.50"))],
    )
    dinheiro = criar_venda((REFRIGERANTE, "5.00"))
    pagamentos.processar_pagamento_com_metodos(dinheiro.id, [MetodoValor(metodo="money", valor=Decimal("5.00"))])
    cancelada = criar_venda((HOT_DOG, "8.50"))
    pagamentos.processar_pagamento_com_metodos(cancelada.id, [MetodoValor(metodo="pix", valor=Decimal("8.50"))])
    venda_service.atualizar_status(cancelada.id, "cancelada")

    resultado = venda_service.por_forma_pagamento("pix")

    assert [v.id for v in resultado["vendas"]] == [pix.id]
    assert resultado["total"] == Decimal("20.50")
    assert resultado["quantidade"] == 1
    assert venda_service.por_forma_pagamento("credit")["quantidade"] == 0


def test_produtos_mais_vendidos(db, venda_service, criar_venda, relogio):
    pagamentos = PagamentoService(db, relogio=relogio)
    v1 = criar_venda((HOT_DOG, "8.50", 2), (REFRIGERANTE, "5.00"))
    pagamentos.processar_pagamento_com_metodos(v1.id, [MetodoValor(metodo="money", valor=Decimal("22.00"))])
    relogio.agora = datetime(2026, 10, 20, 12, 0, 0)
    v2 = criar_venda((HOT_DOG, "8.50"))
    pagamentos.processar_pagamento_com_metodos(v2.id, [MetodoValor(metodo="pix", valor=Decimal("8.50"))])
    criar_venda((X_SALADA, "12.00", 5))

    ranking = venda_service.produtos_mais_vendidos()

    assert [(p["produto_id"], p["quantidade"], p["receita"]) for p in ranking] == [
        (HOT_DOG, 3, Decimal("25.50")),
        (REFRIGERANTE, 1, Decimal("5.00")),
    ]
    assert ranking[0]["produto_nome"] == "Hot Dog Completo"
    assert [p["produto_id"] for p in venda_service.produtos_mais_vendidos(limit=1)] == [HOT_DOG]

    so_dia_20 = venda_service.produtos_mais_vendidos(date(2026, 10, 20), date(2026, 10, 20))
    assert [(p["produto_id"], p["quantidade"]) for p in so_dia_20] == [(HOT_DOG, 1)]


def test_produtos_mais_vendidos_periodo_invalido(venda_service):
    with pytest.raises(ValidationError):
        venda_service.produtos_mais_vendidos(date(2026, 10, 20), date(2026, 10, 19))
