from decimal import Decimal

from pdv.api.producao.services.classificacao import eh_bebida, classificar_item
from pdv.api.vendas.services.status_rules import (
    calcular_status_item,
    recomputar_status_venda,
    alocar_proporcionalmente,
)


def test_status_item_pago_dentro_da_tolerancia():
    assert calcular_status_item(Decimal("8.49"), Decimal("8.50")) == "pago"
    assert calcular_status_item(Decimal("8.50"), Decimal("8.50")) == "pago"


def test_status_item_parcial_e_pendente():
    assert calcular_status_item(Decimal("8.48"), Decimal("8.50")) == "parcial"
    assert calcular_status_item(Decimal("0.01"), Decimal("8.50")) == "parcial"
    assert calcular_status_item(Decimal("0"), Decimal("8.50")) == "pendente"


def test_status_venda_tres_vias():
    assert recomputar_status_venda(["pago", "pago"]) == "paga"
    assert recomputar_status_venda(["pago", "pendente"]) == "parcialmente_paga"
    assert recomputar_status_venda(["parcial", "pendente"]) == "parcialmente_paga"
    assert recomputar_status_venda(["pendente", "pendente"]) == "pendente"


def test_status_venda_sem_itens_fica_pendente():
    assert recomputar_status_venda([]) == "pendente"


def test_alocacao_proporcional_soma_exata():
    parcelas = alocar_proporcionalmente(Decimal("10.00"), [Decimal("8.50"), Decimal("12.00")])
    assert parcelas == [Decimal("4.14"), Decimal("5.86")]
    assert sum(parcelas) == Decimal("10.00")


def test_alocacao_resto_no_ultimo_item():
    parcelas = alocar_proporcionalmente(Decimal("10.00"), [Decimal("1"), Decimal("1"), Decimal("1")])
    assert parcelas == [Decimal("3.33"), Decimal("3.33"), Decimal("3.34")]


def test_alocacao_valor_pequeno_em_muitos_itens_nunca_fica_negativa():
    parcelas = alocar_proporcionalmente(Decimal("0.10"), [Decimal("1.00")] * 20)

    assert all(p >= 0 for p in parcelas)
    assert sum(parcelas) == Decimal("0.10")
    assert parcelas[-1] == Decimal("0.10")


def test_alocacao_base_zero_vai_toda_para_o_ultimo():
    parcelas = alocar_proporcionalmente(Decimal("5.00"), [Decimal("0"), Decimal("0")])
    assert parcelas == [Decimal("0.00"), Decimal("5.00")]


def test_alocacao_sem_itens():
    assert alocar_proporcionalmente(Decimal("5.00"), []) == []


def test_eh_bebida_por_categoria_ou_nome():
    palavras = ["bebida", "refrigerante", "suco", "água"]
    assert eh_bebida("Coca-Cola", "Bebidas", palavras)
    assert eh_bebida("SUCO de uva", "Lanches", palavras)
    assert eh_bebida("Água com gás", None, palavras)
    assert not eh_bebida("Hot Dog", "Lanches", palavras)
    assert not eh_bebida(None, None, palavras)


def test_classificar_item():
    assert classificar_item("Refrigerante Lata", "Outros", ["refrigerante"]) == "BEBIDA"
    assert classificar_item("X-Salada", "Lanches", ["refrigerante"]) == "COMIDA"
