"""
Regras puras de status de pagamento.

Único lugar onde o status de item e a regra de três vias do status da venda
são calculados; toda mutação de item chama estas funções.
"""
from decimal import Decimal, ROUND_DOWN
from typing import Iterable, List, Sequence

from pdv.api.vendas.models.model_venda import StatusVenda
from pdv.api.vendas.models.model_venda_item import StatusPagamentoItem
from pdv.config.settings import TOLERANCIA_MONETARIA
from pdv.utils.database_utils import CENTAVOS, to_decimal, arredondar


def calcular_status_item(valor_pago, subtotal, tolerancia: Decimal = TOLERANCIA_MONETARIA) -> str:
    valor_pago = to_decimal(valor_pago)
    subtotal = to_decimal(subtotal)
    if valor_pago >= subtotal - tolerancia:
        return StatusPagamentoItem.PAGO.value
    if valor_pago > 0:
        return StatusPagamentoItem.PARCIAL.value
    return StatusPagamentoItem.PENDENTE.value


def recomputar_status_venda(status_itens: Iterable[str]) -> str:
    """
    paga              -> todos os itens pagos
    parcialmente_paga -> ao menos um pago/parcial, mas não todos pagos
    pendente          -> caso contrário (inclusive venda sem itens)
    """
    status_itens = list(status_itens)
    if status_itens and all(s == StatusPagamentoItem.PAGO.value for s in status_itens):
        return StatusVenda.PAGA.value
    if any(s in (StatusPagamentoItem.PAGO.value, StatusPagamentoItem.PARCIAL.value) for s in status_itens):
        return StatusVenda.PARCIALMENTE_PAGA.value
    return StatusVenda.PENDENTE.value


def alocar_proporcionalmente(valor_total, subtotais: Sequence) -> List[Decimal]:
    """
    Divide um valor entregue entre itens, proporcional ao subtotal de cada um.

    As parcelas dos primeiros itens são truncadas em centavos e o resto fica
    com o último item: a soma é exatamente o valor e nenhuma parcela é
    negativa.
    """
    if not subtotais:
        return []
    valor_total = arredondar(valor_total)
    subtotais = [to_decimal(s) for s in subtotais]
    base = sum(subtotais, Decimal("0"))

    parcelas: List[Decimal] = []
    for subtotal in subtotais[:-1]:
        if base > 0:
            parcelas.append((valor_total * subtotal / base).quantize(CENTAVOS, rounding=ROUND_DOWN))
        else:
            parcelas.append(Decimal("0.00"))
    parcelas.append(valor_total - sum(parcelas, Decimal("0")))
    return parcelas
