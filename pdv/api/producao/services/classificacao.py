"""Classificação de itens em comida/bebida por palavras-chave."""
from typing import Iterable, Optional

from pdv.api.vendas.models.model_venda_item import TipoItem
from pdv.config.settings import PALAVRAS_CHAVE_BEBIDA


def eh_bebida(
    nome_produto: Optional[str],
    nome_categoria: Optional[str],
    palavras_chave: Iterable[str] = PALAVRAS_CHAVE_BEBIDA,
) -> bool:
    nomes = [(nome or "").lower() for nome in (nome_produto, nome_categoria)]
    return any(palavra.lower() in nome for palavra in palavras_chave for nome in nomes if palavra)


def classificar_item(
    nome_produto: Optional[str],
    nome_categoria: Optional[str],
    palavras_chave: Iterable[str] = PALAVRAS_CHAVE_BEBIDA,
) -> str:
    if eh_bebida(nome_produto, nome_categoria, palavras_chave):
        return TipoItem.BEBIDA.value
    return TipoItem.COMIDA.value
