"""
Exceções de domínio do PDV.

Todas as exceções seguem o padrão:
- code: Código máquina do erro (ex.: "desconto_negativo", "status_invalido")
- message: Mensagem legível para humanos
- context: Dados adicionais sobre o erro

Nenhuma é fatal: todas podem ser repetidas depois que o chamador corrigir a
entrada ou resolver o conflito. Nada é repetido automaticamente.
"""

from __future__ import annotations


class PDVError(Exception):
    """
    Classe base para todas as exceções do PDV.

    Attributes:
        code: Código máquina do erro
        message: Mensagem legível para humanos
        context: Dados adicionais sobre o erro
    """

    def __init__(self, code: str = "error", message: str = "", context: dict | None = None):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(PDVError):
    """
    Entrada malformada ou fora da faixa.

    Codes: "desconto_negativo", "total_negativo", "valor_invalido",
    "metodo_invalido", "status_invalido", "venda_cancelada", ...
    """


class NotFoundError(PDVError):
    """
    Venda, item, registro de pagamento ou fechamento inexistente.

    Codes: "venda_nao_encontrada", "item_nao_encontrado", "registro_nao_encontrado", ...
    """


class InvalidTransition(PDVError):
    """
    Violação da máquina de estados de produção.

    Codes: "nao_em_producao", "nao_concluido"
    """


class OverpaymentError(PDVError):
    """
    Pagamento de item ultrapassaria o subtotal (além da tolerância).

    Codes: "pagamento_excedente"
    """


class AmountMismatch(PDVError):
    """
    Soma dos métodos de pagamento não bate com o total da venda.

    Codes: "soma_divergente"
    """


class ConflictError(PDVError):
    """
    Atualização concorrente detectada (versão desatualizada ou registro duplicado).

    Codes: "versao_desatualizada", "registro_duplicado", "fechamento_existente"
    """
