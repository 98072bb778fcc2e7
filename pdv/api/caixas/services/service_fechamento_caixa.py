from typing import List, Optional, Union
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from pdv.api.caixas.models.model_fechamento_caixa import FechamentoCaixaModel
from pdv.api.caixas.repositories.repo_fechamento_caixa import FechamentoCaixaRepository
from pdv.api.caixas.schemas.schema_fechamento_caixa import ValoresPorMetodo
from pdv.api.catalogo.contracts.usuario_contract import IUsuarioContract
from pdv.api.pagamentos.models.model_pagamento_metodo import METODOS_PAGAMENTO
from pdv.api.pagamentos.repositories.repo_pagamento import PagamentoRepository
from pdv.config import settings
from pdv.core.exceptions import ValidationError, NotFoundError, ConflictError
from pdv.database.transaction import transacao
from pdv.utils.database_utils import Relogio, now_trimmed, arredondar, intervalo_do_dia
from pdv.utils.logger import logger
from pdv.utils.prometheus_metrics import registrar_fechamento

Valores = Union[ValoresPorMetodo, dict]


def _como_dict(valores: Optional[Valores]) -> dict:
    if valores is None:
        return {}
    if isinstance(valores, ValoresPorMetodo):
        return valores.model_dump()
    return dict(valores)


class FechamentoCaixaService:
    """Conciliação do caixa: contado x vendido por método de pagamento."""

    def __init__(
        self,
        db: Session,
        usuario_contract: IUsuarioContract,
        relogio: Relogio = now_trimmed,
        permitir_multiplos_no_dia: Optional[bool] = None,
    ):
        self.db = db
        self.repo = FechamentoCaixaRepository(db)
        self.repo_pagamento = PagamentoRepository(db)
        self.usuario_contract = usuario_contract
        self.relogio = relogio
        if permitir_multiplos_no_dia is None:
            permitir_multiplos_no_dia = settings.PERMITIR_MULTIPLOS_FECHAMENTOS_DIA
        self.permitir_multiplos_no_dia = permitir_multiplos_no_dia

    def calcular_vendido_do_dia(self, dia: date) -> dict:
        """
        Soma os registros de pagamento das vendas pagas no dia, por método.

        Métodos não reconhecidos entram só no total.
        """
        inicio, fim = intervalo_do_dia(dia)
        vendido = {metodo: Decimal("0.00") for metodo in METODOS_PAGAMENTO}
        total = Decimal("0.00")

        for metodo, soma in self.repo_pagamento.somar_por_metodo_vendas_pagas(inicio, fim):
            soma = arredondar(soma)
            total += soma
            if metodo in vendido:
                vendido[metodo] += soma
            else:
                logger.warning(f"[Caixa] Método não reconhecido '{metodo}' somado apenas ao total: {soma}")

        vendido["total"] = total
        return vendido

    def _validar_contado(self, contado: dict) -> dict:
        valores = {}
        for metodo in METODOS_PAGAMENTO:
            valor = arredondar(contado.get(metodo, 0))
            if valor < 0:
                raise ValidationError(
                    code="contagem_negativa",
                    message=f"Valor contado para {metodo} não pode ser negativo",
                    context={"metodo": metodo, "valor": str(valor)},
                )
            valores[metodo] = valor
        return valores

    def fechar(
        self,
        operador_id: int,
        contado: Valores,
        vendido: Optional[Valores] = None,
        observacoes: Optional[str] = None,
    ) -> FechamentoCaixaModel:
        """
        Registra o fechamento do caixa.

        diferenca[m] = contado[m] - vendido[m] para cada método e
        diferenca_total é a soma dessas diferenças.
        """
        contado = self._validar_contado(_como_dict(contado))

        if not self.usuario_contract.obter_usuario(operador_id):
            raise NotFoundError(
                code="operador_nao_encontrado",
                message="Operador não encontrado",
                context={"operador_id": operador_id},
            )

        agora = self.relogio()

        with transacao(self.db, "fechar_caixa"):
            inicio, fim = intervalo_do_dia(agora.date())
            if not self.permitir_multiplos_no_dia and self.repo.existe_no_periodo(inicio, fim):
                raise ConflictError(
                    code="fechamento_existente",
                    message="Já existe um fechamento de caixa para este dia",
                    context={"data": agora.date().isoformat()},
                )

            if vendido is None:
                valores_vendidos = self.calcular_vendido_do_dia(agora.date())
            else:
                informado = _como_dict(vendido)
                valores_vendidos = {m: arredondar(informado.get(m, 0)) for m in METODOS_PAGAMENTO}
                valores_vendidos["total"] = sum(valores_vendidos.values(), Decimal("0.00"))

            diferencas = {m: contado[m] - valores_vendidos[m] for m in METODOS_PAGAMENTO}

            fechamento = FechamentoCaixaModel(
                operador_id=operador_id,
                contado_money=contado["money"],
                contado_credit=contado["credit"],
                contado_debit=contado["debit"],
                contado_pix=contado["pix"],
                total_contado=sum(contado.values(), Decimal("0.00")),
                vendido_money=valores_vendidos["money"],
                vendido_credit=valores_vendidos["credit"],
                vendido_debit=valores_vendidos["debit"],
                vendido_pix=valores_vendidos["pix"],
                total_vendido=valores_vendidos["total"],
                diferenca_money=diferencas["money"],
                diferenca_credit=diferencas["credit"],
                diferenca_debit=diferencas["debit"],
                diferenca_pix=diferencas["pix"],
                diferenca_total=sum(diferencas.values(), Decimal("0.00")),
                observacoes=observacoes or "",
                data_fechamento=agora,
                created_at=agora,
            )
            self.repo.create(fechamento)

        registrar_fechamento()
        if fechamento.diferenca_total != 0:
            logger.warning(f"[Caixa] Fechamento id={fechamento.id} com diferença {fechamento.diferenca_total}")
        return fechamento

    def obter(self, fechamento_id: int) -> FechamentoCaixaModel:
        fechamento = self.repo.get_by_id(fechamento_id)
        if not fechamento:
            raise NotFoundError(
                code="fechamento_nao_encontrado",
                message="Fechamento de caixa não encontrado",
                context={"fechamento_id": fechamento_id},
            )
        return fechamento

    def obter_por_data(self, dia: date) -> Optional[FechamentoCaixaModel]:
        """Fechamento mais recente do dia, ou None"""
        inicio, fim = intervalo_do_dia(dia)
        fechamentos = self.repo.list_por_periodo(inicio, fim)
        return fechamentos[0] if fechamentos else None

    def listar_por_periodo(self, data_inicio: date, data_fim: date) -> List[FechamentoCaixaModel]:
        if data_fim < data_inicio:
            raise ValidationError(code="periodo_invalido", message="Data fim anterior à data início")
        inicio, _ = intervalo_do_dia(data_inicio)
        _, fim = intervalo_do_dia(data_fim)
        return self.repo.list_por_periodo(inicio, fim)

    def listar_todos(self) -> List[FechamentoCaixaModel]:
        return self.repo.list_por_periodo()

    def remover(self, fechamento_id: int) -> None:
        """Remoção lógica: o fechamento some das consultas, o registro permanece"""
        with transacao(self.db, "remover_fechamento"):
            fechamento = self.obter(fechamento_id)
            fechamento.deleted_at = self.relogio()
        logger.info(f"[Caixa] Fechamento removido id={fechamento_id}")
