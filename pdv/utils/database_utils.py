from datetime import datetime, date, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Tuple
from zoneinfo import ZoneInfo

from pdv.config.settings import TIMEZONE

# Relógio injetável: qualquer callable sem argumentos que devolva datetime
Relogio = Callable[[], datetime]

CENTAVOS = Decimal("0.01")


def now_trimmed():
    """Retorna datetime atual em timezone de São Paulo, sem microsegundos"""
    tz_sp = ZoneInfo(TIMEZONE)
    return datetime.now(tz_sp).replace(microsecond=0)


def to_decimal(valor) -> Decimal:
    """Converte float/int/str/Decimal para Decimal sem herdar ruído de float."""
    if isinstance(valor, Decimal):
        return valor
    return Decimal(str(valor or 0))


def arredondar(valor) -> Decimal:
    """Arredonda para centavos (meio para cima)."""
    return to_decimal(valor).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def intervalo_do_dia(dia: date) -> Tuple[datetime, datetime]:
    """Intervalo semiaberto [início do dia, início do dia seguinte)."""
    inicio = datetime.combine(dia, time.min)
    return inicio, inicio + timedelta(days=1)
