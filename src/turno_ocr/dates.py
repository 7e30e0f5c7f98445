"""Resolución de día-del-mes a fecha de calendario completa.

Dos estrategias:

* `resolve_date` (verificada): genera el día en el mes anterior, el actual y
  el siguiente a la fecha de referencia, descarta fechas inexistentes y las
  que no caen en el día de la semana leído, y se queda con la más cercana.
* `resolve_day_heuristic`: solo mira el número de día y aplica una regla de
  recencia; no comprueba el día de la semana.
"""
from __future__ import annotations
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Union
from .cleaners import normalize

log = logging.getLogger(__name__)

# date.weekday(): lunes = 0
WEEKDAY_MAP = {
    "LUNES": 0,
    "MARTES": 1,
    "MIERCOLES": 2,
    "JUEVES": 3,
    "VIERNES": 4,
    "SABADO": 5,
    "DOMINGO": 6,
}

DateLike = Union[date, datetime, str, None]


def parse_reference_date(value: DateLike = None) -> date:
    """Normaliza la fecha de referencia; None equivale a hoy."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Fecha de referencia no soportada: {type(value).__name__}")


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    idx = year * 12 + (month - 1) + offset
    return idx // 12, idx % 12 + 1


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def weekday_index(weekday: Optional[str]) -> Optional[int]:
    return WEEKDAY_MAP.get(normalize(weekday))


def resolve_date(weekday: Optional[str], day_of_month: int, reference: DateLike = None) -> Optional[str]:
    """Estrategia verificada. Devuelve "YYYY-MM-DD" o None si no hay candidato válido."""
    if not day_of_month or day_of_month < 1 or day_of_month > 31:
        return None

    base = parse_reference_date(reference)
    target = weekday_index(weekday)

    candidates: List[date] = []
    for offset in (-1, 0, 1):
        y, m = _shift_month(base.year, base.month, offset)
        d = _safe_date(y, m, day_of_month)
        if d is None:
            continue
        if target is not None and d.weekday() != target:
            continue
        candidates.append(d)

    if not candidates:
        log.debug("Sin fecha válida para %s %s (ref=%s)", weekday, day_of_month, base)
        return None

    # min() es estable: en empate gana el candidato más temprano
    best = min(candidates, key=lambda d: abs((d - base).days))
    return best.isoformat()


def resolve_day_heuristic(day_num: int, reference: DateLike = None) -> str:
    """Estrategia heurística (sin verificar el día de la semana).

    Si el día no existe en el mes elegido se desborda al mes siguiente
    (31 en un mes de 30 días -> día 1 del mes siguiente).
    """
    base = parse_reference_date(reference)
    today = base.day

    offset = 0
    if today >= 24 and day_num <= 7:
        offset = 1
    elif day_num < today - 14:
        offset = 1
    elif day_num > today + 14:
        offset = -1

    y, m = _shift_month(base.year, base.month, offset)
    return (date(y, m, 1) + timedelta(days=day_num - 1)).isoformat()
