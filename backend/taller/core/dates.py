"""
Utilidades de fechas en UTC
Proyecto: Taller Manager (Gestión de Taller)

La fecha de un turno es un día calendario: se guarda como la medianoche UTC
de ese día y nunca se interpreta en la hora local del servidor.
"""

import datetime
import re
from typing import Optional

from taller.core.exceptions import BusinessValidationError

UTC = datetime.timezone.utc

# Origen de los rangos abiertos ("desde" ausente)
EPOCH = datetime.datetime(1970, 1, 1, tzinfo=UTC)

_CALENDAR_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Último milisegundo del día: 23:59:59.999
_END_OF_DAY = datetime.time(23, 59, 59, 999000)


def ensure_utc(value: datetime.datetime) -> datetime.datetime:
    """
    Normaliza un datetime a UTC.

    Los valores naive (ej. leídos de SQLite) se consideran ya en UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_date_utc(value: str) -> datetime.datetime:
    """
    Convierte un string de fecha en un instante UTC.

    Un string con la forma literal YYYY-MM-DD se toma como día calendario
    a las 00:00:00.000 UTC. Cualquier otro formato pasa por el parser ISO 8601
    genérico; si no trae zona horaria se asume UTC.

    Args:
        value: Fecha recibida en el request

    Returns:
        datetime con tzinfo UTC

    Raises:
        BusinessValidationError: Si el string no es una fecha válida
    """
    if value is None:
        raise BusinessValidationError("Fecha requerida")

    raw = value.strip()
    match = _CALENDAR_DATE_RE.match(raw)
    try:
        if match:
            year, month, day = (int(part) for part in match.groups())
            return datetime.datetime(year, month, day, tzinfo=UTC)
        return ensure_utc(datetime.datetime.fromisoformat(raw))
    except ValueError:
        raise BusinessValidationError(f"Fecha inválida: '{value}'")


def start_of_day(value: datetime.datetime) -> datetime.datetime:
    """Medianoche UTC del día calendario (UTC) de value."""
    value = ensure_utc(value)
    return datetime.datetime(value.year, value.month, value.day, tzinfo=UTC)


def end_of_day(value: datetime.datetime) -> datetime.datetime:
    """23:59:59.999 UTC del día calendario (UTC) de value."""
    return datetime.datetime.combine(
        start_of_day(value).date(), _END_OF_DAY, tzinfo=UTC
    )


def day_range(value: str) -> tuple[datetime.datetime, datetime.datetime]:
    """
    Rango [00:00:00.000, 23:59:59.999] UTC de un único día.

    Args:
        value: Fecha del día (preferentemente YYYY-MM-DD)
    """
    day = parse_date_utc(value)
    return start_of_day(day), end_of_day(day)


def month_range(month: int, year: int) -> tuple[datetime.datetime, datetime.datetime]:
    """
    Rango de un mes completo en UTC.

    Desde el primer día a las 00:00:00.000 hasta el último día a las
    23:59:59.999. El último día es el "día 0" del mes siguiente, es decir
    el primero del mes siguiente menos un día.

    Raises:
        BusinessValidationError: Si mes o año están fuera de rango
    """
    if not 1 <= month <= 12:
        raise BusinessValidationError(f"Mes inválido: {month}")
    if not 1 <= year <= 9998:
        raise BusinessValidationError(f"Año inválido: {year}")

    start = datetime.datetime(year, month, 1, tzinfo=UTC)
    if month == 12:
        next_month = datetime.datetime(year + 1, 1, 1, tzinfo=UTC)
    else:
        next_month = datetime.datetime(year, month + 1, 1, tzinfo=UTC)
    last_day = next_month - datetime.timedelta(days=1)
    return start, end_of_day(last_day)


def open_range(
    date_from: Optional[str],
    date_to: Optional[str],
    now: Optional[datetime.datetime] = None,
) -> tuple[datetime.datetime, datetime.datetime]:
    """
    Rango inclusivo con extremos opcionales.

    Sin "desde" el inicio es la época Unix; sin "hasta" el fin es el instante
    actual. El fin se lleva siempre a las 23:59:59.999 UTC de su día.

    Args:
        date_from: Fecha inicial o None
        date_to: Fecha final o None
        now: Instante actual (inyectable para los tests)
    """
    start = parse_date_utc(date_from) if date_from else EPOCH
    end_base = parse_date_utc(date_to) if date_to else ensure_utc(
        now or datetime.datetime.now(UTC)
    )
    return start, end_of_day(end_base)
