"""
Schemas Pydantic para los Turnos y sus Trabajos
Proyecto: Taller Manager (Gestión de Taller)

Define los schemas de validación y serialización de la API,
los estados del turno y la tabla de transiciones permitidas.
"""

import re
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from taller.core.dates import parse_date_utc
from taller.schemas.common import (
    CamelModel,
    ClientSummary,
    Money,
    ReadModel,
    UtcDatetime,
    VehicleSummary,
    reject_null,
)


# -------------------------------------------------------------------
# Estados del turno
# -------------------------------------------------------------------

class AppointmentStatus(str, Enum):
    """Estados posibles de un turno."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# La validación de las transiciones la hace appointment_service.py;
# esta tabla es la única fuente de verdad.
ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset(
        {AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.IN_PROGRESS: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.COMPLETED: frozenset(),  # Estado final
    AppointmentStatus.CANCELLED: frozenset(),  # Estado final
}


def is_transition_allowed(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    """
    True si el turno puede pasar de current a new.

    Repetir el estado actual no es una transición: se acepta sin cambios.
    """
    return current == new or new in ALLOWED_TRANSITIONS[current]


# -------------------------------------------------------------------
# Validadores
# -------------------------------------------------------------------

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_time(value: Optional[str]) -> Optional[str]:
    """
    Valida una hora HH:MM de 24 horas (ej. "09:00", "17:30").
    """
    if value is None:
        return None
    if not _TIME_RE.match(value):
        raise ValueError("La hora debe tener formato HH:MM")
    return value


def coerce_date(value):
    """Convierte el string recibido en la medianoche UTC del día."""
    if isinstance(value, str):
        return parse_date_utc(value)
    return value


def round_price(value: Optional[Decimal]) -> Optional[Decimal]:
    """Redondea el precio a centavos."""
    if value is None:
        return None
    return value.quantize(Decimal("0.01"))


# -------------------------------------------------------------------
# Trabajos
# -------------------------------------------------------------------

class JobCreate(CamelModel):
    """
    Schema para cargar un trabajo en un turno.

    El precio no puede ser negativo; admite hasta 8 enteros y 2 decimales
    (columna Numeric(10, 2)).
    """

    description: str = Field(..., min_length=1, max_length=500, description="Descripción")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Precio")

    _round_price = field_validator("price")(round_price)


class JobRead(ReadModel):
    """Respuesta de la API para un trabajo."""

    id: uuid.UUID
    appointment_id: uuid.UUID
    description: str
    price: Money
    created_at: UtcDatetime


# -------------------------------------------------------------------
# Turnos
# -------------------------------------------------------------------

class AppointmentCreate(CamelModel):
    """
    Schema para crear un turno.

    El estado inicial es siempre PENDING y no se acepta en el input.
    """

    date: UtcDatetime = Field(..., description="Día del turno (YYYY-MM-DD)")
    start_time: str = Field(..., description="Hora de inicio HH:MM")
    end_time: Optional[str] = Field(None, description="Hora de fin HH:MM")
    description: str = Field(..., min_length=1, description="Descripción del servicio")
    client_id: uuid.UUID
    vehicle_id: uuid.UUID

    _coerce_date = field_validator("date", mode="before")(coerce_date)
    _validate_start = field_validator("start_time")(validate_time)
    _validate_end = field_validator("end_time")(validate_time)


class AppointmentUpdate(CamelModel):
    """
    Schema para la actualización parcial de un turno.

    Los cambios de estado pasan por la tabla ALLOWED_TRANSITIONS.
    Solo end_time puede mandarse en null (para borrarlo).
    """

    date: Optional[UtcDatetime] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[AppointmentStatus] = None
    client_id: Optional[uuid.UUID] = None
    vehicle_id: Optional[uuid.UUID] = None

    _coerce_date = field_validator("date", mode="before")(coerce_date)
    _validate_start = field_validator("start_time")(validate_time)
    _validate_end = field_validator("end_time")(validate_time)

    _date_not_null = field_validator("date")(reject_null("date"))
    _start_not_null = field_validator("start_time")(reject_null("startTime"))
    _description_not_null = field_validator("description")(reject_null("description"))
    _status_not_null = field_validator("status")(reject_null("status"))
    _client_not_null = field_validator("client_id")(reject_null("clientId"))
    _vehicle_not_null = field_validator("vehicle_id")(reject_null("vehicleId"))


class AppointmentRead(ReadModel):
    """
    Respuesta de la API para un turno, con cliente, vehículo y trabajos.
    """

    id: uuid.UUID
    date: UtcDatetime
    start_time: str
    end_time: Optional[str] = None
    description: str
    status: AppointmentStatus
    client_id: uuid.UUID
    vehicle_id: uuid.UUID
    client: Optional[ClientSummary] = None
    vehicle: Optional[VehicleSummary] = None
    jobs: list[JobRead] = Field(default_factory=list)
    total: Money = Field(default=Decimal("0"), description="Suma de los trabajos")
    created_at: UtcDatetime
    updated_at: UtcDatetime
