"""
Schemas Pydantic comunes
Proyecto: Taller Manager (Gestión de Taller)

Base de configuración compartida (JSON en camelCase), tipos anotados
y resúmenes de cliente/vehículo que se anidan en otras respuestas.
"""

import datetime
import uuid
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from taller.core.dates import ensure_utc


# -------------------------------------------------------------------
# Tipos anotados
# -------------------------------------------------------------------

# Datetime siempre en UTC (SQLite devuelve valores naive)
UtcDatetime = Annotated[datetime.datetime, AfterValidator(ensure_utc)]

# Importe: Decimal en Python, número en el JSON
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


# -------------------------------------------------------------------
# Modelos base
# -------------------------------------------------------------------

class CamelModel(BaseModel):
    """
    Base de los schemas de entrada.

    El JSON usa camelCase (startTime, clientId); también se aceptan
    los nombres snake_case de Python.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ReadModel(CamelModel):
    """
    Base de los schemas de respuesta, construidos desde objetos ORM.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def reject_null(field_name: str):
    """
    Validador para updates parciales: el campo puede omitirse pero no
    mandarse en null, porque la columna es obligatoria.
    """

    def _check(value):
        if value is None:
            raise ValueError(f"{field_name} no puede ser null")
        return value

    return _check


# -------------------------------------------------------------------
# Resúmenes anidados
# -------------------------------------------------------------------

class ClientSummary(ReadModel):
    """Datos mínimos del cliente anidados en vehículos y turnos."""

    id: uuid.UUID
    name: str
    phone: str


class VehicleSummary(ReadModel):
    """Datos mínimos del vehículo anidados en clientes y turnos."""

    id: uuid.UUID
    plate: str
    make: str
    model: str
    year: Optional[int] = None
    color: Optional[str] = None


class SuccessResponse(BaseModel):
    """Respuesta de las eliminaciones."""

    success: bool = Field(default=True)
