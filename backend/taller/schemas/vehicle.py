"""
Schemas Pydantic para la entidad Vehicle
Proyecto: Taller Manager (Gestión de Taller)

Define los schemas de validación y serialización de la API.
"""

import datetime
import uuid
from typing import Optional

from pydantic import Field, field_validator

from taller.schemas.common import (
    CamelModel,
    ClientSummary,
    ReadModel,
    UtcDatetime,
    reject_null,
)


# -------------------------------------------------------------------
# Funciones de normalización y validación
# -------------------------------------------------------------------

def normalize_plate(plate: Optional[str]) -> Optional[str]:
    """
    Normaliza la patente: sin espacios en los extremos y en mayúsculas.

    Se aplica antes de guardar y antes del control de unicidad, así
    "abc123" y "ABC123" son la misma patente.

    Raises:
        ValueError: Si la patente queda vacía
    """
    if plate is None:
        return None
    normalized = plate.strip().upper()
    if not normalized:
        raise ValueError("La patente no puede estar vacía")
    return normalized


def validate_year(year: Optional[int]) -> Optional[int]:
    """
    El año debe estar entre 1900 y el año actual + 1.
    """
    if year is None:
        return None

    max_year = datetime.datetime.now().year + 1
    if year < 1900:
        raise ValueError("El año del vehículo debe ser >= 1900")
    if year > max_year:
        raise ValueError(f"El año del vehículo no puede ser mayor a {max_year}")
    return year


# -------------------------------------------------------------------
# Creación
# -------------------------------------------------------------------
class VehicleCreate(CamelModel):
    """
    Schema para crear un vehículo.

    Patente, marca, modelo y cliente son obligatorios.
    """

    plate: str = Field(..., min_length=1, max_length=20, description="Patente")
    make: str = Field(..., min_length=1, max_length=100, description="Marca")
    model: str = Field(..., min_length=1, max_length=100, description="Modelo")
    client_id: uuid.UUID = Field(..., description="UUID del cliente dueño")
    year: Optional[int] = Field(None, description="Año")
    color: Optional[str] = Field(None, max_length=50, description="Color")

    _normalize_plate = field_validator("plate")(normalize_plate)
    _validate_year = field_validator("year")(validate_year)


# -------------------------------------------------------------------
# Actualización
# -------------------------------------------------------------------
class VehicleUpdate(CamelModel):
    """
    Schema para la actualización parcial de un vehículo.

    Si viene la patente se vuelve a normalizar.
    """

    plate: Optional[str] = Field(None, min_length=1, max_length=20)
    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    client_id: Optional[uuid.UUID] = None
    year: Optional[int] = None
    color: Optional[str] = Field(None, max_length=50)

    _plate_not_null = field_validator("plate")(reject_null("plate"))
    _normalize_plate = field_validator("plate")(normalize_plate)
    _make_not_null = field_validator("make")(reject_null("make"))
    _model_not_null = field_validator("model")(reject_null("model"))
    _client_not_null = field_validator("client_id")(reject_null("clientId"))
    _validate_year = field_validator("year")(validate_year)


# -------------------------------------------------------------------
# Lectura (API Response)
# -------------------------------------------------------------------
class VehicleRead(ReadModel):
    """
    Respuesta de la API para un vehículo, con los datos del dueño.
    """

    id: uuid.UUID
    plate: str
    make: str
    model: str
    year: Optional[int] = None
    color: Optional[str] = None
    client_id: uuid.UUID
    client: Optional[ClientSummary] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
