"""
Schemas Pydantic para la entidad Client
Proyecto: Taller Manager (Gestión de Taller)

Define los schemas de validación y serialización de la API.
"""

import uuid
from typing import Optional

from pydantic import Field, field_validator

from taller.schemas.common import (
    CamelModel,
    ReadModel,
    UtcDatetime,
    VehicleSummary,
    reject_null,
)


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Pasa el email a minúsculas; un string vacío equivale a "sin email".
    """
    if email is None:
        return None
    email = email.strip().lower()
    if not email:
        return None
    if "@" not in email:
        raise ValueError("Email inválido")
    return email


# -------------------------------------------------------------------
# Creación
# -------------------------------------------------------------------
class ClientCreate(CamelModel):
    """
    Schema para crear un cliente. Nombre y teléfono son obligatorios.
    """

    name: str = Field(..., min_length=1, max_length=150, description="Nombre")
    phone: str = Field(..., min_length=1, max_length=30, description="Teléfono")
    email: Optional[str] = Field(None, max_length=255, description="Email")
    address: Optional[str] = Field(None, description="Dirección")

    _normalize_email = field_validator("email")(normalize_email)


# -------------------------------------------------------------------
# Actualización
# -------------------------------------------------------------------
class ClientUpdate(CamelModel):
    """
    Schema para la actualización parcial de un cliente.

    Los campos omitidos no se tocan.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None

    _name_not_null = field_validator("name")(reject_null("name"))
    _phone_not_null = field_validator("phone")(reject_null("phone"))
    _normalize_email = field_validator("email")(normalize_email)


# -------------------------------------------------------------------
# Lectura (API Response)
# -------------------------------------------------------------------
class ClientRead(ReadModel):
    """
    Respuesta de la API para un cliente.

    Incluye los vehículos y, en el listado, la cantidad de turnos.
    """

    id: uuid.UUID
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    vehicles: list[VehicleSummary] = Field(default_factory=list)
    appointment_count: int = Field(default=0, ge=0, description="Cantidad de turnos")
    created_at: UtcDatetime
    updated_at: UtcDatetime
