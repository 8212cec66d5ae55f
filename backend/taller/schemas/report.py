"""
Schemas Pydantic para Estadísticas y Reportes
Proyecto: Taller Manager (Gestión de Taller)
"""

from decimal import Decimal
from enum import Enum

from pydantic import Field

from taller.schemas.appointment import AppointmentRead
from taller.schemas.common import Money, ReadModel


class StatsRead(ReadModel):
    """
    Contadores del tablero: turnos por estado y total de clientes.
    """

    pending: int = Field(..., ge=0)
    in_progress: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    total_clients: int = Field(..., ge=0)


class GroupBy(str, Enum):
    """Criterio de agrupación del reporte."""
    NONE = "none"
    CLIENT = "client"
    VEHICLE = "vehicle"


class ReportGroup(ReadModel):
    """Un grupo del reporte con sus turnos y el total de trabajos."""

    key: str
    appointments: list[AppointmentRead] = Field(default_factory=list)
    total: Money = Field(default=Decimal("0"))
