"""
Schemas Pydantic del proyecto Taller Manager

Este módulo contiene todos los schemas Pydantic usados para la validación
y serialización de las respuestas de la API.
"""

# Import de los schemas para tenerlos disponibles con import directo
# ej: from taller.schemas import VehicleRead, ClientRead

from taller.schemas.common import (
    CamelModel,
    ClientSummary,
    ReadModel,
    SuccessResponse,
    VehicleSummary,
)
from taller.schemas.client import ClientCreate, ClientRead, ClientUpdate
from taller.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from taller.schemas.appointment import (
    ALLOWED_TRANSITIONS,
    AppointmentCreate,
    AppointmentRead,
    AppointmentStatus,
    AppointmentUpdate,
    JobCreate,
    JobRead,
)
from taller.schemas.part import PartCreate, PartRead, PartUpdate
from taller.schemas.report import GroupBy, ReportGroup, StatsRead

__all__ = [
    # Common
    "CamelModel",
    "ReadModel",
    "ClientSummary",
    "VehicleSummary",
    "SuccessResponse",
    # Client
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
    # Vehicle
    "VehicleCreate",
    "VehicleRead",
    "VehicleUpdate",
    # Appointment
    "ALLOWED_TRANSITIONS",
    "AppointmentStatus",
    "AppointmentCreate",
    "AppointmentRead",
    "AppointmentUpdate",
    "JobCreate",
    "JobRead",
    # Part
    "PartCreate",
    "PartRead",
    "PartUpdate",
    # Report
    "GroupBy",
    "ReportGroup",
    "StatsRead",
]
