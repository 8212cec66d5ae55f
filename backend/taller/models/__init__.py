"""
Modelos de Base de Datos SQLAlchemy
Proyecto: Taller Manager (Gestión de Taller)

Import centralizado de todos los modelos.

Modelos:
- Client: Ficha de clientes
- Vehicle: Vehículos de los clientes
- Appointment: Turnos
- Job: Trabajos cobrados en un turno
- Part: Inventario de repuestos
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Clase base de todos los modelos SQLAlchemy."""
    pass


from taller.models.client import Client
from taller.models.vehicle import Vehicle
from taller.models.appointment import Appointment, Job
from taller.models.part import Part

__all__ = [
    "Base",
    "Client",
    "Vehicle",
    "Appointment",
    "Job",
    "Part",
]
