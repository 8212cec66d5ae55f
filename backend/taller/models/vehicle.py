"""
Modelo SQLAlchemy para la entidad Vehicle
Proyecto: Taller Manager (Gestión de Taller)

Vehículos asociados a los clientes.
"""

from __future__ import annotations
import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taller.models import Base
from taller.models.mixins import TimestampMixin, UUIDMixin

# Import para type hinting de las relaciones (evita circular import)
if TYPE_CHECKING:
    from taller.models.appointment import Appointment
    from taller.models.client import Client


class Vehicle(Base, UUIDMixin, TimestampMixin):
    """
    Modelo de los vehículos de los clientes.

    Un vehículo pertenece a un único cliente y puede tener varios turnos.
    La patente es única y se guarda siempre en mayúsculas.

    Attributes:
        id: UUID primary key
        client_id: UUID del cliente dueño (obligatorio)
        plate: Patente (obligatoria, única, mayúsculas)
        make: Marca (obligatoria)
        model: Modelo (obligatorio)
        year: Año (opcional)
        color: Color (opcional)

    Relationships:
        client: Cliente dueño
        appointments: Turnos del vehículo
    """

    __tablename__ = "vehicles"

    # ------------------------------------------------------------
    # Relación con el cliente
    # ------------------------------------------------------------
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        doc="UUID del cliente dueño",
    )

    # ------------------------------------------------------------
    # Datos del vehículo
    # ------------------------------------------------------------
    plate: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        doc="Patente del vehículo (mayúsculas)",
    )

    make: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Marca",
    )

    model: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Modelo",
    )

    year: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        doc="Año del vehículo",
    )

    color: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        doc="Color",
    )

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    client: Mapped["Client"] = relationship(
        "Client",
        back_populates="vehicles",
        lazy="joined",
        doc="Cliente dueño del vehículo",
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        "Appointment",
        back_populates="vehicle",
        passive_deletes=True,
        lazy="raise",
        doc="Turnos del vehículo",
    )

    __table_args__ = (
        # Búsqueda rápida de "vehículos de un cliente"
        Index("ix_vehicles_client_plate", "client_id", "plate"),
    )

    def __repr__(self) -> str:
        return f"<Vehicle(id={self.id}, plate={self.plate}, make={self.make}, model={self.model})>"
