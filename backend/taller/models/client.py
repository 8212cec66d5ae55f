"""
Modelo SQLAlchemy para la entidad Client
Proyecto: Taller Manager (Gestión de Taller)

Ficha de los clientes del taller.
"""


from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taller.models import Base
from taller.models.mixins import TimestampMixin, UUIDMixin

# Import para type hinting de las relaciones (evita circular import)
if TYPE_CHECKING:
    from taller.models.appointment import Appointment
    from taller.models.vehicle import Vehicle


class Client(Base, UUIDMixin, TimestampMixin):
    """
    Modelo de la ficha de clientes.

    Un cliente puede tener varios vehículos y varios turnos.
    Al eliminarlo, la base elimina en cascada sus vehículos y sus turnos
    (ON DELETE CASCADE en vehicles.client_id y appointments.client_id).

    Attributes:
        id: UUID primary key
        name: Nombre (obligatorio)
        phone: Teléfono (obligatorio)
        email: Email (opcional)
        address: Dirección (opcional)

    Relationships:
        vehicles: Vehículos del cliente, ordenados por patente
        appointments: Turnos del cliente
    """

    __tablename__ = "clients"

    # ------------------------------------------------------------
    # Datos
    # ------------------------------------------------------------
    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        doc="Nombre del cliente",
    )

    phone: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        doc="Teléfono de contacto",
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Email de contacto",
    )

    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Dirección",
    )

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    vehicles: Mapped[List["Vehicle"]] = relationship(
        "Vehicle",
        back_populates="client",
        order_by="Vehicle.plate",
        passive_deletes=True,
        lazy="selectin",
        doc="Vehículos del cliente",
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        "Appointment",
        back_populates="client",
        passive_deletes=True,
        lazy="raise",
        doc="Turnos del cliente",
    )

    __table_args__ = (
        Index("ix_clients_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name={self.name!r}, phone={self.phone!r})>"
