"""
Modelos SQLAlchemy para los Turnos
Proyecto: Taller Manager (Gestión de Taller)

Contiene:
- Appointment: Turno de servicio para un par cliente/vehículo
- Job: Trabajo cobrado dentro de un turno
"""


from __future__ import annotations
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taller.models import Base
from taller.models.mixins import TimestampMixin, UUIDMixin

# Import para type hinting de las relaciones (evita circular import)
if TYPE_CHECKING:
    from taller.models.client import Client
    from taller.models.vehicle import Vehicle


# Los estados y la tabla de transiciones están en taller.schemas.appointment


class Appointment(Base, UUIDMixin, TimestampMixin):
    """
    Modelo de los turnos del taller.

    Attributes:
        id: UUID primary key
        client_id: UUID del cliente
        vehicle_id: UUID del vehículo
        date: Día del turno, guardado como medianoche UTC
        start_time: Hora de inicio "HH:MM"
        end_time: Hora de fin "HH:MM" (opcional)
        description: Descripción del servicio
        status: PENDING, IN_PROGRESS, COMPLETED o CANCELLED

    Relationships:
        client: Cliente
        vehicle: Vehículo
        jobs: Trabajos cobrados

    States:
        PENDING → IN_PROGRESS → COMPLETED
           ↓           ↓
        CANCELLED   CANCELLED
    """

    __tablename__ = "appointments"

    # ------------------------------------------------------------
    # Relaciones
    # ------------------------------------------------------------
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="UUID del cliente",
    )

    # Sin ondelete: el service impide borrar un vehículo con turnos
    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("vehicles.id"),
        nullable=False,
        index=True,
        doc="UUID del vehículo",
    )

    # ------------------------------------------------------------
    # Datos del turno
    # ------------------------------------------------------------
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        doc="Día del turno (medianoche UTC)",
    )

    start_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        doc="Hora de inicio HH:MM",
    )

    end_time: Mapped[Optional[str]] = mapped_column(
        String(5),
        nullable=True,
        doc="Hora de fin HH:MM",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Descripción del servicio",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="PENDING",
        doc="Estado del turno",
    )

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    client: Mapped["Client"] = relationship(
        "Client",
        back_populates="appointments",
        lazy="joined",
        doc="Cliente del turno",
    )

    vehicle: Mapped["Vehicle"] = relationship(
        "Vehicle",
        back_populates="appointments",
        lazy="joined",
        doc="Vehículo del turno",
    )

    jobs: Mapped[List["Job"]] = relationship(
        "Job",
        back_populates="appointment",
        order_by="Job.created_at",
        passive_deletes=True,
        lazy="selectin",
        doc="Trabajos cobrados en el turno",
    )

    # ------------------------------------------------------------
    # Índices y vínculos
    # ------------------------------------------------------------
    __table_args__ = (
        Index("ix_appointments_date_start", "date", "start_time"),
        Index("ix_appointments_status_date", "status", "date"),
        CheckConstraint(
            "status IN ('PENDING', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED')",
            name="ck_appointments_status",
        ),
    )

    @property
    def total(self) -> Decimal:
        """Suma de los precios de los trabajos."""
        return sum((job.price for job in self.jobs), Decimal("0"))

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, date={self.date}, status={self.status})>"


class Job(Base, UUIDMixin, TimestampMixin):
    """
    Modelo de los trabajos de un turno.

    Attributes:
        id: UUID primary key
        appointment_id: UUID del turno padre
        description: Descripción del trabajo
        price: Precio (>= 0)
    """

    __tablename__ = "jobs"

    appointment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("appointments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="UUID del turno padre",
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        doc="Descripción del trabajo",
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        doc="Precio del trabajo",
    )

    appointment: Mapped["Appointment"] = relationship(
        "Appointment",
        back_populates="jobs",
        doc="Turno padre",
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_jobs_price"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, description={self.description[:30]!r}, price={self.price})>"
