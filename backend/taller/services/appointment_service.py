"""
Service Layer para los Turnos
Proyecto: Taller Manager (Gestión de Taller)

Define la lógica de negocio de los turnos: filtros del listado,
alta, actualización con control de transiciones de estado y baja.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.dates import day_range, month_range
from taller.core.exceptions import BusinessValidationError, NotFoundError
from taller.models import Appointment, Client, Vehicle
from taller.schemas.appointment import (
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
    is_transition_allowed,
)

# Logger de este módulo
logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Filtro del listado
# -------------------------------------------------------------------

@dataclass(frozen=True)
class AppointmentFilter:
    """
    Filtro del listado de turnos.

    Los modos son excluyentes: un día exacto, un mes completo
    (month + year) o ningún filtro.
    """

    day: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None

    @classmethod
    def from_query(
        cls,
        date: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> "AppointmentFilter":
        """
        Construye el filtro desde los parámetros del request.

        date tiene prioridad; month y year se usan solo si vienen los dos.

        Raises:
            BusinessValidationError: Si la fecha o el mes son inválidos
        """
        if date:
            result = cls(day=date)
        elif month is not None and year is not None:
            result = cls(month=month, year=year)
        else:
            result = cls()

        # Valida ahora para responder 400 antes de consultar
        result.bounds()
        return result

    def bounds(self):
        """Rango UTC [inicio, fin] del filtro, o None si no filtra."""
        if self.day:
            return day_range(self.day)
        if self.month is not None and self.year is not None:
            return month_range(self.month, self.year)
        return None

    def conditions(self) -> list[Any]:
        """Cláusulas WHERE del filtro."""
        bounds = self.bounds()
        if bounds is None:
            return []
        start, end = bounds
        return [Appointment.date >= start, Appointment.date <= end]


class AppointmentService:
    """
    Service para los turnos.

    Los cambios de estado pasan por la tabla de transiciones permitidas;
    un cambio no permitido se rechaza con BusinessValidationError.
    """

    async def get_all(
        self,
        db: AsyncSession,
        appointment_filter: Optional[AppointmentFilter] = None,
    ) -> list[Appointment]:
        """
        Recupera los turnos ordenados por fecha y hora de inicio.

        Args:
            db: Sesión de base de datos
            appointment_filter: Día, mes o ninguno

        Returns:
            Lista de turnos con cliente, vehículo y trabajos
        """
        appointment_filter = appointment_filter or AppointmentFilter()

        result = await db.execute(
            select(Appointment)
            .where(*appointment_filter.conditions())
            .order_by(Appointment.date.asc(), Appointment.start_time.asc())
        )
        appointments = list(result.scalars().all())

        logger.debug("Recuperados %s turnos (%s)", len(appointments), appointment_filter)
        return appointments

    async def get_by_id(
        self,
        db: AsyncSession,
        appointment_id: uuid.UUID,
    ) -> Appointment:
        """
        Recupera un turno por ID con cliente, vehículo y trabajos.

        Raises:
            NotFoundError: Si el turno no existe
        """
        result = await db.execute(
            select(Appointment)
            .where(Appointment.id == appointment_id)
            .execution_options(populate_existing=True)
        )
        appointment = result.scalar_one_or_none()

        if appointment is None:
            logger.warning("Turno no encontrado: %s", appointment_id)
            raise NotFoundError(f"Turno con ID {appointment_id} no encontrado")

        return appointment

    async def _check_client_vehicle(
        self,
        db: AsyncSession,
        client_id: uuid.UUID,
        vehicle_id: uuid.UUID,
    ) -> None:
        """
        Verifica que cliente y vehículo existan y que el vehículo sea del cliente.

        Raises:
            NotFoundError: Si el cliente o el vehículo no existen
            BusinessValidationError: Si el vehículo es de otro cliente
        """
        client_result = await db.execute(select(Client.id).where(Client.id == client_id))
        if client_result.scalar_one_or_none() is None:
            logger.warning("Cliente no encontrado para el turno: %s", client_id)
            raise NotFoundError("Cliente no encontrado")

        vehicle_result = await db.execute(
            select(Vehicle.client_id).where(Vehicle.id == vehicle_id)
        )
        owner_id = vehicle_result.scalar_one_or_none()
        if owner_id is None:
            logger.warning("Vehículo no encontrado para el turno: %s", vehicle_id)
            raise NotFoundError("Vehículo no encontrado")

        if owner_id != client_id:
            logger.warning(
                "El vehículo %s no pertenece al cliente %s", vehicle_id, client_id
            )
            raise BusinessValidationError(
                "El vehículo no pertenece al cliente seleccionado"
            )

    async def create(
        self,
        db: AsyncSession,
        appointment_data: AppointmentCreate,
    ) -> Appointment:
        """
        Crea un turno. El estado inicial es siempre PENDING.

        Args:
            db: Sesión de base de datos
            appointment_data: Datos del turno

        Returns:
            Turno creado con cliente y vehículo

        Raises:
            NotFoundError: Si el cliente o el vehículo no existen
            BusinessValidationError: Si el vehículo es de otro cliente
        """
        await self._check_client_vehicle(
            db, appointment_data.client_id, appointment_data.vehicle_id
        )

        appointment = Appointment(
            **appointment_data.model_dump(),
            status=AppointmentStatus.PENDING.value,
        )
        db.add(appointment)
        await db.flush()

        logger.info(
            "Creado nuevo turno: %s - %s %s",
            appointment.id,
            appointment.date.date(),
            appointment.start_time,
        )
        return await self.get_by_id(db, appointment.id)

    async def update(
        self,
        db: AsyncSession,
        appointment_id: uuid.UUID,
        appointment_data: AppointmentUpdate,
    ) -> Appointment:
        """
        Actualiza un turno. Solo se tocan los campos enviados.

        Repetir el estado actual no es un error; cualquier otro cambio
        de estado debe estar en ALLOWED_TRANSITIONS.

        Raises:
            NotFoundError: Si el turno, el cliente o el vehículo no existen
            BusinessValidationError: Si la transición de estado no está
                permitida o el vehículo es de otro cliente
        """
        appointment = await self.get_by_id(db, appointment_id)
        update_data = appointment_data.model_dump(exclude_unset=True)

        if "status" in update_data:
            current = AppointmentStatus(appointment.status)
            new = AppointmentStatus(update_data["status"])
            if not is_transition_allowed(current, new):
                logger.warning(
                    "Transición rechazada para el turno %s: %s → %s",
                    appointment_id,
                    current.value,
                    new.value,
                )
                raise BusinessValidationError(
                    f"Transición de estado no permitida: {current.value} → {new.value}",
                    extra={"current": current.value, "requested": new.value},
                )
            update_data["status"] = new.value

        if "client_id" in update_data or "vehicle_id" in update_data:
            await self._check_client_vehicle(
                db,
                update_data.get("client_id", appointment.client_id),
                update_data.get("vehicle_id", appointment.vehicle_id),
            )

        for field, value in update_data.items():
            setattr(appointment, field, value)

        await db.flush()

        logger.info("Actualizado turno: %s", appointment.id)
        return await self.get_by_id(db, appointment.id)

    async def delete(
        self,
        db: AsyncSession,
        appointment_id: uuid.UUID,
    ) -> None:
        """
        Elimina un turno; la base elimina en cascada sus trabajos.

        Raises:
            NotFoundError: Si el turno no existe
        """
        await self.get_by_id(db, appointment_id)

        await db.execute(delete(Appointment).where(Appointment.id == appointment_id))
        await db.flush()

        logger.info("Eliminado turno: %s", appointment_id)


# Instancia global del service
appointment_service = AppointmentService()
