"""
Service Layer para la entidad Vehicle
Proyecto: Taller Manager (Gestión de Taller)

Define la lógica de negocio para la gestión de vehículos.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.exceptions import ConflictError, DuplicateError, NotFoundError
from taller.models import Appointment, Client, Vehicle
from taller.schemas.vehicle import VehicleCreate, VehicleUpdate

# Logger de este módulo
logger = logging.getLogger(__name__)

DUPLICATE_PLATE_MESSAGE = "Ya existe un vehículo con esa patente"

# SQLSTATE de PostgreSQL para unique_violation
_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """
    True si el IntegrityError es una violación de unicidad.

    Usa el código que informa el motor: SQLSTATE 23505 en PostgreSQL
    (asyncpg lo expone como sqlstate, psycopg como pgcode) y
    SQLITE_CONSTRAINT_UNIQUE en SQLite.
    """
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    return "unique" in str(orig).lower()


class VehicleService:
    """
    Service para las operaciones CRUD sobre los vehículos.

    La patente llega normalizada (mayúsculas) desde los schemas, así
    el control de unicidad no distingue mayúsculas de minúsculas.
    """

    async def get_all(
        self,
        db: AsyncSession,
        client_id: Optional[uuid.UUID] = None,
    ) -> list[Vehicle]:
        """
        Recupera los vehículos ordenados por patente.

        Args:
            db: Sesión de base de datos
            client_id: UUID del cliente para filtrar (opcional)

        Returns:
            Lista de vehículos, cada uno con su dueño
        """
        query = select(Vehicle)
        if client_id is not None:
            query = query.where(Vehicle.client_id == client_id)
        query = query.order_by(Vehicle.plate.asc())

        result = await db.execute(query)
        vehicles = list(result.scalars().all())

        logger.debug("Recuperados %s vehículos", len(vehicles))
        return vehicles

    async def get_by_id(
        self,
        db: AsyncSession,
        vehicle_id: uuid.UUID,
    ) -> Vehicle:
        """
        Recupera un vehículo por ID, con su dueño.

        Raises:
            NotFoundError: Si el vehículo no existe
        """
        result = await db.execute(
            select(Vehicle)
            .where(Vehicle.id == vehicle_id)
            .execution_options(populate_existing=True)
        )
        vehicle = result.scalar_one_or_none()

        if vehicle is None:
            logger.warning("Vehículo no encontrado: %s", vehicle_id)
            raise NotFoundError(f"Vehículo con ID {vehicle_id} no encontrado")

        return vehicle

    async def _ensure_client_exists(self, db: AsyncSession, client_id: uuid.UUID) -> None:
        result = await db.execute(select(Client.id).where(Client.id == client_id))
        if result.scalar_one_or_none() is None:
            logger.warning("Cliente no encontrado para el vehículo: %s", client_id)
            raise NotFoundError("Cliente no encontrado")

    async def _ensure_plate_available(
        self,
        db: AsyncSession,
        plate: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        query = select(Vehicle.id).where(Vehicle.plate == plate)
        if exclude_id is not None:
            query = query.where(Vehicle.id != exclude_id)

        result = await db.execute(query)
        if result.first() is not None:
            logger.warning("Patente duplicada: %s", plate)
            raise DuplicateError(DUPLICATE_PLATE_MESSAGE)

    async def _count_appointments(self, db: AsyncSession, vehicle_id: uuid.UUID) -> int:
        result = await db.execute(
            select(func.count(Appointment.id)).where(Appointment.vehicle_id == vehicle_id)
        )
        return result.scalar() or 0

    async def _flush_or_duplicate(self, db: AsyncSession, action: str) -> None:
        """Hace flush y traduce la violación de unicidad de la patente."""
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            if is_unique_violation(e):
                logger.warning("Error %s vehículo - patente duplicada: %s", action, e.orig)
                raise DuplicateError(DUPLICATE_PLATE_MESSAGE)

            logger.error("Error %s vehículo - error DB: %s", action, e.orig)
            raise

    async def create(
        self,
        db: AsyncSession,
        vehicle_data: VehicleCreate,
    ) -> Vehicle:
        """
        Crea un nuevo vehículo.

        Verifica que el cliente exista y que la patente esté libre.

        Args:
            db: Sesión de base de datos
            vehicle_data: Datos del vehículo

        Returns:
            Vehículo recién creado, con su dueño

        Raises:
            NotFoundError: Si el cliente no existe
            DuplicateError: Si la patente ya está registrada
        """
        await self._ensure_client_exists(db, vehicle_data.client_id)
        await self._ensure_plate_available(db, vehicle_data.plate)

        vehicle = Vehicle(**vehicle_data.model_dump())
        db.add(vehicle)
        await self._flush_or_duplicate(db, "creación")

        logger.info("Creado nuevo vehículo: %s - %s", vehicle.id, vehicle.plate)
        return await self.get_by_id(db, vehicle.id)

    async def update(
        self,
        db: AsyncSession,
        vehicle_id: uuid.UUID,
        vehicle_data: VehicleUpdate,
    ) -> Vehicle:
        """
        Actualiza un vehículo existente.

        Args:
            db: Sesión de base de datos
            vehicle_id: UUID del vehículo
            vehicle_data: Datos parciales del vehículo

        Returns:
            Vehículo actualizado

        Raises:
            NotFoundError: Si el vehículo o el nuevo cliente no existen
            DuplicateError: Si la nueva patente ya está registrada
            ConflictError: Si cambia el dueño de un vehículo con turnos
        """
        vehicle = await self.get_by_id(db, vehicle_id)

        update_data = vehicle_data.model_dump(exclude_unset=True)
        new_client_id = update_data.get("client_id")
        if new_client_id is not None and new_client_id != vehicle.client_id:
            await self._ensure_client_exists(db, new_client_id)
            # Los turnos del vehículo quedarían apuntando al dueño anterior
            appointment_count = await self._count_appointments(db, vehicle.id)
            if appointment_count > 0:
                logger.warning(
                    "Intento de cambiar el dueño del vehículo %s con %s turnos",
                    vehicle.id,
                    appointment_count,
                )
                raise ConflictError(
                    f"No se puede cambiar el dueño del vehículo: tiene {appointment_count} "
                    "turnos asociados."
                )
        if "plate" in update_data and update_data["plate"] != vehicle.plate:
            await self._ensure_plate_available(db, update_data["plate"], exclude_id=vehicle.id)

        for field, value in update_data.items():
            setattr(vehicle, field, value)

        await self._flush_or_duplicate(db, "actualización")

        logger.info("Actualizado vehículo: %s", vehicle.id)
        return await self.get_by_id(db, vehicle.id)

    async def delete(
        self,
        db: AsyncSession,
        vehicle_id: uuid.UUID,
    ) -> None:
        """
        Elimina un vehículo.

        No se permite si todavía tiene turnos asociados.

        Raises:
            NotFoundError: Si el vehículo no existe
            ConflictError: Si el vehículo tiene turnos
        """
        await self.get_by_id(db, vehicle_id)

        appointment_count = await self._count_appointments(db, vehicle_id)

        if appointment_count > 0:
            logger.warning(
                "Intento de eliminar el vehículo %s con %s turnos",
                vehicle_id,
                appointment_count,
            )
            raise ConflictError(
                f"No se puede eliminar el vehículo: tiene {appointment_count} turnos asociados. "
                "Elimine los turnos antes de eliminar el vehículo."
            )

        await db.execute(delete(Vehicle).where(Vehicle.id == vehicle_id))
        await db.flush()

        logger.info("Eliminado vehículo: %s", vehicle_id)


# Instancia global del service
vehicle_service = VehicleService()
