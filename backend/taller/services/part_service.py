"""
Service Layer para el Inventario de Repuestos
Proyecto: Taller Manager (Gestión de Taller)

Define la lógica de negocio para la gestión de repuestos.
"""

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.exceptions import NotFoundError
from taller.models import Part
from taller.schemas.part import PartCreate, PartUpdate

# Logger de este módulo
logger = logging.getLogger(__name__)


class PartService:
    """
    Service para el inventario de repuestos.

    El estado de stock bajo no se guarda: lo calcula Part.low_stock
    en cada lectura.
    """

    async def get_all(self, db: AsyncSession) -> list[Part]:
        """
        Recupera todos los repuestos ordenados por nombre.
        """
        result = await db.execute(select(Part).order_by(Part.name.asc()))
        parts = list(result.scalars().all())

        logger.debug("Recuperados %s repuestos", len(parts))
        return parts

    async def get_low_stock(self, db: AsyncSession) -> list[Part]:
        """
        Recupera los repuestos con stock bajo (quantity <= minimum_stock).

        Ordenados por faltante descendente: primero los más urgentes.
        """
        result = await db.execute(
            select(Part)
            .where(Part.low_stock)
            .order_by((Part.minimum_stock - Part.quantity).desc(), Part.name.asc())
        )
        parts = list(result.scalars().all())

        logger.debug("Repuestos con stock bajo: %s", len(parts))
        return parts

    async def get_by_id(
        self,
        db: AsyncSession,
        part_id: uuid.UUID,
    ) -> Part:
        """
        Recupera un repuesto por ID.

        Raises:
            NotFoundError: Si el repuesto no existe
        """
        result = await db.execute(select(Part).where(Part.id == part_id))
        part = result.scalar_one_or_none()

        if part is None:
            logger.warning("Repuesto no encontrado: %s", part_id)
            raise NotFoundError(f"Repuesto con ID {part_id} no encontrado")

        return part

    async def create(
        self,
        db: AsyncSession,
        part_data: PartCreate,
    ) -> Part:
        """
        Crea un repuesto.

        Args:
            db: Sesión de base de datos
            part_data: Datos del repuesto (solo el nombre es obligatorio)

        Returns:
            Repuesto creado
        """
        part = Part(**part_data.model_dump())
        db.add(part)
        await db.flush()

        logger.info("Creado nuevo repuesto: %s - %s", part.id, part.name)
        return part

    async def update(
        self,
        db: AsyncSession,
        part_id: uuid.UUID,
        part_data: PartUpdate,
    ) -> Part:
        """
        Actualiza un repuesto. Solo se tocan los campos enviados.

        Raises:
            NotFoundError: Si el repuesto no existe
        """
        part = await self.get_by_id(db, part_id)

        update_data = part_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(part, field, value)

        await db.flush()

        if part.low_stock:
            logger.warning(
                "Repuesto %s con stock bajo: %s (mínimo %s)",
                part.name,
                part.quantity,
                part.minimum_stock,
            )
        logger.info("Actualizado repuesto: %s", part.id)
        return part

    async def delete(
        self,
        db: AsyncSession,
        part_id: uuid.UUID,
    ) -> None:
        """
        Elimina un repuesto.

        Raises:
            NotFoundError: Si el repuesto no existe
        """
        await self.get_by_id(db, part_id)

        await db.execute(delete(Part).where(Part.id == part_id))
        await db.flush()

        logger.info("Eliminado repuesto: %s", part_id)


# Instancia global del service
part_service = PartService()
