"""
Service Layer para la entidad Client
Proyecto: Taller Manager (Gestión de Taller)

Define la lógica de negocio para la gestión de clientes.
"""

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.exceptions import NotFoundError
from taller.models import Appointment, Client
from taller.schemas.client import ClientCreate, ClientUpdate

# Logger de este módulo
logger = logging.getLogger(__name__)


class ClientService:
    """
    Service para las operaciones CRUD sobre los clientes.

    Expone métodos async sin dependencias de FastAPI; el commit
    lo hace el router.
    """

    async def get_all(
        self,
        db: AsyncSession,
    ) -> list[tuple[Client, int]]:
        """
        Recupera todos los clientes ordenados por nombre.

        Cada cliente viene con sus vehículos y la cantidad de turnos,
        calculada con una subconsulta correlacionada.

        Args:
            db: Sesión de base de datos

        Returns:
            Lista de tuplas (cliente, cantidad de turnos)
        """
        appointment_count = (
            select(func.count(Appointment.id))
            .where(Appointment.client_id == Client.id)
            .correlate(Client)
            .scalar_subquery()
        )
        result = await db.execute(
            select(Client, appointment_count.label("appointment_count"))
            .order_by(Client.name.asc())
        )
        rows = [(client, count or 0) for client, count in result.all()]

        logger.debug("Recuperados %s clientes", len(rows))
        return rows

    async def get_by_id(
        self,
        db: AsyncSession,
        client_id: uuid.UUID,
    ) -> Client:
        """
        Recupera un cliente por ID, con sus vehículos.

        Raises:
            NotFoundError: Si el cliente no existe
        """
        result = await db.execute(
            select(Client)
            .where(Client.id == client_id)
            .execution_options(populate_existing=True)
        )
        client = result.scalar_one_or_none()

        if client is None:
            logger.warning("Cliente no encontrado: %s", client_id)
            raise NotFoundError(f"Cliente con ID {client_id} no encontrado")

        return client

    async def count_appointments(
        self,
        db: AsyncSession,
        client_id: uuid.UUID,
    ) -> int:
        """Cantidad de turnos del cliente."""
        result = await db.execute(
            select(func.count(Appointment.id)).where(Appointment.client_id == client_id)
        )
        return result.scalar() or 0

    async def create(
        self,
        db: AsyncSession,
        client_data: ClientCreate,
    ) -> Client:
        """
        Crea un nuevo cliente.

        Args:
            db: Sesión de base de datos
            client_data: Datos del cliente (nombre y teléfono obligatorios)

        Returns:
            Cliente recién creado, con la lista de vehículos vacía
        """
        client = Client(**client_data.model_dump())
        db.add(client)
        await db.flush()

        logger.info("Creado nuevo cliente: %s - %s", client.id, client.name)
        return await self.get_by_id(db, client.id)

    async def update(
        self,
        db: AsyncSession,
        client_id: uuid.UUID,
        client_data: ClientUpdate,
    ) -> Client:
        """
        Actualiza un cliente existente. Solo se tocan los campos enviados.

        Raises:
            NotFoundError: Si el cliente no existe
        """
        client = await self.get_by_id(db, client_id)

        update_data = client_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(client, field, value)

        await db.flush()

        logger.info("Actualizado cliente: %s", client.id)
        return await self.get_by_id(db, client.id)

    async def delete(
        self,
        db: AsyncSession,
        client_id: uuid.UUID,
    ) -> None:
        """
        Elimina un cliente.

        La base elimina en cascada sus vehículos, sus turnos y los
        trabajos de esos turnos.

        Raises:
            NotFoundError: Si el cliente no existe
        """
        await self.get_by_id(db, client_id)

        await db.execute(delete(Client).where(Client.id == client_id))
        await db.flush()

        logger.info("Eliminado cliente: %s", client_id)


# Instancia global del service
client_service = ClientService()
