"""
Service para las Estadísticas del tablero
Proyecto: Taller Manager (Gestión de Taller)
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taller.core.dates import month_range
from taller.models import Appointment, Client
from taller.schemas.appointment import AppointmentStatus

# Logger de este módulo
logger = logging.getLogger(__name__)


class StatsService:
    """
    Contadores del tablero.

    Las cuatro consultas son independientes y se lanzan en paralelo,
    cada una con su propia sesión.
    """

    def _status_count(
        self,
        status: AppointmentStatus,
        month: Optional[int],
        year: Optional[int],
    ) -> Select:
        query = select(func.count(Appointment.id)).where(Appointment.status == status.value)
        if month is not None and year is not None:
            start, end = month_range(month, year)
            query = query.where(Appointment.date >= start, Appointment.date <= end)
        return query

    async def _count(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        query: Select,
    ) -> int:
        async with session_factory() as session:
            result = await session.execute(query)
            return result.scalar() or 0

    async def get_stats(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> dict[str, int]:
        """
        Cuenta los turnos por estado y el total de clientes.

        Con month y year se cuentan solo los turnos de ese mes; si falta
        alguno de los dos se cuenta todo. El total de clientes nunca
        se filtra por fecha.

        Args:
            session_factory: Factory de sesiones (una sesión por consulta)
            month: Mes 1-12 (opcional)
            year: Año (opcional)

        Returns:
            dict con pending, in_progress, completed y total_clients

        Raises:
            BusinessValidationError: Si el mes o el año son inválidos
        """
        queries = [
            self._status_count(AppointmentStatus.PENDING, month, year),
            self._status_count(AppointmentStatus.IN_PROGRESS, month, year),
            self._status_count(AppointmentStatus.COMPLETED, month, year),
            select(func.count(Client.id)),
        ]

        pending, in_progress, completed, total_clients = await asyncio.gather(
            *(self._count(session_factory, query) for query in queries)
        )

        logger.debug(
            "Estadísticas %s/%s: %s pendientes, %s en progreso, %s completados, %s clientes",
            month,
            year,
            pending,
            in_progress,
            completed,
            total_clients,
        )
        return {
            "pending": pending,
            "in_progress": in_progress,
            "completed": completed,
            "total_clients": total_clients,
        }


# Instancia global del service
stats_service = StatsService()
