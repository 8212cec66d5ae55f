"""
Service para el Historial de turnos (Reportes)
Proyecto: Taller Manager (Gestión de Taller)

Búsqueda de turnos por cliente, patente y rango de fechas.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.dates import open_range
from taller.models import Appointment, Client, Vehicle

# Logger de este módulo
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportFilter:
    """
    Filtros del reporte. Cada filtro es opcional y se combinan con AND.

    Attributes:
        client: Texto contenido en el nombre o el teléfono del cliente
        plate: Texto contenido en la patente
        date_from: Fecha inicial (inclusive)
        date_to: Fecha final (inclusive, hasta las 23:59:59.999 UTC)
    """

    client: Optional[str] = None
    plate: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    def __post_init__(self) -> None:
        # Un parámetro vacío equivale a no filtrar
        for name in ("client", "plate", "date_from", "date_to"):
            value = getattr(self, name)
            if value is not None:
                value = value.strip() or None
            object.__setattr__(self, name, value)

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None or self.date_to is not None

    def date_bounds(
        self,
        now: Optional[datetime.datetime] = None,
    ) -> Optional[tuple[datetime.datetime, datetime.datetime]]:
        """
        Rango de fechas del filtro, o None si no se indicó ninguna.

        Raises:
            BusinessValidationError: Si alguna fecha es inválida
        """
        if not self.has_date_range:
            return None
        return open_range(self.date_from, self.date_to, now=now)

    def conditions(self, now: Optional[datetime.datetime] = None) -> list[Any]:
        """Cláusulas WHERE, una por cada filtro presente."""
        clauses: list[Any] = []

        if self.client is not None:
            clauses.append(
                Appointment.client.has(
                    or_(
                        Client.name.icontains(self.client, autoescape=True),
                        Client.phone.icontains(self.client, autoescape=True),
                    )
                )
            )

        if self.plate is not None:
            clauses.append(
                Appointment.vehicle.has(
                    Vehicle.plate.contains(self.plate.upper(), autoescape=True)
                )
            )

        bounds = self.date_bounds(now=now)
        if bounds is not None:
            start, end = bounds
            clauses.append(Appointment.date >= start)
            clauses.append(Appointment.date <= end)

        return clauses


class ReportService:
    """
    Consulta del historial de turnos para los reportes.
    """

    async def get_report(
        self,
        db: AsyncSession,
        report_filter: ReportFilter,
    ) -> list[Appointment]:
        """
        Recupera los turnos que cumplen el filtro.

        Ordenados por fecha descendente y hora de inicio ascendente, con
        cliente, vehículo y trabajos.

        Args:
            db: Sesión de base de datos
            report_filter: Filtros del reporte

        Returns:
            Lista de turnos
        """
        result = await db.execute(
            select(Appointment)
            .where(*report_filter.conditions())
            .order_by(Appointment.date.desc(), Appointment.start_time.asc())
        )
        appointments = list(result.scalars().all())

        logger.debug("Reporte %s: %s turnos", report_filter, len(appointments))
        return appointments


# Instancia global del service
report_service = ReportService()
