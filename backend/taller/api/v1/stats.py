"""
Router FastAPI para las Estadísticas
Proyecto: Taller Manager (Gestión de Taller)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taller.core.database import get_session_factory
from taller.schemas.report import StatsRead
from taller.services.stats_service import stats_service

# Logger de este módulo
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stats",
    tags=["Estadísticas"],
)


@router.get(
    "",
    name="estadisticas",
    summary="Estadísticas del tablero",
    description=(
        "Turnos pendientes, en progreso y completados (del mes si se indican "
        "month y year) y total de clientes."
    ),
    response_model=StatsRead,
    status_code=status.HTTP_200_OK,
)
async def get_stats(
    month: Optional[int] = Query(None, description="Mes 1-12"),
    year: Optional[int] = Query(None, description="Año"),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> StatsRead:
    """
    Devuelve los contadores del tablero.

    Raises:
        BusinessValidationError: Si el mes o el año son inválidos
    """
    stats = await stats_service.get_stats(
        session_factory=session_factory,
        month=month,
        year=year,
    )
    return StatsRead(**stats)
