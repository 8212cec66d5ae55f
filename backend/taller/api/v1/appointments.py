"""
Router FastAPI para los Turnos y sus Trabajos
Proyecto: Taller Manager (Gestión de Taller)

Define los endpoints de la API para los turnos y para los trabajos
cobrados en cada turno.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.database import get_db
from taller.schemas.appointment import (
    AppointmentCreate,
    AppointmentRead,
    AppointmentUpdate,
    JobCreate,
    JobRead,
)
from taller.schemas.common import SuccessResponse
from taller.services.appointment_service import AppointmentFilter, appointment_service
from taller.services.job_service import job_service

# Logger de este módulo
logger = logging.getLogger(__name__)

# Router con prefix y tag
router = APIRouter(
    prefix="/appointments",
    tags=["Turnos"],
)


# -------------------------------------------------------------------
# Turnos
# -------------------------------------------------------------------

@router.get(
    "",
    name="turnos_lista",
    summary="Lista de turnos",
    description=(
        "Turnos ordenados por fecha y hora de inicio. Filtro por día exacto "
        "(date=YYYY-MM-DD) o por mes (month + year)."
    ),
    response_model=list[AppointmentRead],
    status_code=status.HTTP_200_OK,
)
async def get_appointments(
    date: Optional[str] = Query(None, description="Día YYYY-MM-DD"),
    month: Optional[int] = Query(None, description="Mes 1-12"),
    year: Optional[int] = Query(None, description="Año"),
    db: AsyncSession = Depends(get_db),
) -> list[AppointmentRead]:
    """
    Recupera la lista de turnos.

    date tiene prioridad; month y year se aplican solo si vienen los dos.

    Raises:
        BusinessValidationError: Si la fecha o el mes son inválidos
    """
    appointment_filter = AppointmentFilter.from_query(date=date, month=month, year=year)
    appointments = await appointment_service.get_all(
        db=db,
        appointment_filter=appointment_filter,
    )
    return [AppointmentRead.model_validate(a) for a in appointments]


@router.get(
    "/{appointment_id}",
    name="turno_detalle",
    summary="Detalle de turno",
    response_model=AppointmentRead,
    status_code=status.HTTP_200_OK,
)
async def get_appointment(
    appointment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> AppointmentRead:
    """
    Recupera un turno con cliente, vehículo y trabajos.

    Raises:
        NotFoundError: Si el turno no existe
    """
    appointment = await appointment_service.get_by_id(db=db, appointment_id=appointment_id)
    return AppointmentRead.model_validate(appointment)


@router.post(
    "",
    name="turno_crea",
    summary="Crea turno",
    description="Crea un turno en estado PENDING.",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    appointment_data: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
) -> AppointmentRead:
    """
    Crea un nuevo turno.

    Raises:
        NotFoundError: Si el cliente o el vehículo no existen
        BusinessValidationError: Si el vehículo es de otro cliente
    """
    appointment = await appointment_service.create(db=db, appointment_data=appointment_data)
    await db.commit()
    return AppointmentRead.model_validate(appointment)


@router.put(
    "/{appointment_id}",
    name="turno_actualiza",
    summary="Actualiza turno",
    description="Actualización parcial; los cambios de estado siguen las transiciones permitidas.",
    response_model=AppointmentRead,
    status_code=status.HTTP_200_OK,
)
async def update_appointment(
    appointment_id: uuid.UUID,
    appointment_data: AppointmentUpdate,
    db: AsyncSession = Depends(get_db),
) -> AppointmentRead:
    """
    Actualiza los campos enviados de un turno.

    Raises:
        NotFoundError: Si el turno no existe
        BusinessValidationError: Si la transición de estado no está permitida
    """
    appointment = await appointment_service.update(
        db=db,
        appointment_id=appointment_id,
        appointment_data=appointment_data,
    )
    await db.commit()
    return AppointmentRead.model_validate(appointment)


@router.delete(
    "/{appointment_id}",
    name="turno_elimina",
    summary="Elimina turno",
    description="Elimina el turno y sus trabajos.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_appointment(
    appointment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """
    Elimina un turno.

    Raises:
        NotFoundError: Si el turno no existe
    """
    await appointment_service.delete(db=db, appointment_id=appointment_id)
    await db.commit()
    return SuccessResponse()


# -------------------------------------------------------------------
# Trabajos del turno
# -------------------------------------------------------------------

@router.post(
    "/{appointment_id}/jobs",
    name="trabajo_crea",
    summary="Agrega trabajo",
    response_model=JobRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_job(
    appointment_id: uuid.UUID,
    job_data: JobCreate,
    db: AsyncSession = Depends(get_db),
) -> JobRead:
    """
    Agrega un trabajo cobrado al turno.

    Raises:
        NotFoundError: Si el turno no existe
    """
    job = await job_service.create(db=db, appointment_id=appointment_id, job_data=job_data)
    await db.commit()
    return JobRead.model_validate(job)


@router.delete(
    "/{appointment_id}/jobs",
    name="trabajo_elimina",
    summary="Elimina trabajo",
    description="Elimina el trabajo indicado en el parámetro jobId.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_job(
    appointment_id: uuid.UUID,
    job_id: Optional[uuid.UUID] = Query(None, alias="jobId", description="UUID del trabajo"),
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """
    Elimina un trabajo del turno.

    Raises:
        BusinessValidationError: Si falta jobId
        NotFoundError: Si el trabajo no existe en el turno
    """
    await job_service.delete(db=db, appointment_id=appointment_id, job_id=job_id)
    await db.commit()
    return SuccessResponse()
