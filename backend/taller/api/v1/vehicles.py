"""
Router FastAPI para la entidad Vehicle
Proyecto: Taller Manager (Gestión de Taller)

Define los endpoints de la API para la gestión de vehículos.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.database import get_db
from taller.schemas.common import SuccessResponse
from taller.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from taller.services.vehicle_service import vehicle_service

# Logger de este módulo
logger = logging.getLogger(__name__)

# Router con prefix y tag
router = APIRouter(
    prefix="/vehicles",
    tags=["Vehículos"],
)


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "",
    name="vehiculos_lista",
    summary="Lista de vehículos",
    description="Vehículos ordenados por patente, con filtro opcional por cliente.",
    response_model=list[VehicleRead],
    status_code=status.HTTP_200_OK,
)
async def get_vehicles(
    client_id: Optional[uuid.UUID] = Query(None, alias="clientId", description="UUID del cliente"),
    db: AsyncSession = Depends(get_db),
) -> list[VehicleRead]:
    """
    Recupera la lista de vehículos.

    Args:
        client_id: UUID del cliente para filtrar (opcional)
        db: Sesión de base de datos
    """
    vehicles = await vehicle_service.get_all(db=db, client_id=client_id)
    return [VehicleRead.model_validate(v) for v in vehicles]


@router.get(
    "/{vehicle_id}",
    name="vehiculo_detalle",
    summary="Detalle de vehículo",
    response_model=VehicleRead,
    status_code=status.HTTP_200_OK,
)
async def get_vehicle(
    vehicle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> VehicleRead:
    """
    Recupera un vehículo con su dueño.

    Raises:
        NotFoundError: Si el vehículo no existe
    """
    vehicle = await vehicle_service.get_by_id(db=db, vehicle_id=vehicle_id)
    return VehicleRead.model_validate(vehicle)


@router.post(
    "",
    name="vehiculo_crea",
    summary="Crea vehículo",
    response_model=VehicleRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    db: AsyncSession = Depends(get_db),
) -> VehicleRead:
    """
    Crea un nuevo vehículo asociado a un cliente.

    Raises:
        NotFoundError: Si el cliente no existe
        DuplicateError: Si la patente ya está registrada
    """
    vehicle = await vehicle_service.create(db=db, vehicle_data=vehicle_data)
    await db.commit()
    return VehicleRead.model_validate(vehicle)


@router.put(
    "/{vehicle_id}",
    name="vehiculo_actualiza",
    summary="Actualiza vehículo",
    response_model=VehicleRead,
    status_code=status.HTTP_200_OK,
)
async def update_vehicle(
    vehicle_id: uuid.UUID,
    vehicle_data: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
) -> VehicleRead:
    """
    Actualiza los campos enviados de un vehículo.

    Raises:
        NotFoundError: Si el vehículo o el nuevo cliente no existen
        DuplicateError: Si la patente ya está registrada
    """
    vehicle = await vehicle_service.update(
        db=db,
        vehicle_id=vehicle_id,
        vehicle_data=vehicle_data,
    )
    await db.commit()
    return VehicleRead.model_validate(vehicle)


@router.delete(
    "/{vehicle_id}",
    name="vehiculo_elimina",
    summary="Elimina vehículo",
    description="Elimina un vehículo sin turnos asociados.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_vehicle(
    vehicle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """
    Elimina un vehículo.

    Raises:
        NotFoundError: Si el vehículo no existe
        ConflictError: Si el vehículo tiene turnos
    """
    await vehicle_service.delete(db=db, vehicle_id=vehicle_id)
    await db.commit()
    return SuccessResponse()
