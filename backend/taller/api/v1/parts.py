"""
Router FastAPI para el Inventario de Repuestos
Proyecto: Taller Manager (Gestión de Taller)

Define los endpoints de la API para la gestión de repuestos.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.database import get_db
from taller.schemas.common import SuccessResponse
from taller.schemas.part import PartCreate, PartRead, PartUpdate
from taller.services.part_service import part_service

# Logger de este módulo
logger = logging.getLogger(__name__)

# Router con prefix y tag
router = APIRouter(
    prefix="/parts",
    tags=["Repuestos"],
)


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

# GET /low-stock va antes de GET /{part_id}: "low-stock" no es un UUID

@router.get(
    "",
    name="repuestos_lista",
    summary="Lista de repuestos",
    description="Todos los repuestos ordenados por nombre, con el indicador de stock bajo.",
    response_model=list[PartRead],
    status_code=status.HTTP_200_OK,
)
async def get_parts(
    db: AsyncSession = Depends(get_db),
) -> list[PartRead]:
    """
    Recupera la lista de repuestos.
    """
    parts = await part_service.get_all(db=db)
    return [PartRead.model_validate(p) for p in parts]


@router.get(
    "/low-stock",
    name="repuestos_stock_bajo",
    summary="Repuestos con stock bajo",
    description="Repuestos con cantidad menor o igual al stock mínimo, los más urgentes primero.",
    response_model=list[PartRead],
    status_code=status.HTTP_200_OK,
)
async def get_low_stock_parts(
    db: AsyncSession = Depends(get_db),
) -> list[PartRead]:
    """
    Recupera los repuestos con stock bajo.
    """
    parts = await part_service.get_low_stock(db=db)
    return [PartRead.model_validate(p) for p in parts]


@router.get(
    "/{part_id}",
    name="repuesto_detalle",
    summary="Detalle de repuesto",
    response_model=PartRead,
    status_code=status.HTTP_200_OK,
)
async def get_part(
    part_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> PartRead:
    """
    Recupera un repuesto.

    Raises:
        NotFoundError: Si el repuesto no existe
    """
    part = await part_service.get_by_id(db=db, part_id=part_id)
    return PartRead.model_validate(part)


@router.post(
    "",
    name="repuesto_crea",
    summary="Crea repuesto",
    response_model=PartRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_part(
    part_data: PartCreate,
    db: AsyncSession = Depends(get_db),
) -> PartRead:
    """
    Crea un nuevo repuesto.

    quantity vale 0 y minimumStock vale 1 si no se envían.
    """
    part = await part_service.create(db=db, part_data=part_data)
    await db.commit()
    return PartRead.model_validate(part)


@router.put(
    "/{part_id}",
    name="repuesto_actualiza",
    summary="Actualiza repuesto",
    response_model=PartRead,
    status_code=status.HTTP_200_OK,
)
async def update_part(
    part_id: uuid.UUID,
    part_data: PartUpdate,
    db: AsyncSession = Depends(get_db),
) -> PartRead:
    """
    Actualiza los campos enviados de un repuesto.

    Raises:
        NotFoundError: Si el repuesto no existe
    """
    part = await part_service.update(db=db, part_id=part_id, part_data=part_data)
    await db.commit()
    return PartRead.model_validate(part)


@router.delete(
    "/{part_id}",
    name="repuesto_elimina",
    summary="Elimina repuesto",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_part(
    part_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """
    Elimina un repuesto.

    Raises:
        NotFoundError: Si el repuesto no existe
    """
    await part_service.delete(db=db, part_id=part_id)
    await db.commit()
    return SuccessResponse()
