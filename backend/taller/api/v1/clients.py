"""
Router FastAPI para la entidad Client
Proyecto: Taller Manager (Gestión de Taller)

Define los endpoints de la API para la gestión de clientes.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.database import get_db
from taller.schemas.client import ClientCreate, ClientRead, ClientUpdate
from taller.schemas.common import SuccessResponse
from taller.services.client_service import client_service

# Logger de este módulo
logger = logging.getLogger(__name__)

# Router con prefix y tag
router = APIRouter(
    prefix="/clients",
    tags=["Clientes"],
)


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "",
    name="clientes_lista",
    summary="Lista de clientes",
    description="Todos los clientes ordenados por nombre, con vehículos y cantidad de turnos.",
    response_model=list[ClientRead],
    status_code=status.HTTP_200_OK,
)
async def get_clients(
    db: AsyncSession = Depends(get_db),
) -> list[ClientRead]:
    """
    Recupera la lista de clientes.

    Args:
        db: Sesión de base de datos

    Returns:
        Lista de clientes con vehículos y cantidad de turnos
    """
    rows = await client_service.get_all(db=db)

    return [
        ClientRead.model_validate(client).model_copy(update={"appointment_count": count})
        for client, count in rows
    ]


@router.get(
    "/{client_id}",
    name="cliente_detalle",
    summary="Detalle de cliente",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def get_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> ClientRead:
    """
    Recupera un cliente con sus vehículos.

    Raises:
        NotFoundError: Si el cliente no existe
    """
    client = await client_service.get_by_id(db=db, client_id=client_id)
    count = await client_service.count_appointments(db=db, client_id=client_id)

    return ClientRead.model_validate(client).model_copy(update={"appointment_count": count})


@router.post(
    "",
    name="cliente_crea",
    summary="Crea cliente",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_db),
) -> ClientRead:
    """
    Crea un nuevo cliente.

    Args:
        client_data: Nombre y teléfono obligatorios; email y dirección opcionales
        db: Sesión de base de datos
    """
    client = await client_service.create(db=db, client_data=client_data)
    await db.commit()
    return ClientRead.model_validate(client)


@router.put(
    "/{client_id}",
    name="cliente_actualiza",
    summary="Actualiza cliente",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def update_client(
    client_id: uuid.UUID,
    client_data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
) -> ClientRead:
    """
    Actualiza los campos enviados de un cliente.

    Raises:
        NotFoundError: Si el cliente no existe
    """
    client = await client_service.update(
        db=db,
        client_id=client_id,
        client_data=client_data,
    )
    count = await client_service.count_appointments(db=db, client_id=client_id)
    await db.commit()
    return ClientRead.model_validate(client).model_copy(update={"appointment_count": count})


@router.delete(
    "/{client_id}",
    name="cliente_elimina",
    summary="Elimina cliente",
    description="Elimina el cliente junto con sus vehículos y turnos.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """
    Elimina un cliente.

    Raises:
        NotFoundError: Si el cliente no existe
    """
    await client_service.delete(db=db, client_id=client_id)
    await db.commit()
    return SuccessResponse()
