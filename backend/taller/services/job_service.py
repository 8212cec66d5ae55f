"""
Service Layer para los Trabajos de un turno
Proyecto: Taller Manager (Gestión de Taller)
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taller.core.exceptions import BusinessValidationError, NotFoundError
from taller.models import Appointment, Job
from taller.schemas.appointment import JobCreate

# Logger de este módulo
logger = logging.getLogger(__name__)


class JobService:
    """
    Alta y baja de los trabajos cobrados en un turno.

    Los trabajos no se modifican: se eliminan y se cargan de nuevo.
    """

    async def create(
        self,
        db: AsyncSession,
        appointment_id: uuid.UUID,
        job_data: JobCreate,
    ) -> Job:
        """
        Agrega un trabajo al turno.

        Args:
            db: Sesión de base de datos
            appointment_id: UUID del turno
            job_data: Descripción y precio

        Returns:
            Trabajo creado

        Raises:
            NotFoundError: Si el turno no existe
        """
        result = await db.execute(
            select(Appointment.id).where(Appointment.id == appointment_id)
        )
        if result.scalar_one_or_none() is None:
            logger.warning("Turno no encontrado para el trabajo: %s", appointment_id)
            raise NotFoundError(f"Turno con ID {appointment_id} no encontrado")

        job = Job(appointment_id=appointment_id, **job_data.model_dump())
        db.add(job)
        await db.flush()

        logger.info("Agregado trabajo %s al turno %s: %s", job.id, appointment_id, job.price)
        return job

    async def delete(
        self,
        db: AsyncSession,
        appointment_id: uuid.UUID,
        job_id: Optional[uuid.UUID],
    ) -> None:
        """
        Elimina un trabajo del turno.

        Raises:
            BusinessValidationError: Si no se indicó el trabajo
            NotFoundError: Si el trabajo no existe en ese turno
        """
        if job_id is None:
            raise BusinessValidationError("jobId es requerido")

        result = await db.execute(
            select(Job.id)
            .where(Job.id == job_id)
            .where(Job.appointment_id == appointment_id)
        )
        if result.scalar_one_or_none() is None:
            logger.warning("Trabajo %s no encontrado en el turno %s", job_id, appointment_id)
            raise NotFoundError(f"Trabajo con ID {job_id} no encontrado")

        await db.execute(delete(Job).where(Job.id == job_id))
        await db.flush()

        logger.info("Eliminado trabajo %s del turno %s", job_id, appointment_id)


# Instancia global del service
job_service = JobService()
