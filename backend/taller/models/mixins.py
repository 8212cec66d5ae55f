"""
Mixins SQLAlchemy para los modelos
Proyecto: Taller Manager (Gestión de Taller)

Columnas comunes a todas las tablas: id UUID y timestamps.
"""

import datetime
import uuid

from sqlalchemy import DateTime, Uuid, event
from sqlalchemy.orm import Mapped, Session, mapped_column
from sqlalchemy.sql import func


class UUIDMixin:
    """
    Clave primaria UUID generada del lado de la aplicación.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="UUID primary key",
    )


class TimestampMixin:
    """
    Timestamps de creación y de última modificación.

    updated_at lo mantiene el listener before_flush de este módulo.
    """

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Fecha/hora de creación del registro",
    )

    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Fecha/hora de la última modificación",
    )


# ------------------------------------------------------------
# Event Listeners
# ------------------------------------------------------------
@event.listens_for(Session, "before_flush")
def touch_updated_at(session: Session, flush_context, instances) -> None:
    """
    Actualiza updated_at de los objetos nuevos y de los modificados.

    Un objeto "dirty" sin cambios reales en columnas no se toca, así un
    update parcial repetido con los mismos valores deja el registro igual.
    """
    now = datetime.datetime.now(datetime.timezone.utc)

    for obj in session.dirty:
        if isinstance(obj, TimestampMixin) and session.is_modified(
            obj, include_collections=False
        ):
            obj.updated_at = now

    for obj in session.new:
        if isinstance(obj, TimestampMixin):
            obj.updated_at = now
            if obj.created_at is None:
                obj.created_at = now
