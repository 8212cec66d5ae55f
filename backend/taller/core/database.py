"""
Configuración de Base de Datos - SQLAlchemy 2.0 Async
Proyecto: Taller Manager (Gestión de Taller)

Define engine, session factory y dependency injection para FastAPI.
"""

import logging
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taller.core.config import settings

# Logger de este módulo
logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict[str, Any]:
    """Opciones del engine según el motor (SQLite no acepta opciones de pool)."""
    options: dict[str, Any] = {"echo": settings.debug}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    return options


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Activa PRAGMA foreign_keys en cada conexión SQLite.

    Sin esto SQLite ignora los ON DELETE CASCADE declarados en el esquema.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ------------------------------------------------------------
# Engine Async SQLAlchemy 2.0
# ------------------------------------------------------------
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    **_engine_options(settings.database_url),
)

if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)


# ------------------------------------------------------------
# Session Factory
# ------------------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection para FastAPI.

    Crea una sesión por request y la cierra al terminar.

    Yields:
        AsyncSession: Sesión de base de datos async
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Dependency que entrega la session factory.

    La usan los servicios que necesitan varias sesiones en paralelo
    (una AsyncSession no admite consultas concurrentes).
    """
    return AsyncSessionLocal


async def init_db() -> None:
    """
    Verifica que la base de datos sea alcanzable.
    """
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Conexión a la base de datos establecida")
    except Exception as e:
        logger.error("Error de conexión a la base de datos: %s", e)
        raise


async def create_tables(target: AsyncEngine | None = None) -> None:
    """Crea todas las tablas declaradas en los modelos."""
    from taller.models import Base

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tablas creadas")


async def drop_tables(target: AsyncEngine | None = None) -> None:
    """Elimina todas las tablas declaradas en los modelos."""
    from taller.models import Base

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Tablas eliminadas")


async def close_db() -> None:
    """
    Cierra las conexiones a la base de datos.

    Se invoca en el shutdown de la aplicación.
    """
    await engine.dispose()
    logger.info("Conexiones a la base de datos cerradas")
