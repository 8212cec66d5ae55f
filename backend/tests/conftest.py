"""
Pytest configuration and fixtures.

Los tests de API usan una base SQLite (aiosqlite) en un archivo temporal
por test, con las dependencias get_db y get_session_factory reemplazadas.
Los tests unitarios de los services usan un AsyncSession mockeado.
"""

import os

# La configuración se lee al importar taller.core.config
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APP_ENV", "testing")

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taller.core.database import (
    create_tables,
    enable_sqlite_foreign_keys,
    get_db,
    get_session_factory,
)
from taller.main import app

from helpers import API


# ============================================================
# Base de datos de test
# ============================================================


@pytest.fixture
async def engine(tmp_path):
    """Engine SQLite en un archivo temporal, con foreign keys activas."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'taller_test.db'}")
    enable_sqlite_foreign_keys(test_engine)
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory ligada al engine de test."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def api_client(session_factory):
    """Cliente HTTP contra la app con la base de test."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================
# Helpers para crear datos por la API
# ============================================================


@pytest.fixture
def create_client(api_client):
    """Crea un cliente por la API y devuelve el JSON."""

    async def _create(name="Ana", phone="555-1", **extra):
        response = await api_client.post(
            f"{API}/clients", json={"name": name, "phone": phone, **extra}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_vehicle(api_client):
    """Crea un vehículo por la API y devuelve el JSON."""

    async def _create(client_id, plate="xyz999", make="Ford", model="Ka", **extra):
        response = await api_client.post(
            f"{API}/vehicles",
            json={"plate": plate, "make": make, "model": model, "clientId": client_id, **extra},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_appointment(api_client):
    """Crea un turno por la API y devuelve el JSON."""

    async def _create(
        client_id,
        vehicle_id,
        date="2025-06-01",
        start_time="09:00",
        description="Cambio de aceite",
        **extra,
    ):
        response = await api_client.post(
            f"{API}/appointments",
            json={
                "date": date,
                "startTime": start_time,
                "description": description,
                "clientId": client_id,
                "vehicleId": vehicle_id,
                **extra,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
async def owner(create_client, create_vehicle):
    """Cliente con un vehículo: devuelve (cliente, vehículo)."""
    client = await create_client()
    vehicle = await create_vehicle(client["id"])
    return client, vehicle


# ============================================================
# Fixtures de AsyncSession mockeado
# ============================================================


@pytest.fixture
def mock_db():
    """Crea un mock de AsyncSession."""
    db = AsyncMock(spec=AsyncSession)
    db.execute = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    return db
