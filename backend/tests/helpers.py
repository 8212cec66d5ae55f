"""
Helpers de los tests: resultados de consultas y objetos de dominio simulados.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

API = "/api/v1"


def scalar_result(value):
    """Resultado de db.execute cuyo scalar/scalar_one_or_none devuelve value."""
    result = MagicMock()
    result.scalar.return_value = value
    result.scalar_one_or_none.return_value = value
    result.first.return_value = value
    return result


# ============================================================
# Objetos de dominio simulados (sin base de datos)
# ============================================================


def make_job(description="Cambio de aceite", price="1500.00"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        description=description,
        price=Decimal(price),
    )


def make_appointment(
    date=datetime(2025, 6, 1, tzinfo=timezone.utc),
    start_time="09:00",
    status="PENDING",
    description="Service completo",
    client=None,
    vehicle=None,
    jobs=None,
):
    """Turno simulado con cliente, vehículo y trabajos."""
    jobs = jobs if jobs is not None else []
    return SimpleNamespace(
        id=uuid.uuid4(),
        date=date,
        start_time=start_time,
        end_time=None,
        status=status,
        description=description,
        client=client or SimpleNamespace(name="Ana", phone="555-1"),
        vehicle=vehicle or SimpleNamespace(plate="XYZ999", make="Ford", model="Ka"),
        jobs=jobs,
        total=sum((job.price for job in jobs), Decimal("0")),
    )
