"""
API v1 Routes
Proyecto: Taller Manager (Gestión de Taller)

Router versión 1 de la API.
"""

from fastapi import APIRouter

from taller.api.v1 import appointments, clients, parts, reports, stats, vehicles

# Router agregado de la v1
api_v1_router = APIRouter(prefix="/api/v1")

# Routers de cada módulo
api_v1_router.include_router(clients.router)
api_v1_router.include_router(vehicles.router)
api_v1_router.include_router(appointments.router)
api_v1_router.include_router(parts.router)
api_v1_router.include_router(stats.router)
api_v1_router.include_router(reports.router)

__all__ = ["api_v1_router"]
