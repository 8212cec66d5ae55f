"""
API Routes
Proyecto: Taller Manager (Gestión de Taller)

Agrupa los routers versionados.
"""

from taller.api.v1 import api_v1_router

__all__ = ["api_v1_router"]
