"""
Main Entry Point - FastAPI Application
Proyecto: Taller Manager (Gestión de Taller)

Configura la aplicación FastAPI con middleware, routers, handlers de
errores y ciclo de vida.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taller.api.v1 import api_v1_router
from taller.core.config import settings
from taller.core.database import close_db, init_db
from taller.core.exceptions import AppException

# ------------------------------------------------------------
# Configuración de Logging
# ------------------------------------------------------------
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Lifespan Handler
# ------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ciclo de vida de la aplicación.

    - Startup: verifica la conexión a la base de datos
    - Shutdown: cierra las conexiones
    """
    logger.info("Iniciando %s v%s", settings.app_name, settings.app_version)
    await init_db()
    logger.info("Aplicación iniciada")

    yield

    logger.info("Deteniendo la aplicación...")
    await close_db()
    logger.info("Aplicación detenida")


# ------------------------------------------------------------
# FastAPI Application
# ------------------------------------------------------------
app = FastAPI(
    title=settings.app_name,
    description="Gestión de taller mecánico - Backend API",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# ------------------------------------------------------------
# Middleware CORS
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------
# Exception Handlers
# ------------------------------------------------------------
def _format_validation_errors(exc: RequestValidationError) -> str:
    """Mensaje corto con los campos inválidos: "startTime: Field required; ..."."""
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location)
        message = error.get("msg", "valor inválido")
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages) or "Datos inválidos"


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handler de las excepciones del dominio.

    Cada excepción define su status HTTP y su código de error.
    """
    content = {"detail": exc.detail, "error_code": exc.error_code}
    if exc.extra:
        content["extra"] = exc.extra
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handler de los errores de validación del input.

    Campos obligatorios ausentes, UUID mal formados o valores fuera de
    rango se responden con 400.
    """
    detail = _format_validation_errors(exc)
    logger.warning("Request inválido %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(
        status_code=400,
        content={"detail": detail, "error_code": "VALIDATION_ERROR"},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler genérico para las excepciones no capturadas.

    Loguea el error completo y responde 500 sin detalles internos.
    """
    logger.error(
        "Excepción no manejada en %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Error interno del servidor"},
    )


# ------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------
@app.get(
    "/health",
    name="Health Check",
    summary="Estado de la aplicación",
    tags=["System"],
)
async def health_check() -> dict[str, str]:
    """
    Endpoint de control de estado.

    Returns:
        dict: Estado de la aplicación
    """
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
    }


# ------------------------------------------------------------
# Router
# ------------------------------------------------------------
app.include_router(api_v1_router)
