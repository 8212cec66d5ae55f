"""
Excepciones de la aplicación.
Proyecto: Taller Manager (Gestión de Taller)

Define las excepciones del dominio para un manejo centralizado de errores.
Cada excepción lleva el status HTTP y el código de error que el handler
de main.py devuelve al cliente.

NOTA: BusinessValidationError es distinta de pydantic.ValidationError.
- pydantic.ValidationError: errores de formato/tipo del input (handler de FastAPI → 400)
- BusinessValidationError: violaciones de reglas de negocio (nuestro handler → 400)
"""

from typing import Any, Dict, Optional

__all__ = [
    "AppException",
    "NotFoundError",
    "DuplicateError",
    "BusinessValidationError",
    "ConflictError",
]


class AppException(Exception):
    """
    Excepción base de la aplicación.

    Attributes:
        status_code: HTTP status code devuelto al cliente
        error_code: Identificador del error para el frontend
        detail: Mensaje legible para el usuario
        extra: Datos adicionales para el frontend
    """

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_detail: str = "Error interno del servidor"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.detail = detail if detail is not None else self.default_detail
        self.error_code = error_code if error_code is not None else self.error_code
        self.extra = extra
        self.status_code = self.__class__.status_code
        super().__init__(self.detail)


class NotFoundError(AppException):
    """
    El recurso buscado no existe en la base de datos.
    """

    status_code: int = 404
    error_code: str = "RESOURCE_NOT_FOUND"
    default_detail: str = "Recurso no encontrado"


class DuplicateError(AppException):
    """
    Violación de un vínculo de unicidad (ej. patente ya registrada).

    Se responde 400 con un mensaje específico, distinto del error genérico.
    """

    status_code: int = 400
    error_code: str = "DUPLICATE_RESOURCE"
    default_detail: str = "Recurso ya existente"


class BusinessValidationError(ValueError, AppException):
    """
    Violación de una regla de negocio.

    Hereda de ValueError para poder lanzarse desde los validadores Pydantic.

    Ejemplos:
        - "El vehículo no pertenece al cliente seleccionado"
        - "Transición de estado no permitida"
        - "jobId es requerido"
    """

    status_code: int = 400
    error_code: str = "BUSINESS_VALIDATION_ERROR"
    default_detail: str = "Validación de datos fallida"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        # Llama directo a AppException.__init__ para no pasar por ValueError
        AppException.__init__(self, detail, error_code, extra)


class ConflictError(AppException):
    """
    La operación no puede hacerse por el estado actual del recurso.

    Se usa cuando un vehículo todavía tiene turnos asociados.
    """

    status_code: int = 400
    error_code: str = "CONFLICT_STATE"
    default_detail: str = "Conflicto de estado"
