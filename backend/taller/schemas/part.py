"""
Schemas Pydantic para el Inventario de Repuestos
Proyecto: Taller Manager (Gestión de Taller)
"""

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from taller.schemas.common import CamelModel, Money, ReadModel, UtcDatetime, reject_null

DEFAULT_QUANTITY = 0
DEFAULT_MINIMUM_STOCK = 1


def _default_when_null(default: int):
    """Un valor ausente o null toma el default; el resto lo valida el tipo int."""

    def _apply(value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return default
        return value

    return _apply


class PartCreate(CamelModel):
    """
    Schema para dar de alta un repuesto.

    quantity y minimumStock se convierten a entero (se aceptan strings
    numéricos). Valores negativos o no numéricos se rechazan.
    """

    name: str = Field(..., min_length=1, max_length=150, description="Nombre")
    description: Optional[str] = Field(None, description="Descripción")
    quantity: int = Field(DEFAULT_QUANTITY, ge=0, description="Cantidad en stock")
    purchase_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, description="Precio de compra"
    )
    sale_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, description="Precio de venta"
    )
    minimum_stock: int = Field(DEFAULT_MINIMUM_STOCK, ge=0, description="Stock mínimo")

    _quantity_default = field_validator("quantity", mode="before")(
        _default_when_null(DEFAULT_QUANTITY)
    )
    _minimum_default = field_validator("minimum_stock", mode="before")(
        _default_when_null(DEFAULT_MINIMUM_STOCK)
    )


class PartUpdate(CamelModel):
    """
    Schema para la actualización parcial de un repuesto.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    purchase_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    sale_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    minimum_stock: Optional[int] = Field(None, ge=0)

    _name_not_null = field_validator("name")(reject_null("name"))
    _quantity_not_null = field_validator("quantity")(reject_null("quantity"))
    _minimum_not_null = field_validator("minimum_stock")(reject_null("minimumStock"))


class PartRead(ReadModel):
    """
    Respuesta de la API para un repuesto.

    low_stock se calcula en cada lectura (quantity <= minimum_stock).
    """

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    quantity: int
    purchase_price: Optional[Money] = None
    sale_price: Optional[Money] = None
    minimum_stock: int
    low_stock: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime
