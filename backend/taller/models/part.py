"""
Modelo SQLAlchemy para los Repuestos
Proyecto: Taller Manager (Gestión de Taller)

Inventario de repuestos del taller.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column

from taller.models import Base
from taller.models.mixins import TimestampMixin, UUIDMixin


class Part(Base, UUIDMixin, TimestampMixin):
    """
    Modelo del inventario de repuestos.

    Attributes:
        id: UUID primary key
        name: Nombre del repuesto (obligatorio)
        description: Descripción (opcional)
        quantity: Cantidad en stock (>= 0)
        purchase_price: Precio de compra (opcional)
        sale_price: Precio de venta (opcional)
        minimum_stock: Stock mínimo (default 1)

    Properties:
        low_stock: True si quantity <= minimum_stock. Se calcula en lectura,
            nunca se guarda.
    """

    __tablename__ = "parts"

    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        index=True,
        doc="Nombre del repuesto",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Descripción del repuesto",
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Cantidad en stock",
    )

    purchase_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        doc="Precio de compra",
    )

    sale_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        doc="Precio de venta",
    )

    minimum_stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        doc="Stock mínimo antes de marcar el repuesto como bajo",
    )

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_parts_quantity"),
        CheckConstraint("minimum_stock >= 0", name="ck_parts_minimum_stock"),
    )

    @hybrid_property
    def low_stock(self) -> bool:
        """True si la cantidad está en el mínimo o por debajo."""
        return self.quantity <= self.minimum_stock

    def __repr__(self) -> str:
        return f"Part(name={self.name!r}, quantity={self.quantity}, minimum_stock={self.minimum_stock})"
