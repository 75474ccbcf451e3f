"""Entity: Producto."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import Field

from src.catalogo.entities.catalog.categoria.entity import Categoria
from src.catalogo.entities.catalog.marca.entity import Marca
from src.catalogo.entities.core._base import Entity


class Producto(Entity):
    """Product entity representing a catalog item.

    ``marca`` and ``categoria`` are the owned navigations loaded alongside the
    product; ``marca_id`` and ``categoria_id`` are the references that get
    persisted.
    """

    nombre: str = Field(max_length=100, description="Product name")
    precio: Decimal = Field(
        default=Decimal("0"), max_digits=18, decimal_places=2, description="Unit price"
    )
    marca_id: int = Field(description="Brand reference")
    categoria_id: int = Field(description="Category reference")
    fecha_creacion: datetime | None = Field(
        default=None, description="Creation timestamp assigned by the store"
    )
    marca: Marca | None = None
    categoria: Categoria | None = None

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Producto):
            return False

        return (
            self.id == other.id
            and self.nombre == other.nombre
            and self.precio == other.precio
            and self.marca_id == other.marca_id
            and self.categoria_id == other.categoria_id
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.nombre,
            self.precio,
            self.marca_id,
            self.categoria_id,
        ))
