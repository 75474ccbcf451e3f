"""Producto database table model."""

from datetime import UTC, datetime
from decimal import Decimal

from sqlmodel import Field, Relationship

from src.catalogo.entities.catalog.categoria.table import CategoriaTable
from src.catalogo.entities.catalog.marca.table import MarcaTable
from src.catalogo.entities.core._base import EntityTable


class ProductoTable(EntityTable, table=True):
    """Database persistence model for products.

    Brand and category references are foreign keys; the store rejects a
    commit that points at a missing row.
    """

    __tablename__ = "Producto"

    nombre: str = Field(max_length=100, nullable=False)
    precio: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
    fecha_creacion: datetime = Field(
        default_factory=lambda: datetime.now(UTC), nullable=False
    )
    marca_id: int = Field(foreign_key="Marca.id", nullable=False, index=True)
    categoria_id: int = Field(foreign_key="Categoria.id", nullable=False, index=True)

    marca: MarcaTable | None = Relationship()
    categoria: CategoriaTable | None = Relationship()
