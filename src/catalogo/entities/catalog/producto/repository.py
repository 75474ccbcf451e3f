"""Producto repository."""

from typing import Any

from sqlalchemy.orm import selectinload
from sqlmodel import select

from src.catalogo.core.repositories.base import Repository
from src.catalogo.entities.catalog.producto.entity import Producto
from src.catalogo.entities.catalog.producto.table import ProductoTable


class ProductoRepository(Repository[Producto, ProductoTable]):
    """Data-access layer for products, loading brand and category with each row."""

    entity_type = Producto
    table_type = ProductoTable
    search_column = "nombre"
    server_fields = frozenset({"id", "fecha_creacion"})

    def _select(self) -> Any:
        return select(ProductoTable).options(
            selectinload(ProductoTable.marca),  # type: ignore[arg-type]
            selectinload(ProductoTable.categoria),  # type: ignore[arg-type]
        )
