"""Categoria database table model."""

from sqlmodel import Field

from src.catalogo.entities.core._base import EntityTable


class CategoriaTable(EntityTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "Categoria"

    nombre: str = Field(max_length=100, nullable=False)
