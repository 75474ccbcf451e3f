"""Marca database table model."""

from sqlmodel import Field

from src.catalogo.entities.core._base import EntityTable


class MarcaTable(EntityTable, table=True):
    """Database persistence model for brands."""

    __tablename__ = "Marca"

    nombre: str = Field(max_length=100, nullable=False)
