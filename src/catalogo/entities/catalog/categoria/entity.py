"""Entity: Categoria."""

from pydantic import Field

from src.catalogo.entities.core._base import Entity


class Categoria(Entity):
    """Category a product is filed under."""

    nombre: str = Field(max_length=100, description="Category display name")
