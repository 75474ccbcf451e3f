"""Entity: Marca."""

from pydantic import Field

from src.catalogo.entities.core._base import Entity


class Marca(Entity):
    """Brand a product belongs to."""

    nombre: str = Field(max_length=100, description="Brand display name")
