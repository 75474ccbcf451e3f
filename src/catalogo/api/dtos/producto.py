"""Wire-facing product projections.

Field names are snake_case in Python and camelCase in JSON. Prices travel as
JSON numbers (binary floats): values with up to 15 significant digits come
back exactly, longer ones are rounded on the wire while the stored decimal
keeps full precision.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

Precio = Annotated[
    Decimal,
    Field(max_digits=18, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductoListDTO(_CamelModel):
    """Row of the paged listing, with brand and category flattened to names."""

    id: int
    nombre: str
    precio: Precio
    fecha_creacion: datetime | None = None
    marca_id: int
    marca: str | None = None
    categoria_id: int
    categoria: str | None = None


class ProductoDTO(_CamelModel):
    id: int
    nombre: str
    precio: Precio
    fecha_creacion: datetime | None = None
    marca: str | None = None
    categoria: str | None = None


class ProductoAddUpdateDTO(_CamelModel):
    """Body of create and update requests.

    ``id`` and ``fecha_creacion`` are accepted but ignored on input; responses
    echo them back with the values the store assigned.
    """

    id: int | None = None
    nombre: str = Field(min_length=1, max_length=100)
    precio: Precio = Decimal("0")
    fecha_creacion: datetime | None = None
    marca_id: int
    categoria_id: int
