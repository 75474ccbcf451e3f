"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer (when the API reads or writes it)

Importing this package registers every table with the SQLModel metadata.
"""

from .auth.refresh_token import RefreshToken, RefreshTokenTable
from .catalog.categoria import Categoria, CategoriaRepository, CategoriaTable
from .catalog.marca import Marca, MarcaRepository, MarcaTable
from .catalog.producto import Producto, ProductoRepository, ProductoTable

__all__ = [
    "Categoria",
    "CategoriaRepository",
    "CategoriaTable",
    "Marca",
    "MarcaRepository",
    "MarcaTable",
    "Producto",
    "ProductoRepository",
    "ProductoTable",
    "RefreshToken",
    "RefreshTokenTable",
]
