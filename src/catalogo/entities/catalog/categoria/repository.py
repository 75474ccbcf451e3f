"""Categoria repository."""

from src.catalogo.core.repositories.base import Repository
from src.catalogo.entities.catalog.categoria.entity import Categoria
from src.catalogo.entities.catalog.categoria.table import CategoriaTable


class CategoriaRepository(Repository[Categoria, CategoriaTable]):
    """Data-access layer for categories."""

    entity_type = Categoria
    table_type = CategoriaTable
    search_column = "nombre"
