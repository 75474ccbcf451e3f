"""Marca repository."""

from src.catalogo.core.repositories.base import Repository
from src.catalogo.entities.catalog.marca.entity import Marca
from src.catalogo.entities.catalog.marca.table import MarcaTable


class MarcaRepository(Repository[Marca, MarcaTable]):
    """Data-access layer for brands."""

    entity_type = Marca
    table_type = MarcaTable
    search_column = "nombre"
