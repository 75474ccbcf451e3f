"""Entity package: Categoria (category)."""

from .entity import Categoria
from .repository import CategoriaRepository
from .table import CategoriaTable

__all__ = ["Categoria", "CategoriaRepository", "CategoriaTable"]
