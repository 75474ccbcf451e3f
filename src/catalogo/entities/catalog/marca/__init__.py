"""Entity package: Marca (brand)."""

from .entity import Marca
from .repository import MarcaRepository
from .table import MarcaTable

__all__ = ["Marca", "MarcaRepository", "MarcaTable"]
