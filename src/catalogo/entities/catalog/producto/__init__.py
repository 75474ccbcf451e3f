"""Entity package: Producto."""

from .entity import Producto
from .repository import ProductoRepository
from .table import ProductoTable

__all__ = ["Producto", "ProductoRepository", "ProductoTable"]
