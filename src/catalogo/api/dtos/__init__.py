from .producto import ProductoAddUpdateDTO, ProductoDTO, ProductoListDTO

__all__ = ["ProductoAddUpdateDTO", "ProductoDTO", "ProductoListDTO"]
