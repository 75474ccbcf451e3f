"""Catalogo API.

Paginated CRUD service for the product catalog: entities, persistence gateway,
DTO mapping and the versioned HTTP surface.
"""

__version__ = "0.1.0"
