from .producto import (
    apply_add_update_dto,
    producto_from_add_update_dto,
    to_producto_add_update_dto,
    to_producto_dto,
    to_producto_list_dto,
)

__all__ = [
    "apply_add_update_dto",
    "producto_from_add_update_dto",
    "to_producto_add_update_dto",
    "to_producto_dto",
    "to_producto_list_dto",
]
