"""Conversions between the Producto entity and its DTOs."""

from src.catalogo.api.dtos.producto import (
    ProductoAddUpdateDTO,
    ProductoDTO,
    ProductoListDTO,
)
from src.catalogo.entities.catalog.producto import Producto


def to_producto_list_dto(producto: Producto) -> ProductoListDTO:
    return ProductoListDTO(
        id=producto.id,
        nombre=producto.nombre,
        precio=producto.precio,
        fecha_creacion=producto.fecha_creacion,
        marca_id=producto.marca_id,
        marca=producto.marca.nombre if producto.marca else None,
        categoria_id=producto.categoria_id,
        categoria=producto.categoria.nombre if producto.categoria else None,
    )


def to_producto_dto(producto: Producto) -> ProductoDTO:
    return ProductoDTO(
        id=producto.id,
        nombre=producto.nombre,
        precio=producto.precio,
        fecha_creacion=producto.fecha_creacion,
        marca=producto.marca.nombre if producto.marca else None,
        categoria=producto.categoria.nombre if producto.categoria else None,
    )


def to_producto_add_update_dto(producto: Producto) -> ProductoAddUpdateDTO:
    return ProductoAddUpdateDTO(
        id=producto.id,
        nombre=producto.nombre,
        precio=producto.precio,
        fecha_creacion=producto.fecha_creacion,
        marca_id=producto.marca_id,
        categoria_id=producto.categoria_id,
    )


def producto_from_add_update_dto(dto: ProductoAddUpdateDTO) -> Producto:
    """Build a new, not yet persisted product; ``id`` and ``fecha_creacion`` are left to the store."""
    return Producto(
        nombre=dto.nombre,
        precio=dto.precio,
        marca_id=dto.marca_id,
        categoria_id=dto.categoria_id,
    )


def apply_add_update_dto(producto: Producto, dto: ProductoAddUpdateDTO) -> Producto:
    """Return a copy of ``producto`` with every writable field replaced from ``dto``."""
    return producto.model_copy(
        update={
            "nombre": dto.nombre,
            "precio": dto.precio,
            "marca_id": dto.marca_id,
            "categoria_id": dto.categoria_id,
            # navigations go stale when their reference changes
            "marca": producto.marca if dto.marca_id == producto.marca_id else None,
            "categoria": (
                producto.categoria if dto.categoria_id == producto.categoria_id else None
            ),
        }
    )
