"""Versioned CRUD endpoints for catalog products."""

from fastapi import APIRouter, Body, Depends, Response, status
from loguru import logger

from src.catalogo.api.dtos.producto import (
    ProductoAddUpdateDTO,
    ProductoDTO,
    ProductoListDTO,
)
from src.catalogo.api.http.deps import (
    get_api_version,
    get_params,
    get_unit_of_work,
    require_role,
)
from src.catalogo.api.http.errors import PRODUCTO_NOT_FOUND, ApiError
from src.catalogo.api.mappers.producto import (
    apply_add_update_dto,
    producto_from_add_update_dto,
    to_producto_add_update_dto,
    to_producto_dto,
    to_producto_list_dto,
)
from src.catalogo.core.pagination import Pager, Params
from src.catalogo.core.unit_of_work import UnitOfWork
from src.catalogo.runtime.context import get_config

INLINE_COUNT_HEADER = "X-InlineCount"

router = APIRouter(
    prefix="/productos",
    tags=["productos"],
    # role check runs before the version check and before any store access
    dependencies=[
        Depends(require_role(get_config().authorization.admin_role)),
        Depends(get_api_version),
    ],
)


@router.get(
    "",
    response_model=Pager[ProductoListDTO] | list[ProductoDTO],
    summary="List products (1.0 paged with search, 1.1 unpaged)",
)
def list_productos(
    response: Response,
    version: str = Depends(get_api_version),
    params: Params = Depends(get_params),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Pager[ProductoListDTO] | list[ProductoDTO]:
    if version == "1.1":
        productos = uow.productos.get_all()
        return [to_producto_dto(p) for p in productos]

    total, productos = uow.productos.get_page(
        params.page_index, params.page_size, params.search
    )
    logger.debug(
        "Listing productos page {} (size {}, search {!r}): {} of {}",
        params.page_index,
        params.page_size,
        params.search,
        len(productos),
        total,
    )
    response.headers[INLINE_COUNT_HEADER] = str(total)
    return Pager[ProductoListDTO].create(
        page_index=params.page_index,
        page_size=params.page_size,
        total_count=total,
        items=[to_producto_list_dto(p) for p in productos],
        search=params.search,
    )


@router.get("/{producto_id}", response_model=ProductoDTO)
def get_producto(
    producto_id: int, uow: UnitOfWork = Depends(get_unit_of_work)
) -> ProductoDTO:
    producto = uow.productos.get_by_id(producto_id)
    if producto is None:
        raise ApiError(404, PRODUCTO_NOT_FOUND)
    return to_producto_dto(producto)


@router.post(
    "",
    response_model=ProductoAddUpdateDTO,
    status_code=status.HTTP_201_CREATED,
)
def create_producto(
    dto: ProductoAddUpdateDTO,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ProductoAddUpdateDTO:
    producto = producto_from_add_update_dto(dto)
    uow.productos.add(producto)
    uow.save()
    if producto.id is None:
        raise ApiError(400)

    logger.bind(producto_id=producto.id).info("Producto created")
    response.headers["Location"] = f"{router.prefix}/{producto.id}"
    return to_producto_add_update_dto(producto)


@router.put("/{producto_id}", response_model=ProductoAddUpdateDTO)
def update_producto(
    producto_id: int,
    dto: ProductoAddUpdateDTO | None = Body(default=None),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ProductoAddUpdateDTO:
    if dto is None:
        raise ApiError(404, PRODUCTO_NOT_FOUND)

    existing = uow.productos.get_by_id(producto_id)
    if existing is None:
        raise ApiError(404, PRODUCTO_NOT_FOUND)

    producto = apply_add_update_dto(existing, dto)
    uow.productos.update(producto)
    uow.save()

    logger.bind(producto_id=producto_id).info("Producto updated")
    return to_producto_add_update_dto(producto)


@router.delete(
    "/{producto_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_producto(
    producto_id: int, uow: UnitOfWork = Depends(get_unit_of_work)
) -> None:
    producto = uow.productos.get_by_id(producto_id)
    if producto is None:
        raise ApiError(404, PRODUCTO_NOT_FOUND)

    uow.productos.remove(producto)
    uow.save()
    logger.bind(producto_id=producto_id).info("Producto deleted")
