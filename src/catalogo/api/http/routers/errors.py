"""Renders the error envelope for a status code."""

from fastapi import APIRouter, Path
from starlette.responses import JSONResponse

from src.catalogo.api.http.errors import ApiResponse, render_status

router = APIRouter(prefix="/errors", tags=["errors"])


@router.api_route(
    "/{code}",
    methods=["GET", "POST", "PUT", "DELETE"],
    response_model=ApiResponse,
    include_in_schema=False,
)
def error(code: int = Path(ge=100, le=599)) -> JSONResponse:
    return render_status(code)
