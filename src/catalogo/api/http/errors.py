"""Structured error envelopes returned by every failing request."""

from typing import Any

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from starlette.responses import JSONResponse

DEFAULT_MESSAGES: dict[int, str] = {
    400: "Has realizado una petición incorrecta.",
    401: "Usuario no autorizado.",
    403: "No tienes permisos para acceder a este recurso.",
    404: "El recurso que has intentado solicitar no existe.",
    405: "Este método HTTP no está permitido en el servidor.",
    500: "Error en el servidor. Comunícate con el administrador.",
}

PRODUCTO_NOT_FOUND = "El producto solicitado no existe"


def default_message(status_code: int) -> str | None:
    return DEFAULT_MESSAGES.get(status_code)


class ApiResponse(BaseModel):
    """``{"statusCode", "message"}``; a missing message falls back to the status default."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    message: str | None = None

    @model_validator(mode="after")
    def _fill_default_message(self) -> "ApiResponse":
        if self.message is None:
            self.message = default_message(self.status_code)
        return self


class ApiValidation(ApiResponse):
    status_code: int = 400
    errors: list[str] = []


class ApiException(ApiResponse):
    status_code: int = 500
    details: str | None = None


class ApiError(HTTPException):
    """HTTP error raised by handlers and dependencies with a user-facing message."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message


def render_error(
    body: ApiResponse, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=body.status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def render_status(
    status_code: int,
    message: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the plain envelope for ``status_code``.

    Shared by ``/errors/{code}`` and the handler for framework-level HTTP errors.
    """
    return render_error(
        ApiResponse(status_code=status_code, message=message), headers=headers
    )


def validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def exception_details(exc: BaseException) -> dict[str, Any]:
    return {"error_type": type(exc).__name__, "error_message": str(exc)}
