"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.catalogo.api.http.app_data import ApplicationDependencies
from src.catalogo.api.http.errors import (
    ApiError,
    ApiException,
    ApiValidation,
    exception_details,
    render_error,
    render_status,
    validation_messages,
)
from src.catalogo.api.http.routers import errors_router, health_router, productos_router
from src.catalogo.api.utils.app_startup import configure_logging
from src.catalogo.core.services import (
    DbManageService,
    DbSessionService,
    JwtVerificationService,
)
from src.catalogo.runtime.context import get_config

# Initialize logging
configure_logging()


# --- Lifecycle hooks ---
def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService()
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        jwt_verify_service=JwtVerificationService(),
    )

    manage = DbManageService(database_service.engine)
    if config.database.create_tables_on_startup:
        manage.create_all()
    if config.database.seed_on_startup:
        manage.seed()


def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup(app)
    try:
        yield
    finally:
        shutdown(app)


app = FastAPI(
    title="Catalogo API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

# --- CORS configuration ---
if get_config().app.environment == "production" and (
    "*" in get_config().app.cors.origins
):
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
    expose_headers=get_config().app.cors.expose_headers,
)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            # Store and programming errors end here, logged once with context
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                **exception_details(exc),
            ).exception("request.error")
            body = ApiException(
                details=None
                if get_config().app.environment == "production"
                else f"{type(exc).__name__}: {exc}"
            )
            return render_error(body, headers={"X-Request-ID": request_id})


# --- Exception handlers ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, ApiError):
        return render_status(exc.status_code, exc.message, headers=exc.headers)

    # Framework and token errors get the generic message for their status
    logger.bind(status_code=exc.status_code).debug("HTTP error: {}", exc.detail)
    return render_status(exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = validation_messages(exc)
    logger.bind(status_code=400, errors=errors).info("request.validation_error")
    return render_error(ApiValidation(errors=errors))


# --- Router registration ---
app.include_router(health_router)
app.include_router(errors_router)
app.include_router(productos_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
