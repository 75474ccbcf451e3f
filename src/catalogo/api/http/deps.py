"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Query, Request, Response
from loguru import logger
from sqlmodel import Session

from src.catalogo.api.http.app_data import ApplicationDependencies
from src.catalogo.api.http.errors import ApiError
from src.catalogo.core.models.claims import TokenClaims
from src.catalogo.core.pagination import Params
from src.catalogo.core.services import JwtVerificationService
from src.catalogo.core.unit_of_work import UnitOfWork
from src.catalogo.runtime.context import get_config

SUPPORTED_VERSIONS_HEADER = "api-supported-versions"


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that lives for the current request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_unit_of_work(db: Session = Depends(get_db_session)) -> UnitOfWork:
    return UnitOfWork(db)


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.jwt_verify_service


async def get_current_claims(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> TokenClaims:
    """Authenticate the request using a Bearer token."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise ApiError(401, headers={"WWW-Authenticate": "Bearer"})

    token = auth_header.split(" ", 1)[1].strip()
    claims = await jwt_verify.verify_jwt(token)

    request.state.claims = claims
    request.state.roles = claims.roles
    return claims


def require_role(required_role: str):
    """Create a dependency that requires a specific role for the authenticated user."""

    async def dep(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if not claims.has_role(required_role):
            logger.bind(subject=claims.subject, roles=claims.roles).warning(
                "Missing required role: {}", required_role
            )
            raise ApiError(403)
        return claims

    return dep


def get_api_version(request: Request, response: Response) -> str:
    """Resolve the requested API version from the query string or header."""
    cfg = get_config().api_versioning
    supported = ", ".join(cfg.supported_versions)
    response.headers[SUPPORTED_VERSIONS_HEADER] = supported

    version = (
        request.query_params.get(cfg.query_parameter)
        or request.headers.get(cfg.header)
        or cfg.default_version
    ).strip()
    if version not in cfg.supported_versions:
        raise ApiError(
            400,
            f"La versión de API '{version}' no está soportada.",
            headers={SUPPORTED_VERSIONS_HEADER: supported},
        )
    return version


def get_params(
    page_index: int = Query(default=1, alias="pageIndex", ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1),
    search: str | None = Query(default=None, max_length=100),
) -> Params:
    """Bind paging query parameters, applying configured defaults."""
    values: dict = {"page_index": page_index, "search": search}
    if page_size is not None:
        values["page_size"] = page_size
    return Params(**values)
