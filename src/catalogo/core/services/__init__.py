"""Core services exports."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .jwt.jwt_gen import JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService

__all__ = [
    "DbManageService",
    "DbSessionService",
    "JwtGeneratorService",
    "JwtVerificationService",
]
