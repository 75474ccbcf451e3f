from dataclasses import dataclass

from src.catalogo.core.services import DbSessionService, JwtVerificationService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    jwt_verify_service: JwtVerificationService
