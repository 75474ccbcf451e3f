"""Database initialization script."""

from src.catalogo.core.services import DbManageService, DbSessionService


def init_db(seed: bool = False) -> dict[str, int]:
    """Create all database tables, optionally seeding reference data."""
    database_service = DbSessionService()
    try:
        manage = DbManageService(database_service.engine)
        manage.create_all()
        return manage.seed() if seed else {}
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
