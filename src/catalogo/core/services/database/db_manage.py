"""Schema creation and reference-data seeding."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, func, select

DEFAULT_MARCAS = ("Genérica", "La Serenísima", "Bimbo", "Coca-Cola")
DEFAULT_CATEGORIAS = ("Lácteos", "Panadería", "Bebidas", "Almacén")


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        import src.catalogo.entities  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def seed(self) -> dict[str, int]:
        """Insert default brands and categories into empty reference tables.

        Tables that already hold rows are left alone, so seeding is safe to
        repeat. Returns the number of rows inserted per table.
        """
        from src.catalogo.entities import CategoriaTable, MarcaTable

        inserted = {"Marca": 0, "Categoria": 0}
        with Session(self._engine) as session:
            for table, names in (
                (MarcaTable, DEFAULT_MARCAS),
                (CategoriaTable, DEFAULT_CATEGORIAS),
            ):
                existing = session.exec(select(func.count()).select_from(table)).one()
                if existing:
                    logger.debug("{} already seeded ({} rows)", table.__tablename__, existing)
                    continue
                session.add_all(table(nombre=name) for name in names)
                inserted[table.__tablename__] = len(names)
            session.commit()

        logger.bind(**inserted).info("Reference data seeded")
        return inserted
