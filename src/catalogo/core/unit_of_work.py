"""Unit of work aggregating the catalog repositories over one session."""

from __future__ import annotations

from types import TracebackType

from loguru import logger
from sqlmodel import Session

from src.catalogo.core.repositories.base import Repository
from src.catalogo.entities.catalog.categoria import CategoriaRepository
from src.catalogo.entities.catalog.marca import MarcaRepository
from src.catalogo.entities.catalog.producto import ProductoRepository


class UnitOfWork:
    """Batches mutations staged through its repositories and commits them at once.

    One instance lives for exactly one request. Store failures raised by
    ``save`` are rolled back and re-raised unchanged.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._productos: ProductoRepository | None = None
        self._marcas: MarcaRepository | None = None
        self._categorias: CategoriaRepository | None = None

    @property
    def productos(self) -> ProductoRepository:
        if self._productos is None:
            self._productos = ProductoRepository(self._session)
        return self._productos

    @property
    def marcas(self) -> MarcaRepository:
        if self._marcas is None:
            self._marcas = MarcaRepository(self._session)
        return self._marcas

    @property
    def categorias(self) -> CategoriaRepository:
        if self._categorias is None:
            self._categorias = CategoriaRepository(self._session)
        return self._categorias

    def _repositories(self) -> list[Repository]:
        return [
            repo
            for repo in (self._productos, self._marcas, self._categorias)
            if repo is not None
        ]

    def save(self) -> None:
        """Commit every staged mutation atomically."""
        try:
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            for repo in self._repositories():
                repo.discard_staged()
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Unit of work commit failed")
            raise

        for repo in self._repositories():
            repo.sync_staged()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self._session.rollback()
        self.close()
