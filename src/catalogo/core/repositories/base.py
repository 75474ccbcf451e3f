"""Generic repository shared by every catalog entity."""

from typing import Any, ClassVar, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import Session, SQLModel, col, select


EntityT = TypeVar("EntityT", bound=BaseModel)
TableT = TypeVar("TableT", bound=SQLModel)


class Repository(Generic[EntityT, TableT]):
    """Data-access layer mapping table rows to domain entities.

    Mutations are only staged on the session. They become durable when the
    owning unit of work commits, at which point values assigned by the store
    are copied back onto the staged entities.
    """

    entity_type: ClassVar[type[BaseModel]]
    table_type: ClassVar[type[SQLModel]]
    search_column: ClassVar[str | None] = None
    server_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    def __init__(self, session: Session) -> None:
        self._session = session
        self._staged: list[tuple[EntityT, TableT]] = []

    def _select(self) -> Any:
        return select(self.table_type)

    def _to_entity(self, row: TableT) -> EntityT:
        return self.entity_type.model_validate(row, from_attributes=True)  # type: ignore[return-value]

    def _columns(self) -> set[str]:
        return set(self.table_type.model_fields)

    def _writable_data(self, entity: EntityT) -> dict[str, Any]:
        writable = (self._columns() & set(type(entity).model_fields)) - self.server_fields
        return entity.model_dump(include=writable)

    def _search_condition(self, search: str | None) -> Any:
        if not search or self.search_column is None:
            return None
        column = getattr(self.table_type, self.search_column)
        return col(column).icontains(search, autoescape=True)

    def get_by_id(self, entity_id: int) -> EntityT | None:
        statement = self._select().where(col(self.table_type.id) == entity_id)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def get_all(self) -> list[EntityT]:
        statement = self._select().order_by(col(self.table_type.id))
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def get_page(
        self, page_index: int, page_size: int, search: str | None = None
    ) -> tuple[int, list[EntityT]]:
        """Return ``(total matching rows, rows on the requested page)``.

        ``page_index`` is 1-based. Count and page are two separate queries
        that share the same filter and ordering.
        """
        if page_index < 1:
            raise ValueError("page_index must be >= 1")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")

        condition = self._search_condition(search)
        count_statement = select(func.count()).select_from(self.table_type)
        statement = self._select()
        if condition is not None:
            count_statement = count_statement.where(condition)
            statement = statement.where(condition)

        total = self._session.exec(count_statement).one()
        offset = (page_index - 1) * page_size
        if offset >= total:
            return total, []

        statement = (
            statement.order_by(col(self.table_type.id))
            .offset(offset)
            .limit(page_size)
        )
        rows = self._session.exec(statement).all()
        return total, [self._to_entity(row) for row in rows]

    def add(self, entity: EntityT) -> None:
        row = self.table_type.model_validate(self._writable_data(entity))
        self._session.add(row)
        self._staged.append((entity, row))  # type: ignore[arg-type]

    def update(self, entity: EntityT) -> None:
        row = self._session.get(self.table_type, entity.id)  # type: ignore[attr-defined]
        if row is None:
            raise ValueError(
                f"{self.entity_type.__name__} {entity.id} not found"  # type: ignore[attr-defined]
            )
        row.sqlmodel_update(self._writable_data(entity))
        self._session.add(row)
        self._staged.append((entity, row))  # type: ignore[arg-type]

    def remove(self, entity: EntityT) -> None:
        row = self._session.get(self.table_type, entity.id)  # type: ignore[attr-defined]
        if row is None:
            raise ValueError(
                f"{self.entity_type.__name__} {entity.id} not found"  # type: ignore[attr-defined]
            )
        self._session.delete(row)

    def sync_staged(self) -> None:
        """Copy store-assigned values from committed rows onto staged entities."""
        entity_fields = set(self.entity_type.model_fields)
        for entity, row in self._staged:
            self._session.refresh(row)
            for name in self._columns() & entity_fields:
                setattr(entity, name, getattr(row, name))
        if self._staged:
            logger.debug(
                "Synchronized {} staged {} row(s)",
                len(self._staged),
                self.entity_type.__name__,
            )
        self._staged.clear()

    def discard_staged(self) -> None:
        self._staged.clear()
